import uuid

import pytest

from portal.core.security import decode_access_token
from portal.models.user import User


pytestmark = pytest.mark.asyncio


async def signup(client, preferences=None) -> dict:
    username = f"user_{uuid.uuid4().hex[:6]}"
    payload = {"username": username, "email": f"{username}@example.com", "password": "StrongPass!23"}
    if preferences is not None:
        payload["preferences"] = preferences
    resp = await client.post("/api/user", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json() | {"token": resp.cookies["auth"]}


async def test_preferences_replace(client):
    account = await signup(client, preferences={"team": "sea", "theme": "dark"})
    resp = await client.post("/api/preferences", json={"preferences": {"team": "bos"}})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Preferences updated successfully"}

    me = await client.get("/api/me")
    assert me.json()["preferences"] == {"team": "bos"}
    stored = await User.get(id=account["userId"])
    assert stored.preferences == {"team": "bos"}


@pytest.mark.parametrize("body", [{"preferences": "bos"}, {"preferences": ["bos"]}, {"preferences": None}, {}])
async def test_preferences_non_object_is_rejected(client, body):
    account = await signup(client, preferences={"team": "sea"})
    resp = await client.post("/api/preferences", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid preferences format"}
    stored = await User.get(id=account["userId"])
    assert stored.preferences == {"team": "sea"}


async def test_preferences_requires_session(client):
    resp = await client.post("/api/preferences", json={"preferences": {"team": "bos"}})
    assert resp.status_code == 401


async def test_profile_rename_reissues_cookie(client):
    account = await signup(client)
    old_token = account["token"]

    resp = await client.post("/api/profile", json={"username": "Renamed_User", "preferences": {"team": "ari"}})
    body = resp.json()
    assert resp.status_code == 200
    assert body == {
        "message": "Profile updated successfully",
        "username": "renamed_user",
        "preferences": {"team": "ari"},
    }
    new_claims = decode_access_token(resp.cookies["auth"])
    assert new_claims.username == "renamed_user"
    assert new_claims.user_id == account["userId"]

    # Current behavior: the pre-rename token is not revoked
    old_claims = decode_access_token(old_token)
    assert old_claims.username == account["username"]
    me = await client.get("/api/me", headers={"Cookie": f"auth={old_token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "renamed_user"


async def test_profile_preferences_only_does_not_touch_cookie(client):
    await signup(client)
    resp = await client.post("/api/profile", json={"preferences": {"team": "chi"}})
    assert resp.status_code == 200
    assert resp.json()["preferences"] == {"team": "chi"}
    assert "set-cookie" not in resp.headers


async def test_profile_rename_collision(client):
    first = await signup(client)
    client.cookies.clear()
    await signup(client)
    resp = await client.post("/api/profile", json={"username": first["username"]})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Username or email already exists"}
