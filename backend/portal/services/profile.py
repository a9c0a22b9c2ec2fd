# portal/services/profile.py
"""
Preference and profile mutations for an authenticated user.

Two shapes are kept distinct:
- replace_preferences: the whole preferences object is replaced
- update_profile: username and/or preferences, each applied only when
  present and well typed; a rename re-issues the session token

Both address the record by stored identity. Tokens issued before a rename
stay valid until they expire (there is no revocation list).
"""
import logging
from typing import Any
from pydantic import BaseModel, Field

from portal.core.db import UserStore
from portal.core.errors import ConflictError
from portal.core.security import create_access_token
from portal.services.accounts import MIN_USERNAME_LENGTH, normalize_username

logger = logging.getLogger(__name__)

INVALID_PREFERENCES = "Invalid preferences format"


class ProfileResult(BaseModel):
    passed: bool
    message: str | None = None
    status_code: int = 200
    username: str | None = None
    preferences: dict[str, Any] = Field(default_factory=dict)
    # Set only when the username changed
    token: str | None = None


async def replace_preferences(store: UserStore, user_id: str, preferences: Any) -> ProfileResult:
    if not isinstance(preferences, dict):
        return ProfileResult(passed=False, status_code=400, message=INVALID_PREFERENCES)

    updated = await store.update_one({"id": user_id}, {"preferences": preferences})
    if not updated:
        return ProfileResult(passed=False, status_code=401, message="Unauthorized")
    return ProfileResult(passed=True, message="Preferences updated successfully", preferences=preferences)


async def update_profile(
    store: UserStore,
    user_id: str,
    username: Any = None,
    preferences: Any = None,
) -> ProfileResult:
    """
    Partial update with optional rename.

    Ill-typed or too short values are ignored rather than rejected. A
    username that collides with another account fails with the generic
    conflict message and nothing is written.
    """
    user = await store.find_one(id=user_id)
    if user is None:
        return ProfileResult(passed=False, status_code=401, message="Unauthorized")

    changes: dict[str, Any] = {}
    if isinstance(username, str):
        new_username = normalize_username(username)
        if len(new_username) >= MIN_USERNAME_LENGTH and new_username != user.username:
            changes["username"] = new_username
    if isinstance(preferences, dict):
        changes["preferences"] = preferences

    if not changes:
        return ProfileResult(
            passed=True,
            message="No changes applied",
            username=user.username,
            preferences=user.public_preferences(),
        )

    new_username = changes.get("username", user.username)
    token = None
    if "username" in changes:
        # Sign before writing so a missing secret leaves the record untouched
        token = create_access_token(str(user.id), new_username)

    try:
        await store.update_one({"id": user_id}, changes)
    except ConflictError as exc:
        return ProfileResult(passed=False, status_code=400, message=exc.message)

    if token:
        logger.info("[profile] user_id=%s renamed", user.id)

    return ProfileResult(
        passed=True,
        message="Profile updated successfully",
        username=new_username,
        preferences=changes.get("preferences", user.public_preferences()),
        token=token,
    )
