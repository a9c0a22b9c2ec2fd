# portal/api/routers/auth.py
from typing import Any
from fastapi import APIRouter, Body, Depends, Response, status

from portal.api.deps import api_require, api_reverse, clear_auth_cookie, get_store, set_auth_cookie
from portal.core.db import UserStore
from portal.core.errors import InvalidToken
from portal.core.security import SessionClaims
from portal.schemas.auth import RegisterIn
from portal.services.accounts import create_user, login_user

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login")
async def login(
    response: Response,
    payload: Any = Body(default=None),
    store: UserStore = Depends(get_store),
):
    """
    Authenticate a user and issue the session cookie.

    The body is taken as-is: anything that is not a JSON object (array,
    string, missing body) falls through to the generic credentials failure.

    Returns:
        200 {username, preferences} with the `auth` cookie set, or
        401 {error} with the generic invalid-credentials message
    """
    credentials = payload if isinstance(payload, dict) else {}
    result = await login_user(store, credentials.get("username"), credentials.get("password"))
    if not result.passed:
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return {"error": result.message}

    set_auth_cookie(response, result.token)
    return {"username": result.username, "preferences": result.preferences}


@router.post("/user", status_code=status.HTTP_201_CREATED, dependencies=[Depends(api_reverse)])
async def register(body: RegisterIn, response: Response, store: UserStore = Depends(get_store)):
    """
    Create a new account and log it in.

    Registration itself does not mint a token; the new user is logged in
    with the submitted credentials right after the insert.

    Returns:
        201 {userId, username, preferences} with the `auth` cookie set, or
        400 {error} with the first validation message or the conflict message
    """
    created = await create_user(store, body.username, body.password, body.email, body.preferences)
    if not created.passed:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return {"error": created.message}

    login = await login_user(store, body.username, body.password)
    if not login.passed:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return {"error": "Unable to login newly created user"}

    set_auth_cookie(response, login.token)
    return {"userId": created.user_id, "username": login.username, "preferences": login.preferences}


@router.get("/me")
async def me(
    response: Response,
    session: SessionClaims = Depends(api_require),
    store: UserStore = Depends(get_store),
):
    """
    Return the current user's public data.

    The record is looked up by the identity in the token, so a renamed user
    keeps working with a token issued before the rename.
    """
    user = await store.find_one(id=session.user_id)
    if user is None:
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return {"error": InvalidToken.public_message}
    return {"username": user.username, "preferences": user.public_preferences()}


@router.post("/logout")
async def logout(response: Response):
    """
    Clear the session cookie.

    Note:
        The token itself stays valid until it expires; only the cookie is
        removed from the client.
    """
    clear_auth_cookie(response)
    return {"ok": True, "username": None, "preferences": None}
