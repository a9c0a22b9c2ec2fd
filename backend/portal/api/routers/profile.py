# portal/api/routers/profile.py
from fastapi import APIRouter, Depends, Response

from portal.api.deps import api_require, get_store, set_auth_cookie
from portal.core.db import UserStore
from portal.core.security import SessionClaims
from portal.schemas.profile import PreferencesIn, ProfileUpdateIn
from portal.services.profile import replace_preferences, update_profile

router = APIRouter(prefix="/api", tags=["profile"])


@router.post("/preferences")
async def set_preferences(
    body: PreferencesIn,
    response: Response,
    session: SessionClaims = Depends(api_require),
    store: UserStore = Depends(get_store),
):
    """Replace the stored preferences wholesale. Non-object input is a 400."""
    result = await replace_preferences(store, session.user_id, body.preferences)
    if not result.passed:
        response.status_code = result.status_code
        return {"error": result.message}
    return {"message": result.message}


@router.post("/profile")
async def update_me(
    body: ProfileUpdateIn,
    response: Response,
    session: SessionClaims = Depends(api_require),
    store: UserStore = Depends(get_store),
):
    """
    Update username and/or preferences.

    When the username changes a new `auth` cookie is issued. The previous
    token still verifies until its own expiry.
    """
    result = await update_profile(store, session.user_id, body.username, body.preferences)
    if not result.passed:
        response.status_code = result.status_code
        return {"error": result.message}

    if result.token:
        set_auth_cookie(response, result.token)
    return {"message": result.message, "username": result.username, "preferences": result.preferences}
