# portal/api/routers/pages.py
"""
Page routes. Each gated page applies its guard before the file is served;
extension-qualified aliases redirect to the canonical path so they go
through the same guard.
"""
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import FileResponse, RedirectResponse

from portal.api.deps import (
    HOME_PATH,
    LOGIN_PATH,
    clear_auth_cookie,
    get_store,
    page_require,
    page_reverse,
)
from portal.config import settings
from portal.core.db import UserStore
from portal.core.security import SessionClaims

router = APIRouter(tags=["pages"])

PAGE_ALIASES = {
    "/index.html": HOME_PATH,
    "/login.html": LOGIN_PATH,
    "/signup.html": "/signup",
    "/user.html": "/signup",
    "/pref.html": "/pref",
}


def page_path(name: str) -> str:
    return str(settings.pages_dir / name)


@router.get("/", response_class=FileResponse)
async def home():
    return page_path("index.html")


@router.get("/login", response_class=FileResponse, dependencies=[Depends(page_reverse)])
async def login_page():
    return page_path("login.html")


@router.get("/signup", response_class=FileResponse, dependencies=[Depends(page_reverse)])
async def signup_page():
    return page_path("signup.html")


@router.get("/pref", response_class=FileResponse)
async def pref_page(
    session: SessionClaims = Depends(page_require),
    store: UserStore = Depends(get_store),
):
    """Team picker, only for logged-in users that have not chosen a team yet."""
    user = await store.find_one(id=session.user_id)
    if user is None or user.public_preferences().get("team"):
        return RedirectResponse(url=HOME_PATH, status_code=status.HTTP_302_FOUND)
    return page_path("pref.html")


@router.get("/logout")
async def logout_page(request: Request, response: Response):
    """
    Clear the session cookie.

    Browser navigations (Accept: text/html) are redirected to the login
    page, everything else gets the JSON logout payload.
    """
    accept = request.headers.get("accept", "")
    if accept.strip().startswith("text/html"):
        redirect = RedirectResponse(url=LOGIN_PATH, status_code=status.HTTP_302_FOUND)
        clear_auth_cookie(redirect)
        return redirect
    clear_auth_cookie(response)
    return {"ok": True, "username": None, "preferences": None}


def _alias(target: str):
    async def redirect_to_canonical():
        return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
    return redirect_to_canonical


for alias, target in PAGE_ALIASES.items():
    router.add_api_route(alias, _alias(target), methods=["GET"], include_in_schema=False)
