# portal/api/deps.py
"""
FastAPI dependencies: store access, session cookie helpers and the access
guard suite.

The four guards are instances of one policy class. A guard reads the `auth`
cookie, verifies it, and then either returns the session (proceed) or
raises `GuardInterrupt`, which the exception handler turns into a JSON
rejection or a redirect. An invalid token always clears the cookie exactly
once: on the dependency response when the request proceeds, on the
interrupt response otherwise.
"""
import logging
from enum import Enum
from fastapi import Request, Response, status

from portal.config import settings
from portal.core.db import UserStore
from portal.core.errors import ConfigurationError, InvalidToken
from portal.core.security import SessionClaims, decode_access_token

logger = logging.getLogger("uvicorn.error")

LOGIN_PATH = "/login"
HOME_PATH = "/"


def get_store(request: Request) -> UserStore:
    """Store adapter created at startup and attached to the app state."""
    return request.app.state.store


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )

def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.auth_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


class OnFail(str, Enum):
    """What a require-guard does when there is no valid session."""
    REJECT = "reject"
    REDIRECT = "redirect"


class WhenAuthed(str, Enum):
    """What a guard does when the caller already holds a valid session."""
    PROCEED = "proceed"
    REJECT = "reject"
    REDIRECT = "redirect"


class GuardInterrupt(Exception):
    """
    Raised by a guard to stop the request before the handler runs.

    Rendered by the exception handler as `{"error": detail}` with
    `status_code`, or as a 302 to `location` when one is set.
    """

    def __init__(
        self,
        *,
        status_code: int = status.HTTP_401_UNAUTHORIZED,
        detail: str = "Unauthorized",
        location: str | None = None,
        clear_cookie: bool = False,
    ):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.location = location
        self.clear_cookie = clear_cookie


class AuthGuard:
    """
    Parametrized route guard.

    Args:
        require_auth: A valid session is needed to reach the handler
        on_fail: Reject (401 JSON) or redirect to the login page when a
            required session is missing or invalid
        when_authed: Proceed, reject (400 "Already logged in") or redirect
            home when the caller holds a valid session

    Returns (as a dependency):
        SessionClaims when a valid session is present, otherwise None
    """

    def __init__(
        self,
        *,
        require_auth: bool,
        on_fail: OnFail = OnFail.REJECT,
        when_authed: WhenAuthed = WhenAuthed.PROCEED,
        login_path: str = LOGIN_PATH,
        home_path: str = HOME_PATH,
    ):
        self.require_auth = require_auth
        self.on_fail = on_fail
        self.when_authed = when_authed
        self.login_path = login_path
        self.home_path = home_path

    def _fail(self, clear_cookie: bool) -> GuardInterrupt:
        if self.on_fail is OnFail.REDIRECT:
            return GuardInterrupt(location=self.login_path, clear_cookie=clear_cookie)
        return GuardInterrupt(clear_cookie=clear_cookie)

    async def __call__(self, request: Request, response: Response) -> SessionClaims | None:
        token = request.cookies.get(settings.auth_cookie_name)

        if not settings.jwt_secret:
            if self.require_auth:
                logger.error("[guard] JWT_SECRET missing, refusing %s", request.url.path)
                raise ConfigurationError()
            # Nothing can be valid without a secret; treat as anonymous
            return None

        session = None
        stale = False
        if token:
            try:
                session = decode_access_token(token)
            except InvalidToken:
                stale = True

        if session is None:
            if self.require_auth:
                raise self._fail(clear_cookie=stale)
            if stale:
                clear_auth_cookie(response)
            return None

        if self.when_authed is WhenAuthed.REJECT:
            raise GuardInterrupt(status_code=status.HTTP_400_BAD_REQUEST, detail="Already logged in")
        if self.when_authed is WhenAuthed.REDIRECT:
            raise GuardInterrupt(location=self.home_path)

        request.state.user = session
        return session


# Protected API: 401 without a valid session
api_require = AuthGuard(require_auth=True, on_fail=OnFail.REJECT, when_authed=WhenAuthed.PROCEED)
# API for anonymous callers only (e.g. signup)
api_reverse = AuthGuard(require_auth=False, on_fail=OnFail.REJECT, when_authed=WhenAuthed.REJECT)
# Protected page: redirect to the login page
page_require = AuthGuard(require_auth=True, on_fail=OnFail.REDIRECT, when_authed=WhenAuthed.PROCEED)
# Anonymous-only page (login, signup): redirect home when logged in
page_reverse = AuthGuard(require_auth=False, on_fail=OnFail.REDIRECT, when_authed=WhenAuthed.REDIRECT)
