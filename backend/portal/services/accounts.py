# portal/services/accounts.py
"""
Account services: credential verification (login) and registration.

Both return result objects instead of raising for expected failures, so the
routers decide the status code. Store failures and missing configuration
still raise.
"""
import datetime as dt
import logging
import re
from typing import Any
from pydantic import BaseModel, Field

from portal.core.db import UserStore
from portal.core.errors import ConflictError, InvalidCredentials
from portal.core.security import (
    create_access_token,
    dummy_verify_async,
    hash_password_async,
    verify_password_async,
)

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


class LoginResult(BaseModel):
    passed: bool
    message: str | None = None
    token: str | None = None
    user_id: str | None = None
    username: str | None = None
    preferences: dict[str, Any] = Field(default_factory=dict)


class RegistrationResult(BaseModel):
    passed: bool
    message: str | None = None
    user_id: str | None = None


def normalize_username(username: str) -> str:
    return username.strip().lower()


def _login_failure() -> LoginResult:
    # Same message for every failure so callers cannot enumerate accounts
    return LoginResult(passed=False, message=InvalidCredentials.public_message)


async def login_user(store: UserStore, username: Any, password: Any) -> LoginResult:
    """
    Verify a username/password pair and issue a session token.

    Args:
        store: User store adapter
        username: Submitted username (must be a string)
        password: Submitted password (must be a string)

    Returns:
        LoginResult with the token and the user's preferences on success,
        or passed=False with the generic invalid-credentials message.

    Raises:
        ConfigurationError: If the session secret is missing
        StoreError: If the store lookup fails
    """
    if not isinstance(username, str) or not isinstance(password, str):
        return _login_failure()

    user = await store.find_one(username=normalize_username(username))
    if user is None:
        # Keep timing close to the wrong-password path
        await dummy_verify_async()
        return _login_failure()

    if not await verify_password_async(password, user.password_hash):
        return _login_failure()

    token = create_access_token(str(user.id), user.username)
    logger.info("[auth] login ok user_id=%s", user.id)
    return LoginResult(
        passed=True,
        token=token,
        user_id=str(user.id),
        username=user.username,
        preferences=user.public_preferences(),
    )


def validate_registration(username: Any, password: Any, email: Any, preferences: Any = None) -> str | None:
    """Return the message of the first failing rule, or None when valid."""
    if not isinstance(username, str) or len(normalize_username(username)) < MIN_USERNAME_LENGTH:
        return "Username must be at least 3 characters long."
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return "Password must be at least 6 characters long."
    if not isinstance(email, str) or not EMAIL_RE.match(email):
        return "Invalid email address."
    if preferences is not None and not isinstance(preferences, dict):
        return "Invalid preferences format"
    return None


async def create_user(
    store: UserStore,
    username: Any,
    password: Any,
    email: Any,
    preferences: Any = None,
) -> RegistrationResult:
    """
    Validate and persist a new account.

    The password is hashed (off the event loop) before storage; the username
    is trimmed, and username and email are stored lowercase, so the stored
    name is exactly what login looks up. No token is minted here: callers
    log the new user in to obtain one.

    Returns:
        RegistrationResult with the new user id, or passed=False with the
        first validation message or the generic conflict message.

    Raises:
        StoreError: On store failures other than a uniqueness violation
    """
    message = validate_registration(username, password, email, preferences)
    if message:
        return RegistrationResult(passed=False, message=message)

    record = {
        "username": normalize_username(username),
        "email": email.lower(),
        "password_hash": await hash_password_async(password),
        "preferences": preferences or {},
        "created_at": dt.datetime.now(dt.timezone.utc),
    }
    try:
        user = await store.insert_one(record)
    except ConflictError as exc:
        # Do not reveal which field collided
        return RegistrationResult(passed=False, message=exc.message)

    logger.info("[auth] registered user_id=%s", user.id)
    return RegistrationResult(passed=True, user_id=str(user.id))
