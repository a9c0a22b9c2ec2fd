# portal/core/security.py
"""
Security module for authentication.
Handles password hashing, session token creation/validation, and the
threadpool offloading of the deliberately slow hash operations.
"""
import datetime as dt
import jwt  # PyJWT
from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext
from pydantic import BaseModel

from portal.config import settings
from portal.core.errors import ConfigurationError, InvalidToken

# Password hashing context
# Argon2 is salted and memory-hard; rounds is the time cost work factor
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__rounds=settings.password_hash_rounds,
)


class SessionClaims(BaseModel):
    """Identity carried by a verified session token."""
    user_id: str
    username: str


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    The comparison is done by passlib in constant time. Malformed or
    unknown hashes count as a mismatch.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False

def dummy_verify() -> None:
    """Spend the same time as a real verification when there is no user."""
    pwd_context.dummy_verify()

async def hash_password_async(plain: str) -> str:
    return await run_in_threadpool(hash_password, plain)

async def verify_password_async(plain: str, hashed: str) -> bool:
    return await run_in_threadpool(verify_password, plain, hashed)

async def dummy_verify_async() -> None:
    await run_in_threadpool(dummy_verify)


def _require_secret() -> str:
    secret = settings.jwt_secret
    if not secret:
        raise ConfigurationError("JWT_SECRET is not configured")
    return secret

def create_access_token(user_id: str, username: str, *, now: dt.datetime | None = None) -> str:
    """
    Create a signed session token.

    Args:
        user_id: Unique user identifier (UUID string)
        username: Display name at issuance time
        now: Issuance instant, defaults to the current UTC time

    Returns:
        Encoded JWT token string

    Token payload includes:
        - userId: user identity
        - username: username at issuance
        - iat: Issued at timestamp
        - exp: Expiration timestamp (iat + SESSION_TTL_HOURS)

    Raises:
        ConfigurationError: If no signing secret is configured
    """
    secret = _require_secret()
    now = now or dt.datetime.now(dt.timezone.utc)
    payload = {
        "userId": str(user_id),
        "username": username,
        "iat": now,
        "exp": now + dt.timedelta(hours=settings.session_ttl_hours),
    }
    return jwt.encode(payload, secret, algorithm=settings.jwt_alg)

def decode_access_token(token: str) -> SessionClaims:
    """
    Verify a session token and return its identity claims.

    Raises:
        ConfigurationError: If no signing secret is configured
        InvalidToken: If the signature does not match, the token is
            malformed or missing claims, or it has expired
    """
    secret = _require_secret()
    if not token or not isinstance(token, str):
        raise InvalidToken()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.jwt_alg],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc

    user_id = payload.get("userId")
    username = payload.get("username")
    if not isinstance(user_id, str) or not isinstance(username, str):
        raise InvalidToken("token is missing identity claims")
    return SessionClaims(user_id=user_id, username=username)
