"""
Unit tests for core.security module.
Tests password hashing and session token creation/validation.
"""
import datetime as dt

import jwt
import pytest

from portal.config import settings
from portal.core.errors import ConfigurationError, InvalidToken
from portal.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_different_hash_each_time(self):
        """Password hashing should produce different hashes (salt included)."""
        password = "TestPassword123"
        assert hash_password(password) != hash_password(password)

    def test_hash_is_not_plain_text(self):
        hashed = hash_password("TestPassword123")
        assert isinstance(hashed, str)
        assert hashed != "TestPassword123"
        assert hashed.startswith("$argon2")

    def test_verify_password_correct_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("TestPassword123", hashed) is True

    def test_verify_password_incorrect_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("WrongPassword456", hashed) is False

    def test_verify_password_malformed_hash(self):
        """A corrupted stored hash counts as a mismatch, not a crash."""
        assert verify_password("whatever", "not-a-hash") is False


class TestSessionTokens:
    """Tests for session token signing and verification."""

    def test_round_trip_identity(self):
        token = create_access_token("user-123", "alice")
        claims = decode_access_token(token)
        assert claims.user_id == "user-123"
        assert claims.username == "alice"

    def test_token_expires_after_session_ttl(self):
        token = create_access_token("user-123", "alice")
        payload = jwt.decode(token, options={"verify_signature": False})
        assert payload["exp"] - payload["iat"] == settings.session_ttl_hours * 3600
        assert settings.session_ttl_hours == 24

    def test_expired_token_is_rejected(self):
        issued = dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=3)
        token = create_access_token("user-123", "alice", now=issued)
        with pytest.raises(InvalidToken):
            decode_access_token(token)

    def test_token_just_inside_window_is_accepted(self):
        issued = dt.datetime.now(dt.timezone.utc) - dt.timedelta(hours=23)
        token = create_access_token("user-123", "alice", now=issued)
        assert decode_access_token(token).username == "alice"

    def test_tampered_signature_is_rejected(self):
        token = create_access_token("user-123", "alice")
        head, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        with pytest.raises(InvalidToken):
            decode_access_token(".".join([head, payload, flipped]))

    def test_tampered_payload_is_rejected(self):
        token = create_access_token("user-123", "alice")
        forged = jwt.encode({"userId": "user-999", "username": "mallory"}, "other-secret", algorithm="HS256")
        head, _, signature = token.split(".")
        with pytest.raises(InvalidToken):
            decode_access_token(".".join([head, forged.split(".")[1], signature]))

    def test_wrong_secret_is_rejected(self, monkeypatch):
        token = create_access_token("user-123", "alice")
        monkeypatch.setattr(settings, "jwt_secret", "rotated-secret")
        with pytest.raises(InvalidToken):
            decode_access_token(token)

    @pytest.mark.parametrize("token", ["", "invalid.token.here", "a.b", "garbage"])
    def test_malformed_token_is_rejected(self, token):
        with pytest.raises(InvalidToken):
            decode_access_token(token)

    def test_token_without_identity_claims_is_rejected(self):
        now = dt.datetime.now(dt.timezone.utc)
        token = jwt.encode(
            {"sub": "user-123", "iat": now, "exp": now + dt.timedelta(hours=1)},
            settings.jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            decode_access_token(token)

    def test_missing_secret_fails_signing(self, monkeypatch):
        monkeypatch.setattr(settings, "jwt_secret", None)
        with pytest.raises(ConfigurationError):
            create_access_token("user-123", "alice")

    def test_missing_secret_fails_verification(self, monkeypatch):
        token = create_access_token("user-123", "alice")
        monkeypatch.setattr(settings, "jwt_secret", None)
        with pytest.raises(ConfigurationError):
            decode_access_token(token)
