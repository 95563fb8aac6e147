"""Unit tests for auth/tokens.py -- password hashing and JWT handling.

Covers:
- bcrypt hash/verify round trip and malformed-hash handling
- create_access_token() claims and default one-hour window
- decode_access_token() rejects tampered, expired, wrong-key and non-numeric-sub tokens
- authenticate_user() success, wrong password, unknown email, case-insensitive email
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from auth.models import User
from auth.tokens import (
    ALGORITHM,
    _settings,
    authenticate_user,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def _encode(payload: dict, key: str = "") -> str:
    return jwt.encode(payload, key or _settings.secret_key, algorithm=ALGORITHM)


class TestPasswordHashing:
    def test_round_trip(self) -> None:
        hashed = hash_password("correct horse")
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_malformed_hash_is_rejected_not_raised(self) -> None:
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestAccessTokens:
    def test_claims(self) -> None:
        token = create_access_token(42, "admin")
        payload = decode_access_token(token)
        assert payload is not None
        assert payload["sub"] == "42"
        assert payload["role"] == "admin"
        assert payload["exp"] - payload["iat"] == _settings.token_expire_seconds

    def test_custom_expiry(self) -> None:
        payload = decode_access_token(create_access_token(1, "user", expire_seconds=60))
        assert payload is not None
        assert payload["exp"] - payload["iat"] == 60

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = _encode({"sub": "1", "role": "admin", "iat": past, "exp": past + timedelta(hours=1)})
        assert decode_access_token(token) is None

    def test_wrong_key_rejected(self) -> None:
        now = datetime.now(timezone.utc)
        token = _encode({"sub": "1", "iat": now, "exp": now + timedelta(hours=1)}, key="x" * 64)
        assert decode_access_token(token) is None

    def test_tampered_token_rejected(self) -> None:
        token = create_access_token(1, "user")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")])
        assert decode_access_token(tampered) is None

    def test_non_numeric_sub_rejected(self) -> None:
        now = datetime.now(timezone.utc)
        token = _encode({"sub": "admin", "iat": now, "exp": now + timedelta(hours=1)})
        assert decode_access_token(token) is None

    def test_garbage_rejected(self) -> None:
        assert decode_access_token("not.a.jwt") is None
        assert decode_access_token("") is None


class TestAuthenticateUser:
    def test_success_and_failures(self, user_store) -> None:
        user_store.create_user(User(email="Owner@Example.com", name="Owner", hashed_password=hash_password("s3cret-pass")))

        user = authenticate_user(user_store, "owner@example.com", "s3cret-pass")
        assert user is not None
        assert user.email == "owner@example.com"

        assert authenticate_user(user_store, "OWNER@example.com", "s3cret-pass") is not None
        assert authenticate_user(user_store, "owner@example.com", "wrong") is None
        assert authenticate_user(user_store, "nobody@example.com", "s3cret-pass") is None
