import datetime as dt

import jwt
import pytest
from passlib.hash import pbkdf2_sha256

from accounts_api.core.errors import Forbidden, InvalidToken
from accounts_api.core.settings import settings
from accounts_api.security.deps import require_role
from accounts_api.security.jwt_tokens import TokenClaims, issue_token, verify_token
from accounts_api.security.passwords import hash_password, verify_and_rehash, verify_password


def _encode(payload: dict, secret: str = None) -> str:
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def test_password_hash_is_salted_and_verifies():
    first = hash_password("password123")
    second = hash_password("password123")

    assert first != "password123"
    assert first != second
    assert verify_password("password123", first)
    assert verify_password("password123", second)
    assert not verify_password("password124", first)


def test_verify_password_rejects_unknown_hash_format():
    assert verify_password("password123", "not-a-hash") is False


def test_weak_hash_is_replaced_on_verify():
    weak = pbkdf2_sha256.using(rounds=1000).hash("password123")

    matches, new_hash = verify_and_rehash("password123", weak)
    assert matches
    assert new_hash is not None and new_hash != weak
    assert verify_password("password123", new_hash)

    assert verify_and_rehash("password123", new_hash) == (True, None)
    assert verify_and_rehash("wrong-password", weak) == (False, None)


def test_issued_token_carries_identity_claims():
    claims = TokenClaims(id=7, email="john@example.com", role="admin")
    token = issue_token(claims)

    raw = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    assert raw["sub"] == "7"
    assert raw["exp"] - raw["iat"] == settings.token_expires_minutes * 60

    assert verify_token(token) == claims


def test_expired_token_is_rejected():
    past = dt.datetime.now(tz=dt.timezone.utc) - dt.timedelta(minutes=1)
    token = _encode({"sub": "1", "email": "john@example.com", "role": "user", "exp": past})

    with pytest.raises(InvalidToken) as excinfo:
        verify_token(token)
    assert "expired" in excinfo.value.message


def test_token_signed_with_another_secret_is_rejected():
    future = dt.datetime.now(tz=dt.timezone.utc) + dt.timedelta(minutes=5)
    token = _encode({"sub": "1", "email": "john@example.com", "role": "user", "exp": future}, secret="other")

    with pytest.raises(InvalidToken):
        verify_token(token)


def test_tampered_token_is_rejected():
    token = issue_token(TokenClaims(id=1, email="john@example.com", role="user"))
    header, payload, signature = token.split(".")
    forged = _encode({"sub": "1", "email": "john@example.com", "role": "admin"}).split(".")[1]

    with pytest.raises(InvalidToken):
        verify_token(".".join([header, forged, signature]))


def test_token_with_missing_or_unknown_claims_is_rejected():
    future = dt.datetime.now(tz=dt.timezone.utc) + dt.timedelta(minutes=5)

    with pytest.raises(InvalidToken):
        verify_token(_encode({"sub": "1", "email": "john@example.com", "exp": future}))
    with pytest.raises(InvalidToken):
        verify_token(_encode({"sub": "1", "email": "john@example.com", "role": "root", "exp": future}))
    with pytest.raises(InvalidToken):
        verify_token(_encode({"email": "john@example.com", "role": "user", "exp": future}))


def test_require_role_guard():
    admin_only = require_role("admin")
    admin = TokenClaims(id=1, email="admin@example.com", role="admin")
    user = TokenClaims(id=2, email="john@example.com", role="user")

    assert admin_only(claims=admin) is admin
    with pytest.raises(Forbidden):
        admin_only(claims=user)

    assert require_role("user", "admin")(claims=user) is user
