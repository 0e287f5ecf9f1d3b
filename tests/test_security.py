# File: tests/test_security.py

import pytest
from jose import JWTError

from user_api.core.security import PasswordHasher, TokenService


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_is_salted(hasher):
    first = hasher.hash("secret1")
    second = hasher.hash("secret1")
    assert first != second
    assert hasher.verify("secret1", first)
    assert hasher.verify("secret1", second)


def test_verify_rejects_other_password(hasher):
    hashed = hasher.hash("secret1")
    assert not hasher.verify("secret2", hashed)
    assert not hasher.verify("", hashed)


def test_verify_malformed_hash_is_false(hasher):
    assert hasher.verify("secret1", "not-a-bcrypt-hash") is False


def test_default_cost_factor():
    hashed = PasswordHasher().hash("secret1")
    assert hashed.startswith("$2b$10$")


def test_long_passwords_are_truncated_consistently(hasher):
    long_password = "x" * 100
    hashed = hasher.hash(long_password)
    assert hasher.verify(long_password, hashed)
    assert hasher.verify("x" * 72, hashed)


def test_token_roundtrip():
    tokens = TokenService("s3cret")
    token = tokens.create_access_token({"sub": "7", "email": "a@x.com", "role": "admin"})
    claims = tokens.decode_access_token(token)
    assert claims["sub"] == "7"
    assert claims["role"] == "admin"
    assert claims["exp"] - claims["iat"] == 60 * 60


def test_token_with_wrong_secret_fails():
    token = TokenService("one").create_access_token({"sub": "1"})
    with pytest.raises(JWTError):
        TokenService("two").decode_access_token(token)
