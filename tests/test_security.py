from datetime import timedelta

import pytest

from nepstay.core.exceptions import InvalidTokenError, TokenExpiredError
from nepstay.core.security import JWTManager, PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_and_verify(hasher):
    hashed = hasher.hash("SecurePassword123!")
    assert hashed.startswith("$2")
    assert hasher.verify("SecurePassword123!", hashed)
    assert not hasher.verify("securepassword123!", hashed)


def test_rejects_passwords_bcrypt_would_truncate(hasher):
    with pytest.raises(ValueError):
        hasher.hash("x" * 73)
    assert not hasher.verify("x" * 73, hasher.hash("x" * 72))


def test_empty_input_never_matches(hasher):
    assert not hasher.verify("", hasher.hash("something"))
    assert not hasher.verify("something", "")


def test_rounds_are_bounded():
    with pytest.raises(ValueError):
        PasswordHasher(rounds=3)


def test_token_round_trip():
    manager = JWTManager("test-secret")
    payload = manager.decode_token(manager.create_token("65f0c0ffee0000000000abcd"))
    assert payload["id"] == "65f0c0ffee0000000000abcd"
    assert payload["exp"] > payload["iat"]


def test_expired_token():
    manager = JWTManager("test-secret")
    token = manager.create_token("abc", expires_delta=timedelta(seconds=-5))
    with pytest.raises(TokenExpiredError):
        manager.decode_token(token)


def test_token_signed_with_other_secret():
    token = JWTManager("other-secret").create_token("abc")
    with pytest.raises(InvalidTokenError):
        JWTManager("test-secret").decode_token(token)


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        JWTManager("")
