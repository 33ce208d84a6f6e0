from datetime import timedelta

import pytest
from jose import JWTError
from pydantic import ValidationError

from lms.core.config import Settings
from lms.core.security import create_access_token, decode_access_token, hash_password, verify_password


def test_password_hashing():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


def test_token_round_trip():
    token = create_access_token("user-1", "student")
    payload = decode_access_token(token)
    assert payload["sub"] == "user-1"
    assert payload["role"] == "student"


def test_expired_token_rejected():
    token = create_access_token("user-1", "student", expires_delta=timedelta(minutes=-1))
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_log_level_is_normalised():
    assert Settings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")
