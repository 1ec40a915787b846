import pytest
from jose import jwt

from app.config import settings
from app.core.exceptions import AuthError
from app.core.security import create_access_token, decode_access_token, get_password_hash, verify_password


def test_password_hash_is_one_way():
    hashed = get_password_hash("secret1")

    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_token_expires_seven_days_after_issue():
    token = create_access_token(42)
    claims = jwt.get_unverified_claims(token)

    assert claims["sub"] == "42"
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60
    assert decode_access_token(token) == 42


def test_token_signed_with_other_key_is_rejected():
    forged = jwt.encode({"sub": "42"}, "another-key", algorithm=settings.ALGORITHM)

    with pytest.raises(AuthError):
        decode_access_token(forged)


def test_token_without_numeric_subject_is_rejected():
    token = jwt.encode({"sub": "alice"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    with pytest.raises(AuthError):
        decode_access_token(token)
