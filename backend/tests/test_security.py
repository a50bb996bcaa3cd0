import pytest
from jose import JWTError, jwt

from bookkeeping.services.errors import CredentialValidationError, HashingError
from bookkeeping.services.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


@pytest.mark.parametrize("plain", ["Secret123!", "", "ünïcødé pässwörd", "x" * 200])
def test_hash_then_verify_roundtrip(plain):
    digest = hash_password(plain)
    assert digest != plain
    assert verify_password(plain, digest) is True
    assert verify_password(plain + "x", digest) is False


def test_hash_is_salted():
    assert hash_password("Secret123!") != hash_password("Secret123!")


def test_hash_none_raises_hashing_error():
    with pytest.raises(HashingError):
        hash_password(None)


def test_verify_unreadable_digest_is_a_fault_not_a_mismatch():
    with pytest.raises(CredentialValidationError):
        verify_password("Secret123!", "not-a-passlib-hash")


def test_access_token_roundtrip():
    token = create_access_token("user-1")
    payload = decode_access_token(token)
    assert payload["sub"] == "user-1"
    assert payload["exp"] > payload["iat"]


def test_token_signed_with_another_key_is_rejected():
    forged = jwt.encode({"sub": "user-1"}, "not-the-secret", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_access_token(forged)
