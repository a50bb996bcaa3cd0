# bookkeeping/services/security.py
"""Password hashing + JWT helpers.

We use passlib pbkdf2_sha256 (pure-python) to avoid bcrypt backend issues.
JWT encode/decode uses python-jose.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union, Dict, Any
from passlib.context import CryptContext
from jose import jwt, JWTError
from bookkeeping.core.config import settings
from bookkeeping.services.errors import HashingError, CredentialValidationError

logger = logging.getLogger(__name__)

pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
SECRET_KEY = settings.SECRET_KEY  # ensure it's present in env in prod


def hash_password(password: str) -> str:
    """Hash a plaintext password (never store plaintext)."""
    if password is None:
        raise HashingError("Password cannot be empty")
    try:
        return pwd_ctx.hash(password)
    except (TypeError, ValueError) as exc:
        logger.error("Password hashing failed - error: %s", exc)
        raise HashingError() from exc


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify plain password against hashed.

    A wrong password returns False. A digest passlib cannot read (or a
    missing argument) raises CredentialValidationError instead, so callers
    can tell a broken record from a failed login.
    """
    if plain is None or hashed is None:
        raise CredentialValidationError()
    try:
        return pwd_ctx.verify(plain, hashed)
    except (TypeError, ValueError) as exc:
        logger.error("Password verification failed - error: %s", exc)
        raise CredentialValidationError() from exc


def create_access_token(
    subject: Union[str, int],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token with subject (user id usually).
    - subject is stored under 'sub' as a string
    - 'iat' and 'exp' included (exp as int timestamp)
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    payload: Dict[str, Any] = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT. Raises JWTError on invalid token.
    Returns the payload dict (contains 'sub', 'exp', etc).
    """
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        # re-raise so deps can convert to a 401
        raise
