# ============================================================================
# FILE: app/core/security.py
# Password hashing and JWT access tokens
# ============================================================================
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from app.config import settings
from app.core.exceptions import AuthError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a signed token for a user id
    Expires after ACCESS_TOKEN_EXPIRE_MINUTES (7 days) unless overridden
    """
    now = datetime.utcnow()
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": str(user_id), "iat": now, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_access_token(token: str) -> int:
    """
    Verify signature and expiry, return the user id the token was issued for
    Raises AuthError for anything that is not a valid, unexpired token
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthError("Token is not valid")

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise AuthError("Token is not valid")
    return int(subject)
