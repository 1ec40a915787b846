# ============================================================================
# FILE: app/api/dependencies.py
# ============================================================================
from fastapi import Depends, Path
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.core.exceptions import AuthError
from app.core.security import decode_access_token
from app.db.models.user import User
from app.schemas.common import MAX_ID
from typing import Annotated, Optional

# Reads "Authorization: Bearer <token>"; a missing header is handled below
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

# Integer primary key in a path; out-of-range values are rejected as malformed
ResourceId = Annotated[int, Path(ge=1, le=MAX_ID)]

def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the bearer token to the acting user
    Raises AuthError (401) if the token is missing, invalid, expired or
    belongs to a user that no longer exists
    """
    if not token:
        raise AuthError("No token, authorization denied")

    user_id = decode_access_token(token)
    user = db.get(User, user_id)
    if user is None:
        raise AuthError("Token is not valid")
    return user
