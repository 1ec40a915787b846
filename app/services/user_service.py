# ============================================================================
# FILE: app/services/user_service.py
# ============================================================================
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.config import settings
from app.db.models.user import User
from app.db.models.channel import Channel
from app.schemas.user import UserCreate, UserLogin, ProfileUpdate
from app.core.exceptions import AuthError, ConflictError, ServerError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.services.channel_service import default_channel_name, new_default_channel
import logging

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

class UserService:
    """Service layer for user operations"""

    def create_user(self, db: Session, user_data: UserCreate) -> User:
        """
        Register a new account together with its default channel.
        Only the bcrypt hash of the password is stored.
        """
        username = (user_data.username or "").strip()
        email = (user_data.email or "").strip().lower()
        password = user_data.password or ""
        if not username or not email or not password:
            raise ValidationError("All fields are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        if self.get_user_by_email(db, email):
            raise ConflictError("Email already registered")
        if self.get_user_by_username(db, username):
            raise ConflictError("Username already taken")

        try:
            user = User(
                username=username,
                email=email,
                hashed_password=get_password_hash(password),
                avatar=settings.DEFAULT_AVATAR_URL
            )
            db.add(user)
            db.flush()
            db.add(new_default_channel(user))
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.username}")
            return user
        except IntegrityError:
            db.rollback()
            logger.warning(f"Concurrent registration for {username} / {email}")
            raise ConflictError("Username or email already taken")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise ServerError() from e

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email.lower()).first()

    def authenticate_user(self, db: Session, credentials: UserLogin) -> User:
        """
        Check email and password. Unknown email and wrong password fail with
        the same message so callers cannot probe for registered addresses.
        """
        if not credentials.email or not credentials.password:
            raise ValidationError("Email and password are required")

        user = self.get_user_by_email(db, credentials.email.strip())
        if not user or not verify_password(credentials.password, user.hashed_password):
            logger.info("Failed login attempt")
            raise AuthError("Invalid credentials")
        return user

    def update_profile(self, db: Session, user: User, update_data: ProfileUpdate) -> User:
        """Change username and/or avatar; a new username renames the user's channel"""
        username = (update_data.username or "").strip()
        renamed = bool(username) and username != user.username

        if renamed:
            existing = self.get_user_by_username(db, username)
            if existing and existing.id != user.id:
                raise ConflictError("Username already taken")
            user.username = username
        if update_data.avatar:
            user.avatar = update_data.avatar

        if renamed:
            db.query(Channel).filter(Channel.owner_id == user.id).update(
                {Channel.name: default_channel_name(username)}, synchronize_session=False
            )

        try:
            db.commit()
            db.refresh(user)
            logger.info(f"Profile updated: {user.id}")
            return user
        except IntegrityError:
            db.rollback()
            raise ConflictError("Username already taken")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating profile: {e}")
            raise ServerError() from e

# Create singleton instance
user_service = UserService()
