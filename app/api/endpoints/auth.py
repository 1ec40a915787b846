# ============================================================================
# FILE: app/api/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import get_current_user
from app.schemas.user import (
    UserCreate,
    UserLogin,
    ProfileUpdate,
    AuthResponse,
    MeResponse,
    ProfileResponse,
    ProfileUpdateResponse,
)
from app.schemas.common import ChannelBrief
from app.services.user_service import user_service
from app.services.channel_service import channel_service
from app.core.security import create_access_token
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

def build_profile(db: Session, user: User) -> ProfileResponse:
    """User projection without the password hash, plus the user's channel"""
    channel = channel_service.get_or_create_channel(db, user)
    profile = ProfileResponse.model_validate(user)
    profile.channel = ChannelBrief.model_validate(channel)
    return profile

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new user account and its default channel
    Returns a bearer token valid for 7 days
    """
    user = user_service.create_user(db, user_data)
    return {
        "message": "User registered successfully",
        "token": create_access_token(user.id),
        "user": user,
    }

@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Login with email and password
    Returns a fresh bearer token
    """
    user = user_service.authenticate_user(db, credentials)
    return {
        "message": "Login successful",
        "token": create_access_token(user.id),
        "user": user,
    }

@router.get("/me", response_model=MeResponse)
def get_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get current user profile with channel
    Requires authentication
    """
    return {"user": build_profile(db, current_user)}

@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    update_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Update username and/or avatar
    Requires authentication
    """
    user = user_service.update_profile(db, current_user, update_data)
    return {"message": "Profile updated successfully", "user": build_profile(db, user)}
