# ============================================================================
# FILE: app/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from app.schemas.common import ChannelBrief

USERNAME_MAX_LENGTH = 50

class UserCreate(BaseModel):
    """Schema for user registration; presence is checked by the service"""
    username: Optional[str] = Field(None, max_length=USERNAME_MAX_LENGTH)
    email: Optional[EmailStr] = None
    password: Optional[str] = None

class UserLogin(BaseModel):
    """Schema for user login"""
    email: Optional[str] = None
    password: Optional[str] = None

class ProfileUpdate(BaseModel):
    """Schema for profile changes, blank values are ignored"""
    username: Optional[str] = Field(None, max_length=USERNAME_MAX_LENGTH)
    avatar: Optional[str] = None

class UserResponse(BaseModel):
    """Public user projection (never includes the password hash)"""
    id: int
    username: str
    email: str
    avatar: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class ProfileResponse(UserResponse):
    updated_at: Optional[datetime] = None
    channel: Optional[ChannelBrief] = None

class AuthResponse(BaseModel):
    """Returned by register and login"""
    message: str
    token: str
    user: UserResponse

class MeResponse(BaseModel):
    user: ProfileResponse

class ProfileUpdateResponse(BaseModel):
    message: str
    user: ProfileResponse
