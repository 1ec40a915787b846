# ============================================================================
# FILE: app/schemas/channel.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from app.schemas.common import UserSummary

class SocialLinks(BaseModel):
    website: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000

class ChannelUpdate(BaseModel):
    """Schema for updating a channel, blank values are ignored"""
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    banner: Optional[str] = None
    avatar: Optional[str] = None
    social_links: Optional[SocialLinks] = None

class ChannelResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    avatar: Optional[str] = None
    banner: Optional[str] = None
    social_links: Optional[SocialLinks] = None
    owner: UserSummary
    subscriber_ids: List[int] = []
    subscriber_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ChannelDetailResponse(ChannelResponse):
    """Channel with statistics over its public videos"""
    video_count: int = 0
    total_views: int = 0

class ChannelUpdateResponse(BaseModel):
    message: str
    channel: ChannelResponse

class ChannelIdResponse(BaseModel):
    channel_id: int
    channel_name: str

class SubscribeResponse(BaseModel):
    message: str
    subscribers: int
    subscribed: bool
