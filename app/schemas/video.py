# ============================================================================
# FILE: app/schemas/video.py
# ============================================================================
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Union
from datetime import datetime
from app.schemas.common import ChannelSummary, UserSummary, Pagination

def split_tags(value):
    """Accept a list of tags or a comma separated string"""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return [tag.strip() for tag in value if tag and tag.strip()]

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000

class VideoCreate(BaseModel):
    """Schema for uploading video metadata; title/description checked by the service"""
    title: Optional[str] = Field(None, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[Union[List[str], str]] = None
    duration: Optional[int] = Field(None, ge=0)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value):
        return split_tags(value)

class VideoUpdate(BaseModel):
    """Schema for updating a video, blank values are ignored"""
    title: Optional[str] = Field(None, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    category: Optional[str] = None
    thumbnail_url: Optional[str] = None
    tags: Optional[Union[List[str], str]] = None
    is_public: Optional[bool] = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value):
        return split_tags(value)

class ReactionRequest(BaseModel):
    action: Optional[str] = None

class VideoResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    video_url: str
    thumbnail_url: Optional[str] = None
    category: str
    views: int
    likes: int
    dislikes: int
    duration: int
    is_public: bool
    tags: List[str] = []
    channel: Optional[ChannelSummary] = None
    uploader: Optional[UserSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class VideoListResponse(BaseModel):
    videos: List[VideoResponse]
    pagination: Pagination

class VideoMutationResponse(BaseModel):
    message: str
    video: VideoResponse

class VideoDeleteResponse(BaseModel):
    message: str
    video_id: int

class ReactionResponse(BaseModel):
    message: str
    likes: int
    dislikes: int
