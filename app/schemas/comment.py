# ============================================================================
# FILE: app/schemas/comment.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.schemas.common import UserSummary, MAX_ID

TEXT_MAX_LENGTH = 1000

class CommentCreate(BaseModel):
    text: Optional[str] = Field(None, max_length=TEXT_MAX_LENGTH)
    parent_comment_id: Optional[int] = Field(None, ge=1, le=MAX_ID)

class CommentUpdate(BaseModel):
    text: Optional[str] = Field(None, max_length=TEXT_MAX_LENGTH)

class CommentResponse(BaseModel):
    id: int
    text: str
    video_id: int
    user: UserSummary
    likes: int
    parent_id: Optional[int] = None
    is_edited: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CommentDeleteResponse(BaseModel):
    message: str
    comment_id: int

class CommentLikeResponse(BaseModel):
    message: str
    likes: int
