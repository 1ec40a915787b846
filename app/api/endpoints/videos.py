# ============================================================================
# FILE: app/api/endpoints/videos.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.api.dependencies import ResourceId, get_current_user
from app.schemas.video import (
    VideoCreate,
    VideoUpdate,
    ReactionRequest,
    VideoResponse,
    VideoListResponse,
    VideoMutationResponse,
    VideoDeleteResponse,
    ReactionResponse,
)
from app.services.video_service import video_service
from app.schemas.common import MAX_ID
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

# Keeps (page - 1) * limit inside a 64-bit OFFSET
MAX_PAGE = MAX_ID // 100

@router.get("", response_model=VideoListResponse)
def list_videos(
    category: Optional[str] = Query(None, description="Category, 'All' for every category"),
    search: Optional[str] = Query(None, description="Substring of title or description"),
    channel: Optional[int] = Query(None, ge=1, le=MAX_ID, description="Channel id"),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(20, ge=1, le=100),
    sort: str = Query("-created_at", description="Field to sort by, '-' prefix for descending"),
    db: Session = Depends(get_db)
):
    """
    List public videos with filters and pagination
    Available to all users
    """
    return video_service.list_videos(db, category, search, channel, page, limit, sort)

@router.get("/search", response_model=VideoListResponse)
def search_videos(
    q: Optional[str] = Query(None, description="Search query"),
    category: Optional[str] = Query(None),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """
    Search public videos by title, description and tags
    Available to all users
    """
    return video_service.search_videos(db, q, category, page, limit)

@router.get("/channel/{channel_id}", response_model=List[VideoResponse])
def get_channel_videos(
    channel_id: ResourceId,
    db: Session = Depends(get_db)
):
    """Public videos of a channel, newest first"""
    return video_service.get_channel_videos(db, channel_id)

@router.get("/{video_id}", response_model=VideoResponse)
def get_video(
    video_id: ResourceId,
    db: Session = Depends(get_db)
):
    """
    Get a single video
    Each call counts as one view
    """
    return video_service.get_video(db, video_id)

@router.post("", response_model=VideoMutationResponse, status_code=status.HTTP_201_CREATED)
def upload_video(
    video_data: VideoCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Publish a video (metadata and URLs only)
    Requires authentication; the uploader's channel is created if missing
    """
    video = video_service.create_video(db, current_user, video_data)
    return {"message": "Video uploaded successfully", "video": video}

@router.put("/{video_id}", response_model=VideoMutationResponse)
def update_video(
    video_id: ResourceId,
    update_data: VideoUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Update video details
    Requires authentication and ownership
    """
    video = video_service.update_video(db, video_id, current_user, update_data)
    return {"message": "Video updated successfully", "video": video}

@router.delete("/{video_id}", response_model=VideoDeleteResponse)
def delete_video(
    video_id: ResourceId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Delete a video
    Requires authentication and ownership
    """
    video_service.delete_video(db, video_id, current_user)
    return {"message": "Video deleted successfully", "video_id": video_id}

@router.post("/{video_id}/like", response_model=ReactionResponse)
def react_to_video(
    video_id: ResourceId,
    reaction: ReactionRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Like or dislike a video (action = "like" | "dislike")
    Requires authentication
    """
    video = video_service.react(db, video_id, reaction.action)
    return {"message": "Video reaction updated", "likes": video.likes, "dislikes": video.dislikes}
