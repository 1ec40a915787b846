# ============================================================================
# FILE: app/api/endpoints/comments.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.api.dependencies import ResourceId, get_current_user
from app.schemas.comment import (
    CommentCreate,
    CommentUpdate,
    CommentResponse,
    CommentDeleteResponse,
    CommentLikeResponse,
)
from app.services.comment_service import comment_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/video/{video_id}", response_model=List[CommentResponse])
def list_comments(
    video_id: ResourceId,
    db: Session = Depends(get_db)
):
    """
    Top-level comments of a video, newest first
    Available to all users
    """
    return comment_service.list_comments(db, video_id)

@router.post("/video/{video_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    video_id: ResourceId,
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Comment on a video, or reply with parent_comment_id
    Requires authentication
    """
    return comment_service.add_comment(
        db, video_id, current_user, comment_data.text, comment_data.parent_comment_id
    )

@router.put("/{comment_id}", response_model=CommentResponse)
def edit_comment(
    comment_id: ResourceId,
    comment_data: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Edit a comment
    Requires authentication and ownership
    """
    return comment_service.edit_comment(db, comment_id, current_user, comment_data.text)

@router.delete("/{comment_id}", response_model=CommentDeleteResponse)
def delete_comment(
    comment_id: ResourceId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Delete a comment and its replies
    Requires authentication and ownership
    """
    comment_service.delete_comment(db, comment_id, current_user)
    return {"message": "Comment deleted successfully", "comment_id": comment_id}

@router.post("/{comment_id}/like", response_model=CommentLikeResponse)
def like_comment(
    comment_id: ResourceId,
    db: Session = Depends(get_db)
):
    """Add a like to a comment"""
    likes = comment_service.like_comment(db, comment_id)
    return {"message": "Comment liked successfully", "likes": likes}
