# ============================================================================
# FILE: app/services/comment_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundError, ServerError, ValidationError
from app.core.permissions import get_or_404, get_owned_or_404
from app.db.models.comment import Comment
from app.db.models.user import User
from app.db.models.video import Video
import logging

logger = logging.getLogger(__name__)

def clean_text(text: Optional[str]) -> str:
    text = (text or "").strip()
    if not text:
        raise ValidationError("Comment text is required")
    return text

class CommentService:
    """Service layer for comment operations"""

    def list_comments(self, db: Session, video_id: int) -> List[Comment]:
        """Top-level comments of a video, newest first"""
        return (
            db.query(Comment)
            .filter(Comment.video_id == video_id, Comment.parent_id.is_(None))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .all()
        )

    def add_comment(
        self, db: Session, video_id: int, user: User, text: Optional[str], parent_id: Optional[int] = None
    ) -> Comment:
        """Comment on a video, or reply to parent_id (the parent is not checked)"""
        text = clean_text(text)
        get_or_404(db, Video, video_id)

        try:
            comment = Comment(text=text, video_id=video_id, user_id=user.id, parent_id=parent_id)
            db.add(comment)
            db.commit()
            db.refresh(comment)
            logger.info(f"Comment created: {comment.id} on video {video_id}")
            return comment
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating comment: {e}")
            raise ServerError() from e

    def edit_comment(self, db: Session, comment_id: int, user: User, text: Optional[str]) -> Comment:
        """Replace the text of a comment (author only) and mark it edited"""
        text = clean_text(text)
        comment = get_owned_or_404(db, Comment, comment_id, user, "user_id", "update")

        try:
            comment.text = text
            comment.is_edited = True
            db.commit()
            db.refresh(comment)
            logger.info(f"Comment updated: {comment_id}")
            return comment
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating comment: {e}")
            raise ServerError() from e

    def delete_comment(self, db: Session, comment_id: int, user: User) -> int:
        """
        Delete a comment (author only) and its direct replies.
        Replies to those replies are left alone.
        Returns the number of replies removed.
        """
        comment = get_owned_or_404(db, Comment, comment_id, user, "user_id", "delete")

        try:
            db.delete(comment)
            replies = (
                db.query(Comment)
                .filter(Comment.parent_id == comment_id)
                .delete(synchronize_session=False)
            )
            db.commit()
            logger.info(f"Comment deleted: {comment_id} with {replies} replies")
            return replies
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting comment: {e}")
            raise ServerError() from e

    def like_comment(self, db: Session, comment_id: int) -> int:
        """Add one like; returns the new like count"""
        updated = (
            db.query(Comment)
            .filter(Comment.id == comment_id)
            .update({Comment.likes: Comment.likes + 1}, synchronize_session=False)
        )
        if not updated:
            db.rollback()
            raise NotFoundError("Comment not found")
        db.commit()
        return get_or_404(db, Comment, comment_id).likes

# Create singleton instance
comment_service = CommentService()
