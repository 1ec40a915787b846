# ============================================================================
# FILE: app/db/models/comment.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.base import Base

class Comment(Base):
    """Comment on a video; replies point at their parent through parent_id"""
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(String(1000), nullable=False)
    video_id = Column(Integer, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    likes = Column(Integer, nullable=False, default=0)
    # Plain column, not a foreign key: replies may outlive a missing parent
    parent_id = Column(Integer, nullable=True, index=True)
    is_edited = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    video = relationship("Video", back_populates="comments")
    user = relationship("User", back_populates="comments", lazy="joined")

    def __repr__(self):
        return f"<Comment(id={self.id}, video_id={self.video_id}, parent_id={self.parent_id})>"
