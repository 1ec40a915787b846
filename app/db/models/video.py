# ============================================================================
# FILE: app/db/models/video.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
from app.config import settings
from app.db.base import Base

class VideoCategory(str, enum.Enum):
    ALL = "All"
    ENTERTAINMENT = "Entertainment"
    MUSIC = "Music"
    GAMING = "Gaming"
    EDUCATION = "Education"
    TECHNOLOGY = "Technology"
    SPORTS = "Sports"
    NEWS = "News"
    OTHER = "Other"

class Video(Base):
    """Video metadata; the media itself lives at video_url"""
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    video_url = Column(String, nullable=False, default=settings.DEFAULT_VIDEO_URL)
    thumbnail_url = Column(String, default=settings.DEFAULT_THUMBNAIL_URL)
    category = Column(String(32), nullable=False, default=VideoCategory.ENTERTAINMENT.value, index=True)
    views = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)
    dislikes = Column(Integer, nullable=False, default=0)
    duration = Column(Integer, nullable=False, default=0)  # seconds
    channel_id = Column(Integer, ForeignKey("channels.id"), nullable=False, index=True)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_public = Column(Boolean, nullable=False, default=True)
    tags = Column(JSON, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    channel = relationship("Channel", back_populates="videos", lazy="joined")
    uploader = relationship("User", back_populates="videos", lazy="joined")
    comments = relationship("Comment", back_populates="video", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Video(id={self.id}, title={self.title})>"
