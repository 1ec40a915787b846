# ============================================================================
# FILE: app/db/models/channel.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON, Table, select, func
from sqlalchemy.orm import relationship, column_property
from datetime import datetime
from app.config import settings
from app.db.base import Base

# Subscriber set: the composite key makes (channel, user) pairs unique, so
# subscribing is a single INSERT and unsubscribing a single DELETE
channel_subscribers = Table(
    "channel_subscribers",
    Base.metadata,
    Column("channel_id", Integer, ForeignKey("channels.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime, default=datetime.utcnow),
)

class Channel(Base):
    """Per-user publishing namespace; at most one per owner"""
    __tablename__ = "channels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, default="No description provided.")
    owner_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    avatar = Column(String, default=settings.DEFAULT_AVATAR_URL)
    banner = Column(String, default=settings.DEFAULT_BANNER_URL)
    social_links = Column(JSON, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subscriber_count = column_property(
        select(func.count(channel_subscribers.c.user_id))
        .where(channel_subscribers.c.channel_id == id)
        .correlate_except(channel_subscribers)
        .scalar_subquery()
    )

    # Relationships
    owner = relationship("User", back_populates="channel", lazy="joined")
    subscribers = relationship("User", secondary=channel_subscribers, lazy="selectin", viewonly=True)
    videos = relationship("Video", back_populates="channel")

    @property
    def subscriber_ids(self):
        return [user.id for user in self.subscribers]

    def __repr__(self):
        return f"<Channel(id={self.id}, name={self.name}, owner_id={self.owner_id})>"
