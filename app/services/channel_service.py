# ============================================================================
# FILE: app/services/channel_service.py
# ============================================================================
from typing import Dict, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.config import settings
from app.core.exceptions import InvalidOperationError, NotFoundError, ServerError
from app.core.permissions import get_or_404, get_owned_or_404
from app.db.models.channel import Channel, channel_subscribers
from app.db.models.user import User
from app.db.models.video import Video
from app.schemas.channel import ChannelUpdate, ChannelDetailResponse, ChannelResponse
from app.schemas.common import MAX_ID
import logging

logger = logging.getLogger(__name__)

def default_channel_name(username: str) -> str:
    return f"{username}'s Channel"

def new_default_channel(user: User) -> Channel:
    """Unsaved channel with the defaults derived from its owner"""
    return Channel(
        name=default_channel_name(user.username),
        description=f"Welcome to {user.username}'s channel!",
        owner_id=user.id,
        avatar=user.avatar or settings.DEFAULT_AVATAR_URL,
        social_links={},
    )

class ChannelService:
    """Service layer for channel operations"""

    def get_user_channel(self, db: Session, user_id: int) -> Optional[Channel]:
        return db.query(Channel).filter(Channel.owner_id == user_id).first()

    def get_or_create_channel(self, db: Session, user: User) -> Channel:
        """
        Return the user's channel, creating a default one on first use.
        Two concurrent first uses race on the unique owner_id constraint;
        the loser rolls back and reads the winner's row.
        """
        channel = self.get_user_channel(db, user.id)
        if channel:
            return channel

        channel = new_default_channel(user)
        db.add(channel)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(f"Channel for user {user.id} created concurrently, reusing it")
            channel = self.get_user_channel(db, user.id)
            if channel is None:
                raise ServerError("Could not create channel")
            return channel

        db.refresh(channel)
        logger.info(f"Channel auto-created: {channel.id} for user {user.id}")
        return channel

    def find_channel(self, db: Session, id_or_name: str) -> Channel:
        """Look a channel up by numeric id, else by case-insensitive name match"""
        channel = None
        if id_or_name.isdecimal():
            try:
                channel_id = int(id_or_name)
            except ValueError:
                # longer than int() will parse
                channel_id = MAX_ID + 1
            if channel_id <= MAX_ID:
                channel = db.get(Channel, channel_id)
        else:
            channel = (
                db.query(Channel)
                .filter(Channel.name.ilike(f"%{id_or_name}%"))
                .order_by(Channel.id)
                .first()
            )
        if not channel:
            raise NotFoundError("Channel not found")
        return channel

    def get_channel_stats(self, db: Session, channel_id: int) -> Dict[str, int]:
        """Video count and total views over the channel's public videos"""
        video_count, total_views = (
            db.query(func.count(Video.id), func.coalesce(func.sum(Video.views), 0))
            .filter(Video.channel_id == channel_id, Video.is_public.is_(True))
            .one()
        )
        return {"video_count": video_count, "total_views": int(total_views)}

    def describe(self, db: Session, channel: Channel) -> ChannelDetailResponse:
        data = ChannelResponse.model_validate(channel).model_dump()
        return ChannelDetailResponse(**data, **self.get_channel_stats(db, channel.id))

    def update_channel(self, db: Session, channel_id: int, user: User, update_data: ChannelUpdate) -> Channel:
        """Update channel details (owner only)"""
        channel = get_owned_or_404(db, Channel, channel_id, user, "owner_id", "update")

        for field in ("name", "description", "banner", "avatar"):
            value = getattr(update_data, field)
            if value:
                setattr(channel, field, value)
        if update_data.social_links is not None:
            channel.social_links = update_data.social_links.model_dump()

        try:
            db.commit()
            db.refresh(channel)
            logger.info(f"Channel updated: {channel_id}")
            return channel
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating channel: {e}")
            raise ServerError() from e

    def toggle_subscription(self, db: Session, channel_id: int, user: User) -> Tuple[bool, int]:
        """
        Flip the user's membership in the channel's subscriber set.
        Both directions are single statements; returns (subscribed, subscriber count).
        """
        channel = get_or_404(db, Channel, channel_id)
        if channel.owner_id == user.id:
            raise InvalidOperationError("Cannot subscribe to your own channel")

        membership = (
            (channel_subscribers.c.channel_id == channel_id)
            & (channel_subscribers.c.user_id == user.id)
        )
        try:
            removed = db.execute(channel_subscribers.delete().where(membership)).rowcount
            if not removed:
                db.execute(channel_subscribers.insert().values(channel_id=channel_id, user_id=user.id))
            db.commit()
            subscribed = not removed
        except IntegrityError:
            # Someone else inserted the same pair first, the user is subscribed either way
            db.rollback()
            subscribed = True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error toggling subscription: {e}")
            raise ServerError() from e

        count = (
            db.query(func.count(channel_subscribers.c.user_id))
            .filter(channel_subscribers.c.channel_id == channel_id)
            .scalar()
        )
        logger.info(f"User {user.id} {'subscribed to' if subscribed else 'unsubscribed from'} channel {channel_id}")
        return subscribed, count

# Create singleton instance
channel_service = ChannelService()
