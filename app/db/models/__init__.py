from app.db.models.user import User
from app.db.models.channel import Channel, channel_subscribers
from app.db.models.video import Video, VideoCategory
from app.db.models.comment import Comment

__all__ = ["User", "Channel", "channel_subscribers", "Video", "VideoCategory", "Comment"]
