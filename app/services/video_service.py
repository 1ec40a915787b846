# ============================================================================
# FILE: app/services/video_service.py
# ============================================================================
from typing import Dict, List, Optional
import math
from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, Query
from app.config import settings
from app.core.cache import cache
from app.core.exceptions import NotFoundError, ServerError, ValidationError
from app.core.permissions import get_or_404, get_owned_or_404
from app.db.models.user import User
from app.db.models.video import Video, VideoCategory
from app.schemas.video import VideoCreate, VideoUpdate, VideoResponse
from app.services.channel_service import channel_service
import logging

logger = logging.getLogger(__name__)

SEARCH_CACHE_PREFIX = "videos:search:"
SORTABLE_FIELDS = {
    "created_at": Video.created_at,
    "views": Video.views,
    "likes": Video.likes,
    "title": Video.title,
    "duration": Video.duration,
}
REACTION_COLUMNS = {
    "like": Video.likes,
    "dislike": Video.dislikes,
}

def parse_sort(sort: str):
    """Turn "-views" / "title" style sort keys into an ORDER BY clause"""
    descending = sort.startswith("-")
    column = SORTABLE_FIELDS.get(sort.lstrip("-"))
    if column is None:
        raise ValidationError(f"Cannot sort by '{sort}'")
    return column.desc() if descending else column.asc()

def validate_category(category: str) -> str:
    try:
        return VideoCategory(category).value
    except ValueError:
        raise ValidationError(f"Invalid category '{category}'")

def tag_matches(db: Session, pattern: str):
    """
    EXISTS clause true when any single element of Video.tags matches pattern.
    Tags are unpacked element by element, never matched as JSON text.
    """
    if db.get_bind().dialect.name == "postgresql":
        elements = func.json_array_elements_text(Video.tags)
    else:
        elements = func.json_each(Video.tags)
    tag = elements.table_valued("value", name="tag")
    return select(tag.c.value).where(tag.c.value.ilike(pattern)).exists()

class VideoService:
    """Service layer for video operations"""

    def _public_videos(self, db: Session, category: Optional[str] = None) -> Query:
        query = db.query(Video).filter(Video.is_public.is_(True))
        if category and category != VideoCategory.ALL.value:
            query = query.filter(Video.category == validate_category(category))
        return query

    def _paginate(self, query: Query, page: int, limit: int, order) -> Dict:
        """Skip/limit page of a query, serialized for the list envelope"""
        total = query.count()
        videos = query.order_by(order).offset((page - 1) * limit).limit(limit).all()
        return {
            "videos": [VideoResponse.model_validate(v).model_dump(mode="json") for v in videos],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit) if limit else 0,
            },
        }

    def list_videos(
        self,
        db: Session,
        category: Optional[str] = None,
        search: Optional[str] = None,
        channel_id: Optional[int] = None,
        page: int = 1,
        limit: int = 20,
        sort: str = "-created_at",
    ) -> Dict:
        """
        Public videos filtered by category, channel and a title/description
        substring, ordered by sort

        Returns:
            Dict with 'videos' and 'pagination' keys
        """
        order = parse_sort(sort)
        query = self._public_videos(db, category)
        if channel_id is not None:
            query = query.filter(Video.channel_id == channel_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Video.title.ilike(pattern), Video.description.ilike(pattern)))
        return self._paginate(query, page, limit, order)

    def search_videos(
        self,
        db: Session,
        q: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict:
        """
        Match q against title, description and tags, newest first
        Results are cached in Redis when it is configured
        """
        cache_key = f"{SEARCH_CACHE_PREFIX}{q or ''}:{category or ''}:{page}:{limit}"
        cached_results = cache.get_cache(cache_key)
        if cached_results:
            logger.info(f"Cache hit for search: {q}")
            return cached_results

        query = self._public_videos(db, category)
        if q:
            pattern = f"%{q}%"
            query = query.filter(or_(
                Video.title.ilike(pattern),
                Video.description.ilike(pattern),
                tag_matches(db, pattern),
            ))
        response_data = self._paginate(query, page, limit, Video.created_at.desc())

        cache.set_cache(cache_key, response_data, expire=settings.CACHE_EXPIRE_SECONDS)
        return response_data

    def get_video(self, db: Session, video_id: int) -> Video:
        """Fetch one video and count the view (single UPDATE, no read-modify-write)"""
        updated = (
            db.query(Video)
            .filter(Video.id == video_id)
            .update({Video.views: Video.views + 1}, synchronize_session=False)
        )
        if not updated:
            db.rollback()
            raise NotFoundError("Video not found")
        db.commit()
        return get_or_404(db, Video, video_id)

    def get_channel_videos(self, db: Session, channel_id: int) -> List[Video]:
        return (
            db.query(Video)
            .filter(Video.channel_id == channel_id, Video.is_public.is_(True))
            .order_by(Video.created_at.desc())
            .all()
        )

    def create_video(self, db: Session, user: User, video_data: VideoCreate) -> Video:
        """Publish a video under the uploader's channel (created on demand)"""
        if not (video_data.title or "").strip() or not (video_data.description or "").strip():
            raise ValidationError("Title and description are required")
        category = validate_category(video_data.category) if video_data.category else VideoCategory.ENTERTAINMENT.value

        channel = channel_service.get_or_create_channel(db, user)

        try:
            video = Video(
                title=video_data.title.strip(),
                description=video_data.description.strip(),
                video_url=video_data.video_url or settings.DEFAULT_VIDEO_URL,
                thumbnail_url=video_data.thumbnail_url or settings.DEFAULT_THUMBNAIL_URL,
                category=category,
                duration=video_data.duration or 0,
                tags=video_data.tags or [],
                channel_id=channel.id,
                uploaded_by=user.id,
            )
            db.add(video)
            db.commit()
            db.refresh(video)
            logger.info(f"Video created: {video.id} on channel {channel.id}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating video: {e}")
            raise ServerError() from e

        cache.delete_prefix(SEARCH_CACHE_PREFIX)
        return video

    def update_video(self, db: Session, video_id: int, user: User, update_data: VideoUpdate) -> Video:
        """Update mutable video fields (uploader only)"""
        video = get_owned_or_404(db, Video, video_id, user, "uploaded_by", "update")

        if update_data.title:
            video.title = update_data.title.strip()
        if update_data.description:
            video.description = update_data.description.strip()
        if update_data.category:
            video.category = validate_category(update_data.category)
        if update_data.thumbnail_url:
            video.thumbnail_url = update_data.thumbnail_url
        if update_data.tags:
            video.tags = update_data.tags
        if update_data.is_public is not None:
            video.is_public = update_data.is_public

        try:
            db.commit()
            db.refresh(video)
            logger.info(f"Video updated: {video_id}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating video: {e}")
            raise ServerError() from e

        cache.delete_prefix(SEARCH_CACHE_PREFIX)
        return video

    def delete_video(self, db: Session, video_id: int, user: User) -> None:
        """Delete a video and its comments (uploader only)"""
        video = get_owned_or_404(db, Video, video_id, user, "uploaded_by", "delete")
        try:
            db.delete(video)
            db.commit()
            logger.info(f"Video deleted: {video_id}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting video: {e}")
            raise ServerError() from e

        cache.delete_prefix(SEARCH_CACHE_PREFIX)

    def react(self, db: Session, video_id: int, action: Optional[str]) -> Video:
        """
        Add one like or dislike. Reactions are not tracked per user, so the
        same user can react any number of times.
        """
        get_or_404(db, Video, video_id)
        column = REACTION_COLUMNS.get(action or "")
        if column is None:
            raise ValidationError("Invalid action")

        db.query(Video).filter(Video.id == video_id).update(
            {column: column + 1}, synchronize_session=False
        )
        db.commit()
        return get_or_404(db, Video, video_id)

# Create singleton instance
video_service = VideoService()
