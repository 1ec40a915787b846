# ============================================================================
# FILE: app/core/cache.py
# ============================================================================
import redis
import json
from typing import Optional, Any
from app.config import settings
import logging

logger = logging.getLogger(__name__)

class RedisCache:
    """Redis cache helper class, a no-op when no Redis URL is configured"""

    def __init__(self, url: Optional[str] = None):
        self.redis_client = None
        if not url:
            logger.info("REDIS_URL not set. Caching disabled.")
            return

        try:
            self.redis_client = redis.from_url(url, decode_responses=True)
            self.redis_client.ping()
            logger.info("Redis connection established")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")
            self.redis_client = None

    @property
    def enabled(self) -> bool:
        return self.redis_client is not None

    def set_cache(self, key: str, value: Any, expire: int = None) -> bool:
        """Set a cache value with optional expiration"""
        if not self.redis_client:
            return False

        try:
            serialized = json.dumps(value)
            if expire:
                self.redis_client.setex(key, expire, serialized)
            else:
                self.redis_client.set(key, serialized)
            return True
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Cache set error: {e}")
            return False

    def get_cache(self, key: str) -> Optional[Any]:
        """Get a cache value"""
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                return json.loads(value)
            return None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"Cache get error: {e}")
            return None

    def delete_prefix(self, prefix: str) -> int:
        """Drop every key starting with prefix"""
        if not self.redis_client:
            return 0

        try:
            keys = list(self.redis_client.scan_iter(match=f"{prefix}*"))
            if keys:
                self.redis_client.delete(*keys)
            return len(keys)
        except redis.RedisError as e:
            logger.error(f"Cache delete error: {e}")
            return 0

# Singleton instance
cache = RedisCache(settings.REDIS_URL)
