# ============================================================================
# FILE: app/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "VidTube"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./vidtube.db"  # Change to PostgreSQL in production

    # Redis cache (disabled when unset)
    REDIS_URL: Optional[str] = None
    CACHE_EXPIRE_SECONDS: int = 60

    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # CORS (any localhost port is allowed in addition to these)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Defaults for media URLs
    DEFAULT_AVATAR_URL: str = "https://cdn-icons-png.flaticon.com/512/149/149071.png"
    DEFAULT_BANNER_URL: str = "https://images.unsplash.com/photo-1517077304055-6e89abbf09b0?w=1920&h=250&fit=crop"
    DEFAULT_VIDEO_URL: str = "https://www.youtube.com/embed/dQw4w9WgXcQ"
    DEFAULT_THUMBNAIL_URL: str = "https://images.unsplash.com/photo-1593359677879-a4bb92f829d1?w=320&h=180&fit=crop"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
