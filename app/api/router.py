# ============================================================================
# FILE: app/api/router.py
# ============================================================================
from fastapi import APIRouter
from app.api.endpoints import auth, videos, channels, comments

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(videos.router, prefix="/videos", tags=["videos"])
api_router.include_router(channels.router, prefix="/channels", tags=["channels"])
api_router.include_router(comments.router, prefix="/comments", tags=["comments"])
