# ============================================================================
# FILE: app/api/endpoints/channels.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.dependencies import ResourceId, get_current_user
from app.schemas.channel import (
    ChannelUpdate,
    ChannelDetailResponse,
    ChannelUpdateResponse,
    ChannelIdResponse,
    SubscribeResponse,
)
from app.services.channel_service import channel_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/user/current", response_model=ChannelDetailResponse)
def get_my_channel(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get the current user's channel with statistics
    Requires authentication; the channel is created if missing
    """
    channel = channel_service.get_or_create_channel(db, current_user)
    return channel_service.describe(db, channel)

@router.get("/user/id", response_model=ChannelIdResponse)
def get_my_channel_id(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Id and name of the current user's channel"""
    channel = channel_service.get_or_create_channel(db, current_user)
    return {"channel_id": channel.id, "channel_name": channel.name}

@router.get("/{channel_id}", response_model=ChannelDetailResponse)
def get_channel(
    channel_id: str,
    db: Session = Depends(get_db)
):
    """
    Get a channel by id, or by a case-insensitive match on its name
    Available to all users
    """
    channel = channel_service.find_channel(db, channel_id)
    return channel_service.describe(db, channel)

@router.put("/{channel_id}", response_model=ChannelUpdateResponse)
def update_channel(
    channel_id: ResourceId,
    update_data: ChannelUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Update channel details
    Requires authentication and ownership
    """
    channel = channel_service.update_channel(db, channel_id, current_user, update_data)
    return {"message": "Channel updated successfully", "channel": channel}

@router.post("/{channel_id}/subscribe", response_model=SubscribeResponse)
def toggle_subscription(
    channel_id: ResourceId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Subscribe to a channel, or unsubscribe if already subscribed
    Requires authentication
    """
    subscribed, count = channel_service.toggle_subscription(db, channel_id, current_user)
    return {
        "message": "Subscribed successfully" if subscribed else "Unsubscribed successfully",
        "subscribers": count,
        "subscribed": subscribed,
    }
