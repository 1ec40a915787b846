# ============================================================================
# FILE: app/schemas/common.py
# Small projections shared by several responses
# ============================================================================
from pydantic import BaseModel
from typing import Optional

# Largest primary key a signed 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1

class UserSummary(BaseModel):
    """Public author/owner projection"""
    id: int
    username: str
    avatar: Optional[str] = None

    class Config:
        from_attributes = True

class ChannelSummary(BaseModel):
    """Channel projection embedded in video responses"""
    id: int
    name: str
    avatar: Optional[str] = None
    subscriber_count: int = 0

    class Config:
        from_attributes = True

class ChannelBrief(ChannelSummary):
    """Channel projection embedded in the current user's profile"""
    description: Optional[str] = None
    banner: Optional[str] = None

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int
