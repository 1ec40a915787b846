# ============================================================================
# FILE: app/core/permissions.py
# Ownership checks shared by videos (uploaded_by), comments (user_id) and
# channels (owner_id)
# ============================================================================
from sqlalchemy.orm import Session
from app.core.exceptions import ForbiddenError, NotFoundError
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)

def get_or_404(db: Session, model, obj_id: int):
    """Load a row by primary key or raise NotFoundError("<Model> not found")"""
    obj = db.get(model, obj_id)
    if obj is None:
        raise NotFoundError(f"{model.__name__} not found")
    return obj

def is_owner(resource, user: User, owner_field: str) -> bool:
    return getattr(resource, owner_field) == user.id

def ensure_owner(resource, user: User, owner_field: str, action: str = "update"):
    """Raise ForbiddenError unless user is recorded in resource.<owner_field>"""
    if not is_owner(resource, user, owner_field):
        label = type(resource).__name__.lower()
        logger.warning(f"User {user.id} denied {action} on {label} {resource.id}")
        raise ForbiddenError(f"Not authorized to {action} this {label}")

def get_owned_or_404(db: Session, model, obj_id: int, user: User, owner_field: str, action: str = "update"):
    """Load a row and verify the acting user owns it"""
    obj = get_or_404(db, model, obj_id)
    ensure_owner(obj, user, owner_field, action)
    return obj
