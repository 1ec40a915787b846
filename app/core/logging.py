# ============================================================================
# FILE: app/core/logging.py
# ============================================================================
import logging
from app.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

def setup_logging():
    """Configure root logging once for the whole process"""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # SQLAlchemy echoes every statement at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    # passlib warns about newer bcrypt builds on first hash
    logging.getLogger("passlib").setLevel(logging.ERROR)
