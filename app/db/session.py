# ============================================================================
# FILE: app/db/session.py
# Engine and session factory. Created once at import, tables created by
# init_db() on startup, engine disposed by close_db() on shutdown.
# ============================================================================
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from app.config import settings
from app.db.base import Base
import logging

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    """Per-request session dependency"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    """Check connectivity and create missing tables"""
    # Register every model on Base.metadata
    import app.db.models  # noqa: F401

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.critical(f"Database connection failed: {e}")
        raise SystemExit(1)
    logger.info(f"Database ready: {engine.url.render_as_string(hide_password=True)}")

def close_db():
    engine.dispose()
    logger.info("Database engine disposed")
