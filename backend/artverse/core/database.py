"""
Database connection (PostgreSQL via SQLAlchemy + psycopg2)

This module centralizes database access:
- SQLAlchemy engine and session factory
- FastAPI dependency that yields one session per request
- Table creation and a connectivity check for /health
"""
import logging
import time
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy import CheckConstraint, create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    """Pool options per backend. SQLite (tests, local dev) shares one connection."""
    if database_url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,  # Verify connection before use
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
    }


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def one_of(column: str, values, name: str) -> CheckConstraint:
    """CHECK constraint limiting a column to a fixed vocabulary"""
    allowed = ", ".join(f"'{value}'" for value in values)
    return CheckConstraint(f"{column} IN ({allowed})", name=name)


def get_db():
    """
    FastAPI dependency that yields a SQLAlchemy session

    Usage:
        @router.get("/items")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet"""
    # Import models so they register on Base.metadata
    from artverse import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")


def check_connection() -> Tuple[bool, Optional[float], Optional[str]]:
    """
    Run SELECT 1 against the database

    Returns:
        Tuple of (connected, latency_ms, error)
    """
    start = time.time()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, round((time.time() - start) * 1000, 2), None
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False, None, str(e)
