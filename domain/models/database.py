"""
Database configuration and session management.
"""

import logging
from datetime import datetime

from sqlalchemy import create_engine, Column, DateTime, Enum as SQLEnum
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("lyfe.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _engine_kwargs(url: str) -> dict:
    kwargs = {"echo": settings.db_echo, "future": True}
    if url.startswith("sqlite"):
        # One shared connection so in-memory databases survive across sessions
        kwargs["connect_args"] = {"check_same_thread": False}
        kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return kwargs


# Create engine
engine = create_engine(settings.database_url, **_engine_kwargs(settings.database_url))

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True, expire_on_commit=False)


class TimestampMixin:
    """created_at / updated_at columns, stored as naive UTC"""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


def enum_column(enum_cls, **kwargs) -> Column:
    """Column storing a str-Enum by value (portable, no native DB enum type)."""
    return Column(
        SQLEnum(
            enum_cls,
            values_callable=lambda members: [m.value for m in members],
            native_enum=False,
            validate_strings=True,
            length=32,
        ),
        **kwargs,
    )


def init_database():
    """Initialize database schema"""
    # Import models so every table is registered on Base.metadata
    import domain.models  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def check_connection() -> bool:
    """Return True when a trivial query succeeds against the SQL database."""
    try:
        with engine.connect() as conn:
            conn.exec_driver_sql("SELECT 1")
        return True
    except Exception as e:
        logger.warning(f"Database connectivity check failed: {e}")
        return False


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
