import uuid
from datetime import datetime, timezone

from sqlalchemy import create_engine, Column, DateTime, Uuid
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from freshness_checker.config import get_settings

settings = get_settings()


def normalize_db_url(url: str) -> str:
    """Ensure Postgres URLs use the psycopg v3 driver (not psycopg2)."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    return url


def connect_args_for(url: str) -> dict:
    """Driver connect args. Postgres TLS is configured through sslmode in the URL."""
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        return {"check_same_thread": False}
    return {}


_db_url = normalize_db_url(settings.DATABASE_URL)

engine = create_engine(_db_url, connect_args=connect_args_for(_db_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


class BaseMixin:
    """Adds UUID primary key and timestamps to all models."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
