from sqlalchemy import create_engine, event, Column, Boolean, DateTime, func, false
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from datetime import datetime, timezone

from app.config.settings import DatabaseSettings

# SQLAlchemy declarative base for models
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp; every DateTime column in the schema is stored as UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)


class SoftDeleteMixin:
    """Rows are flagged instead of removed; reads filter ``is_deleted``."""
    is_deleted = Column(Boolean, default=False, server_default=false(), nullable=False, index=True)
    deleted_at = Column(DateTime, nullable=True)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # pragma: no cover
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_settings(db: DatabaseSettings) -> Engine:
    kwargs = {"echo": db.echo, "future": True}
    if db.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        # an in-memory database only lives as long as its single connection
        if ":memory:" in db.url or db.url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = db.pool_pre_ping
    engine = create_engine(db.url, **kwargs)
    if db.is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )
