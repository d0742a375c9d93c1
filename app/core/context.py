"""
Application context: the settings, engine and session factory a running
application works with.

Built once at startup by ``build_context`` and stored on ``app.state``;
request handlers receive it through the ``get_context`` / ``get_db``
dependencies instead of importing module-level singletons.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, Iterator, Optional
import logging

from fastapi import Depends, Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import Settings, get_settings
from app.core.db import create_engine_from_settings, create_session_factory

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Unit of work outside a request: commit on success, roll back on error."""
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()


def build_context(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> AppContext:
    settings = settings or get_settings()
    engine = engine or create_engine_from_settings(settings.database)
    logger.info("Database engine ready", extra={"dialect": engine.dialect.name})
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
    )


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_app_settings(context: AppContext = Depends(get_context)) -> Settings:
    return context.settings


def get_db(context: AppContext = Depends(get_context)) -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = context.session_factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_language(request: Request, settings: Settings = Depends(get_app_settings)) -> str:
    """Primary language tag from Accept-Language, e.g. ``es-ES,es;q=0.9`` -> ``es``."""
    header = request.headers.get("Accept-Language", "")
    first = header.split(",")[0].split(";")[0].strip()
    if len(first) >= 2 and first[:2].isalpha():
        return first[:2].lower()
    return settings.default_language
