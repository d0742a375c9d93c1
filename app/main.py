"""
FastAPI application setup.

``create_app`` wires settings, database, middleware, error handlers and
routers together; tests pass their own ``AppContext`` to run against an
isolated database.
"""

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.context import AppContext, build_context
from app.core.db import Base
from app.core.error_handlers import setup_error_handlers
from app.core.logging import configure_logging
from app.middleware import RequestContextMiddleware
from app.services.seed_service import seed_default_admin

logger = logging.getLogger(__name__)


def _startup(context: AppContext) -> None:
    settings = context.settings
    if settings.database.auto_create_schema:
        # importing the models registers every table on Base.metadata
        import app.models  # noqa: F401
        Base.metadata.create_all(bind=context.engine)
        logger.info("Database schema created")
    if settings.seed_on_startup:
        with context.session() as db:
            seed_default_admin(db, settings)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        context: Prebuilt application context; built from the environment when omitted

    Returns:
        FastAPI: Configured application instance
    """
    context = context or build_context()
    settings = context.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level.value, settings.log_format, settings.log_file)
        logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.environment.value})")
        try:
            _startup(context)
            logger.info("Application startup complete")
            yield
        except Exception as e:
            logger.error(f"Application startup failed: {e}", exc_info=True)
            raise
        finally:
            logger.info("Shutting down application")
            context.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(CORSMiddleware, **settings.get_cors_config())
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    from app.api import auth_router, content_router, health_router, users_router
    app.include_router(health_router)
    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(content_router, prefix=settings.api_prefix)
    app.include_router(users_router, prefix=settings.api_prefix)

    @app.get("/", tags=["health"])
    def root():
        """Welcome endpoint."""
        return {
            "success": True,
            "message": f"Welcome to {settings.app_name}",
            "data": {
                "version": settings.app_version,
                "docs": "/docs",
                "apiPrefix": settings.api_prefix,
            },
        }

    return app


# Create application instance
app = create_app()
