"""
Health check endpoint.

- GET /health: database connectivity plus error statistics collected by the
  error handlers
"""

from datetime import datetime, timezone
import logging
import time

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.core.context import get_app_settings, get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

# Application start time for uptime calculation
_app_start_time = time.time()


def check_database(db: Session) -> dict:
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "connection": "ok"}
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}


@router.get("/health", summary="Basic health check")
def health_check(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Report database reachability and recent error counts.

    The overall status is ``healthy`` only when the database answers.
    """
    database = check_database(db)
    error_handler = getattr(request.app.state, "error_handler", None)
    errors = error_handler.get_error_statistics() if error_handler is not None else {}

    return {
        "success": True,
        "data": {
            "status": "healthy" if database["status"] == "healthy" else "unhealthy",
            "version": settings.app_version,
            "environment": settings.environment.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptimeSeconds": round(time.time() - _app_start_time, 2),
            "database": database,
            "errors": errors,
        },
    }
