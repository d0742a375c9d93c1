"""
Error handlers for the FastAPI application.

Every failure leaves the API in the same envelope used for successes:
``{"success": false, "message": ..., "errors": [...]?}``.
"""

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time
from typing import Dict, Any, List, Optional

from app.core.exceptions import (
    TourismAPIException,
    ValidationError,
    ErrorCode,
    group_validation_errors,
)

logger = logging.getLogger(__name__)


class ErrorHandler:
    """
    Error handling with logging and error frequency tracking.
    """

    def __init__(self):
        self.error_counts: Dict[str, int] = {}
        self.last_error_time: Dict[str, float] = {}

    async def handle_api_exception(
        self,
        request: Request,
        exc: TourismAPIException
    ) -> JSONResponse:
        """
        Handle the application's own exceptions.

        Args:
            request: FastAPI request object
            exc: TourismAPIException instance

        Returns:
            JSONResponse in the failure envelope
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"{type(exc).__name__} in request {request_id}: {exc.message}",
            extra={
                'request_id': request_id,
                'error_code': exc.error_code.value,
                'status_code': exc.status_code,
                'request_path': request.url.path,
                'request_method': request.method,
            }
        )

        self._track_error(exc.error_code.value)

        errors = exc.violations if isinstance(exc, ValidationError) else None
        return self._create_error_response(
            message=exc.message,
            status_code=exc.status_code,
            errors=errors,
        )

    async def handle_validation_error(
        self,
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """
        Handle Pydantic request validation errors as a 400 with per-field messages.

        Args:
            request: FastAPI request object
            exc: RequestValidationError instance

        Returns:
            JSONResponse listing every violated field
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        violations = group_validation_errors(exc.errors())

        logger.warning(
            f"Validation error in request {request_id}: {len(violations)} field errors",
            extra={
                'request_id': request_id,
                'request_path': request.url.path
            }
        )
        self._track_error(ErrorCode.VALIDATION_ERROR.value)

        return self._create_error_response(
            message="Validation failed",
            status_code=400,
            errors=violations,
        )

    async def handle_http_exception(
        self,
        request: Request,
        exc: StarletteHTTPException
    ) -> JSONResponse:
        request_id = getattr(request.state, 'request_id', 'unknown')

        logger.warning(
            f"HTTP exception in request {request_id}: {exc.status_code} - {exc.detail}",
            extra={
                'request_id': request_id,
                'status_code': exc.status_code,
                'request_path': request.url.path
            }
        )

        return self._create_error_response(
            message=str(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    async def handle_generic_exception(
        self,
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """
        Handle unexpected exceptions with full error logging.

        Args:
            request: FastAPI request object
            exc: Exception instance

        Returns:
            JSONResponse with a generic message; details stay in the log
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        logger.error(
            f"Unhandled exception in request {request_id}: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                'request_id': request_id,
                'exception_type': type(exc).__name__,
                'request_path': request.url.path,
                'request_method': request.method,
                'client_ip': request.client.host if request.client else 'unknown'
            }
        )

        self._track_error(ErrorCode.INTERNAL_SERVER_ERROR.value)

        return self._create_error_response(
            message="Internal server error",
            status_code=500,
        )

    def _create_error_response(
        self,
        message: str,
        status_code: int,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JSONResponse:
        content: Dict[str, Any] = {"success": False, "message": message}
        if errors:
            content["errors"] = errors
        return JSONResponse(status_code=status_code, content=content, headers=headers)

    def _track_error(self, error_code: str) -> None:
        """
        Track error frequency for monitoring and alerting.

        Args:
            error_code: Error code to track
        """
        current_time = time.time()

        self.error_counts[error_code] = self.error_counts.get(error_code, 0) + 1
        self.last_error_time[error_code] = current_time

        if self.error_counts[error_code] % 10 == 0:
            logger.warning(
                f"High frequency error detected: {error_code} occurred {self.error_counts[error_code]} times"
            )

    def get_error_statistics(self) -> Dict[str, Any]:
        """
        Get error statistics for monitoring.

        Returns:
            Dictionary with error statistics
        """
        current_time = time.time()

        return {
            'error_counts': dict(self.error_counts),
            'recent_errors': {
                code: count for code, count in self.error_counts.items()
                if current_time - self.last_error_time.get(code, 0) < 3600  # Last hour
            },
            'total_errors': sum(self.error_counts.values())
        }


def setup_error_handlers(app: FastAPI) -> ErrorHandler:
    """
    Set up all error handlers for the FastAPI application.

    The handler instance is stored on ``app.state.error_handler`` so the
    health endpoint can report its statistics.

    Args:
        app: FastAPI application instance
    """
    error_handler = ErrorHandler()
    app.state.error_handler = error_handler

    @app.exception_handler(TourismAPIException)
    async def api_exception_handler(request: Request, exc: TourismAPIException):
        return await error_handler.handle_api_exception(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return await error_handler.handle_validation_error(request, exc)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return await error_handler.handle_http_exception(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException):
        return await error_handler.handle_http_exception(request, exc)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        return await error_handler.handle_generic_exception(request, exc)

    return error_handler
