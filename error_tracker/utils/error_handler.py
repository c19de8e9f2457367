"""Centralized error handling"""
import logging
from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse

from error_tracker.utils.errors import InvalidInputError, StorageError

logger = logging.getLogger(__name__)


def success_response(
    message: str,
    data: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> JSONResponse:
    """Build a success envelope"""
    content: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


def failure_response(
    message: str,
    status_code: int,
    errors: Optional[List[Dict[str, str]]] = None,
) -> JSONResponse:
    """Build a failure envelope; failures never carry a data payload"""
    content: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


class ErrorHandler:
    """
    Converts errors raised at an operation boundary into responses.

    Handles different types of errors:
    - Validation errors (400, reported with field details)
    - Not-found outcomes (404)
    - Storage failures (500, generic message, logged with stack trace)
    """

    def handle_validation_error(self, error: InvalidInputError) -> JSONResponse:
        """
        Report invalid input to the caller.

        Args:
            error: The validation failure
        """
        return failure_response(error.message, 400, error.errors)

    def handle_not_found(self, what: str = "Error log") -> JSONResponse:
        return failure_response(f"{what} not found", 404)

    def handle_storage_error(
        self,
        operation: str,
        error: StorageError,
        owner_id: Optional[str] = None,
    ) -> JSONResponse:
        """
        Handle a persistence failure.

        Actions:
        1. Log error with context and stack trace
        2. Return a generic server error without internal detail

        Args:
            operation: What was being done, e.g. "creating error log"
            error: The storage failure
            owner_id: Owner the request was made for
        """
        logger.error(
            f"STORAGE ERROR while {operation}: {error.cause or error}",
            extra={'operation': operation, 'owner_id': owner_id},
            exc_info=error,
        )
        return failure_response(f"Server error while {operation}", 500)


# Global error handler instance
error_handler = ErrorHandler()
