"""
Error handling utilities
"""

from typing import Optional
from taskboard.models.response import ErrorResponse
from taskboard.utils.logger import logger


class TaskboardError(Exception):
    """Base exception for taskboard errors"""
    http_status = 500


class StoreError(TaskboardError):
    """Task store request failed (unreachable server, rejected write)"""
    http_status = 502

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class TaskNotFoundError(TaskboardError):
    """Task with the given id does not exist"""
    http_status = 404

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class ValidationError(TaskboardError):
    """Rejected input: empty date, blank subtask title, unknown field"""
    http_status = 400


def handle_error(error: Exception) -> ErrorResponse:
    """
    Handle error and return user-friendly message

    Args:
        error: Exception to handle

    Returns:
        ErrorResponse with user-friendly message
    """
    logger.error(f"Error occurred: {error}", exc_info=True)

    if isinstance(error, StoreError):
        return ErrorResponse(
            message=f"Task store error: {error.message}",
            error_code=str(error.status_code) if error.status_code else None,
        )

    if isinstance(error, TaskNotFoundError):
        return ErrorResponse(
            message=str(error),
            error_code="not_found",
            details={"task_id": error.task_id},
        )

    if isinstance(error, ValidationError):
        return ErrorResponse(
            message=f"Validation error: {str(error)}",
            error_code="validation",
        )

    # Generic error message
    return ErrorResponse(
        message="Something went wrong. Please make sure the task server is running and try again.",
    )


def format_error_message(error: Exception) -> str:
    """
    Format error message for user

    Args:
        error: Exception to format

    Returns:
        User-friendly error message
    """
    error_response = handle_error(error)
    return error_response.message
