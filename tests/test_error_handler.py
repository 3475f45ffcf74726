"""
Tests for error handling
"""

from taskboard.utils.error_handler import (
    StoreError,
    TaskNotFoundError,
    ValidationError,
    format_error_message,
    handle_error,
)


def test_store_error_response():
    """Test store failures keep the upstream status"""
    response = handle_error(StoreError("GET /tasks returned 503", 503))

    assert response.message.startswith("Task store error")
    assert response.error_code == "503"
    assert StoreError("x").http_status == 502


def test_not_found_response():
    """Test not-found carries the task id"""
    response = handle_error(TaskNotFoundError("t1"))

    assert response.error_code == "not_found"
    assert response.details == {"task_id": "t1"}
    assert TaskNotFoundError("t1").http_status == 404


def test_validation_response():
    """Test validation errors"""
    response = handle_error(ValidationError("Task date must not be empty"))

    assert response.error_code == "validation"
    assert "Task date must not be empty" in response.message
    assert ValidationError("x").http_status == 400


def test_unexpected_error_message():
    """Test generic fallback text"""
    message = format_error_message(RuntimeError("boom"))
    assert "task server" in message
    assert "boom" not in message
