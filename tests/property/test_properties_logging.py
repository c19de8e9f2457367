"""Property-based tests for logging and error handling"""
import json
import logging
import sys

from error_tracker.utils.error_handler import ErrorHandler
from error_tracker.utils.errors import InvalidInputError, StorageError
from error_tracker.utils.logging_config import StructuredFormatter, setup_logging


def _record(msg, level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=exc_info
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_log_format():
    formatter = StructuredFormatter()

    log_data = json.loads(formatter.format(_record("Test message")))

    assert log_data['level'] == 'INFO'
    assert log_data['logger'] == 'test'
    assert log_data['message'] == 'Test message'
    assert 'timestamp' in log_data
    assert 'location' not in log_data


def test_exception_logging():
    formatter = StructuredFormatter()
    try:
        raise ValueError("Test exception")
    except ValueError:
        record = _record("Error occurred", logging.ERROR, sys.exc_info())

    log_data = json.loads(formatter.format(record))

    assert log_data['exception']['type'] == 'ValueError'
    assert log_data['exception']['message'] == 'Test exception'
    assert 'Traceback' in log_data['exception']['traceback']
    assert 'location' in log_data


def test_context_fields_included():
    formatter = StructuredFormatter()

    log_data = json.loads(formatter.format(
        _record("Created error log", operation="create", owner_id="a" * 32, record_id="b" * 32)
    ))

    assert log_data['operation'] == 'create'
    assert log_data['owner_id'] == "a" * 32
    assert log_data['record_id'] == "b" * 32


def test_setup_logging_uses_single_stdout_handler():
    setup_logging("debug", structured=True)
    setup_logging("INFO", structured=False)

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.handlers[0].stream is sys.stdout
    assert root.level == logging.INFO


def test_storage_error_response_hides_detail(caplog):
    handler = ErrorHandler()
    error = StorageError("insert", RuntimeError("password authentication failed for user tracker"))

    with caplog.at_level(logging.ERROR):
        response = handler.handle_storage_error("creating error log", error, owner_id="a" * 32)

    body = json.loads(response.body)
    assert response.status_code == 500
    assert body == {"success": False, "message": "Server error while creating error log"}
    assert "password authentication failed" in caplog.text


def test_validation_error_response():
    response = ErrorHandler().handle_validation_error(
        InvalidInputError("Invalid list parameters", [{"field": "page", "message": "Page must be a positive integer"}])
    )

    body = json.loads(response.body)
    assert response.status_code == 400
    assert body["errors"] == [{"field": "page", "message": "Page must be a positive integer"}]
    assert "data" not in body
