"""Structured logging configuration"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict

# Request context passed through `extra=` by the service and storage layers
CONTEXT_FIELDS = ("operation", "owner_id", "record_id")

NOISY_LOGGERS = ("sqlalchemy", "alembic", "uvicorn.access")

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per line.

    Carries the context fields when a caller supplied them, and the source
    location for warnings and above.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = str(value)

        if record.levelno >= logging.WARNING:
            entry['location'] = f"{record.module}:{record.funcName}:{record.lineno}"

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry['exception'] = {
                'type': exc_type.__name__,
                'message': str(exc_value),
                'traceback': self.formatException(record.exc_info),
            }

        return json.dumps(entry)


def setup_logging(level: str = "INFO", structured: bool = True) -> None:
    """
    Route all application logging to a single stdout handler.

    Args:
        level: Log level name, case-insensitive
        structured: JSON lines if True, plain text otherwise
    """
    level = level.upper()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(StructuredFormatter() if structured else logging.Formatter(PLAIN_FORMAT))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
