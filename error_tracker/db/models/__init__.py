"""Database models"""
from error_tracker.db.models.user import User
from error_tracker.db.models.error_log import ErrorLog

__all__ = [
    "User",
    "ErrorLog",
]
