"""Error taxonomy"""
from typing import Dict, List, Optional


class ErrorTrackerError(Exception):
    """Base class for application errors"""


class InvalidInputError(ErrorTrackerError):
    """
    Input rejected before it reaches the storage layer.

    Raised for malformed identifiers, missing required fields, out-of-range
    pagination parameters and values outside a closed enumeration.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class StorageError(ErrorTrackerError):
    """The persistence layer failed (connectivity, constraint violation, ...)"""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        super().__init__(f"Storage failure during {operation}")
        self.operation = operation
        self.cause = cause
