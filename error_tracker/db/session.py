"""Unit-of-work helper for scripts and tests that run outside a request"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from error_tracker.db.database import get_session

logger = logging.getLogger(__name__)


@contextmanager
def get_db_session(operation: str = "unit of work") -> Iterator[Session]:
    """
    Open a session, commit when the block exits cleanly, roll back otherwise.

    Usage:
        with get_db_session("creating user") as db:
            create_user(db, ...)
    """
    sessions = get_session()
    db = next(sessions)
    try:
        yield db
        db.commit()
    except Exception:
        logger.warning(f"Rolling back {operation}", extra={'operation': operation})
        db.rollback()
        raise
    finally:
        sessions.close()
