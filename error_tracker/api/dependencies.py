"""Dependencies for FastAPI routes."""
import logging
from typing import Generator, Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from error_tracker.core.domain.error_log import OwnerSummary
from error_tracker.core.storage.store_protocol import ErrorLogStore
from error_tracker.db.database import get_session
from error_tracker.db.queries import SqlAlchemyErrorLogStore, get_user_by_token_hash
from error_tracker.services.error_log_service import ErrorLogService
from error_tracker.utils.errors import StorageError
from error_tracker.utils.identifiers import hash_api_token

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """One database session per request."""
    yield from get_session()


def get_store(db: Session = Depends(get_db)) -> ErrorLogStore:
    return SqlAlchemyErrorLogStore(db)


def get_error_log_service(store: ErrorLogStore = Depends(get_store)) -> ErrorLogService:
    return ErrorLogService(store)


def get_current_owner(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> OwnerSummary:
    """Resolve the bearer token to the calling user; 401 if missing or unknown."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")
    token = authorization[len("bearer "):].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")
    try:
        user = get_user_by_token_hash(db, hash_api_token(token))
    except SQLAlchemyError as e:
        raise StorageError("authenticating request", e) from e
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid token.")
    return OwnerSummary(id=user.id, name=user.name, email=user.email)
