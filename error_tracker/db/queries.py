"""Database query utilities"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_, extract, func, or_
from sqlalchemy.exc import SQLAlchemyError
from error_tracker.config.timezone import utc_now
from error_tracker.core.domain.error_log import ErrorLogRecord
from error_tracker.core.domain.schemas import ErrorLogPayload
from error_tracker.core.storage.store_protocol import (
    GROUPABLE_FIELDS,
    FILTERABLE_FIELDS,
    SEARCHABLE_FIELDS,
    SORTABLE_FIELDS,
    ErrorLogQuery,
    GroupCount,
    MonthlyCount,
)
from error_tracker.db.models.error_log import ErrorLog
from error_tracker.db.models.user import User
from error_tracker.utils.errors import StorageError

logger = logging.getLogger(__name__)


def create_user(db: Session, name: str, email: str, api_token_hash: str) -> User:
    """Create a new user"""
    user = User(name=name, email=email, api_token_hash=api_token_hash)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email address"""
    return db.query(User).filter(User.email == email).first()


def get_user_by_token_hash(db: Session, api_token_hash: str) -> Optional[User]:
    """Resolve an API token digest to its user"""
    return db.query(User).filter(User.api_token_hash == api_token_hash).first()


def rotate_user_token(db: Session, user: User, api_token_hash: str) -> User:
    """Replace a user's API token digest"""
    user.api_token_hash = api_token_hash
    db.commit()
    db.refresh(user)
    return user


class SqlAlchemyErrorLogStore:
    """
    ErrorLogStore backed by a SQLAlchemy session.

    Each method is one unit of work: it commits on success, and on failure
    rolls the session back and raises StorageError.
    """

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, operation: str, error: SQLAlchemyError) -> StorageError:
        self.db.rollback()
        logger.error(
            f"Database error during {operation}: {error}",
            extra={'operation': operation},
        )
        return StorageError(operation, error)

    def _owned(self, query: ErrorLogQuery):
        """Translate the filtering part of a query into a SQLAlchemy query"""
        conditions = [ErrorLog.owner_id == query.owner_id]
        for field_name, value in query.equals:
            if field_name not in FILTERABLE_FIELDS:
                raise ValueError(f"Cannot filter on field '{field_name}'")
            conditions.append(getattr(ErrorLog, field_name) == value)
        if query.search:
            search_fields = [f for f in query.search_fields if f in SEARCHABLE_FIELDS]
            conditions.append(or_(*[
                getattr(ErrorLog, f).icontains(query.search, autoescape=True)
                for f in search_fields
            ]))
        return self.db.query(ErrorLog).filter(and_(*conditions))

    def _get_owned(self, record_id: str, owner_id: str) -> Optional[ErrorLog]:
        return (
            self.db.query(ErrorLog)
            .filter(ErrorLog.id == record_id, ErrorLog.owner_id == owner_id)
            .first()
        )

    def insert(self, owner_id: str, payload: ErrorLogPayload) -> ErrorLogRecord:
        """Create an error log record"""
        error_log = ErrorLog(owner_id=owner_id, **payload.model_dump())
        try:
            self.db.add(error_log)
            self.db.commit()
            self.db.refresh(error_log)
            return error_log.to_record()
        except SQLAlchemyError as e:
            raise self._fail("insert", e) from e

    def find(self, query: ErrorLogQuery) -> List[ErrorLogRecord]:
        if query.sort_field not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort on field '{query.sort_field}'")
        column = getattr(ErrorLog, query.sort_field)
        order = column.desc() if query.descending else column.asc()
        try:
            q = self._owned(query).order_by(order.nulls_last(), ErrorLog.id.asc())
            if query.skip:
                q = q.offset(query.skip)
            if query.limit is not None:
                q = q.limit(query.limit)
            return [row.to_record() for row in q.all()]
        except SQLAlchemyError as e:
            raise self._fail("find", e) from e

    def count(self, query: ErrorLogQuery) -> int:
        try:
            return self._owned(query).count()
        except SQLAlchemyError as e:
            raise self._fail("count", e) from e

    def find_one(self, record_id: str, owner_id: str) -> Optional[ErrorLogRecord]:
        try:
            error_log = self._get_owned(record_id, owner_id)
            return error_log.to_record() if error_log else None
        except SQLAlchemyError as e:
            raise self._fail("find_one", e) from e

    def update_one(
        self,
        record_id: str,
        owner_id: str,
        payload: ErrorLogPayload,
    ) -> Optional[ErrorLogRecord]:
        """Replace the mutable fields of an owned record"""
        try:
            error_log = self._get_owned(record_id, owner_id)
            if not error_log:
                return None
            for key, value in payload.model_dump().items():
                setattr(error_log, key, value)
            error_log.updated_at = utc_now()
            self.db.commit()
            self.db.refresh(error_log)
            return error_log.to_record()
        except SQLAlchemyError as e:
            raise self._fail("update_one", e) from e

    def delete_one(self, record_id: str, owner_id: str) -> bool:
        try:
            error_log = self._get_owned(record_id, owner_id)
            if not error_log:
                return False
            self.db.delete(error_log)
            self.db.commit()
            return True
        except SQLAlchemyError as e:
            raise self._fail("delete_one", e) from e

    def count_by_field(self, owner_id: str, field_name: str) -> List[GroupCount]:
        if field_name not in GROUPABLE_FIELDS:
            raise ValueError(f"Cannot group on field '{field_name}'")
        column = getattr(ErrorLog, field_name)
        try:
            rows = (
                self.db.query(column, func.count(ErrorLog.id))
                .filter(ErrorLog.owner_id == owner_id)
                .group_by(column)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("count_by_field", e) from e
        return [GroupCount(key=getattr(key, "value", key), count=count) for key, count in rows]

    def count_by_month(self, owner_id: str) -> List[MonthlyCount]:
        year = extract("year", ErrorLog.created_at)
        month = extract("month", ErrorLog.created_at)
        try:
            rows = (
                self.db.query(year, month, func.count(ErrorLog.id))
                .filter(ErrorLog.owner_id == owner_id)
                .group_by(year, month)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("count_by_month", e) from e
        return [MonthlyCount(year=int(y), month=int(m), count=count) for y, m, count in rows]
