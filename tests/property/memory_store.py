"""In-memory ErrorLogStore used to test components without a database"""
import dataclasses
from collections import Counter
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from error_tracker.core.domain.error_log import ErrorLogRecord, OwnerSummary
from error_tracker.core.domain.schemas import ErrorLogPayload
from error_tracker.core.storage.store_protocol import ErrorLogQuery, GroupCount, MonthlyCount
from error_tracker.utils.identifiers import new_record_id


def _plain(value):
    return getattr(value, "value", value)


class InMemoryErrorLogStore:
    """
    ErrorLogStore keeping records in a dict.

    `clock` supplies creation/update timestamps; by default each call
    advances one second from a fixed start so creation order is strict.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.records: Dict[str, ErrorLogRecord] = {}
        self.owners: Dict[str, OwnerSummary] = {}
        self._tick = datetime(2024, 1, 1)
        self.clock = clock or self._next_tick

    def _next_tick(self) -> datetime:
        self._tick += timedelta(seconds=1)
        return self._tick

    def add_owner(self, name: str = "Ada", email: Optional[str] = None) -> OwnerSummary:
        owner_id = new_record_id()
        owner = OwnerSummary(id=owner_id, name=name, email=email or f"{owner_id}@example.com")
        self.owners[owner_id] = owner
        return owner

    def _matches(self, record: ErrorLogRecord, query: ErrorLogQuery) -> bool:
        if record.owner_id != query.owner_id:
            return False
        for field_name, value in query.equals:
            if _plain(getattr(record, field_name)) != value:
                return False
        if query.search:
            term = query.search.lower()
            return any(term in getattr(record, f).lower() for f in query.search_fields)
        return True

    def insert(self, owner_id: str, payload: ErrorLogPayload) -> ErrorLogRecord:
        now = self.clock()
        record = ErrorLogRecord(
            id=new_record_id(),
            owner=self.owners[owner_id],
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )
        self.records[record.id] = record
        return dataclasses.replace(record)

    def find(self, query: ErrorLogQuery) -> List[ErrorLogRecord]:
        matches = sorted(
            (r for r in self.records.values() if self._matches(r, query)),
            key=lambda r: r.id,
        )
        present = [r for r in matches if getattr(r, query.sort_field) is not None]
        missing = [r for r in matches if getattr(r, query.sort_field) is None]
        present.sort(key=lambda r: _plain(getattr(r, query.sort_field)), reverse=query.descending)
        ordered = present + missing
        end = None if query.limit is None else query.skip + query.limit
        return [dataclasses.replace(r) for r in ordered[query.skip:end]]

    def count(self, query: ErrorLogQuery) -> int:
        return sum(1 for r in self.records.values() if self._matches(r, query))

    def find_one(self, record_id: str, owner_id: str) -> Optional[ErrorLogRecord]:
        record = self.records.get(record_id)
        if record is None or record.owner_id != owner_id:
            return None
        return dataclasses.replace(record)

    def update_one(self, record_id: str, owner_id: str, payload: ErrorLogPayload) -> Optional[ErrorLogRecord]:
        record = self.records.get(record_id)
        if record is None or record.owner_id != owner_id:
            return None
        updated = dataclasses.replace(record, updated_at=self.clock(), **payload.model_dump())
        self.records[record_id] = updated
        return dataclasses.replace(updated)

    def delete_one(self, record_id: str, owner_id: str) -> bool:
        record = self.records.get(record_id)
        if record is None or record.owner_id != owner_id:
            return False
        del self.records[record_id]
        return True

    def count_by_field(self, owner_id: str, field_name: str) -> List[GroupCount]:
        counts = Counter(
            _plain(getattr(r, field_name)) for r in self.records.values() if r.owner_id == owner_id
        )
        return [GroupCount(key=key, count=count) for key, count in counts.items()]

    def count_by_month(self, owner_id: str) -> List[MonthlyCount]:
        counts = Counter(
            (r.created_at.year, r.created_at.month)
            for r in self.records.values()
            if r.owner_id == owner_id
        )
        return [MonthlyCount(year=y, month=m, count=c) for (y, m), c in counts.items()]
