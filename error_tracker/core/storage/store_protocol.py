"""Storage capability protocol for error log records"""
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from error_tracker.core.domain.error_log import ErrorLogRecord
from error_tracker.core.domain.schemas import ErrorLogPayload

# Record attributes a query may filter, sort or group on
FILTERABLE_FIELDS = frozenset({"programming_language", "category", "severity"})
SEARCHABLE_FIELDS = ("title", "description", "solution")
SORTABLE_FIELDS = frozenset({
    "created_at",
    "updated_at",
    "title",
    "programming_language",
    "category",
    "severity",
    "time_to_resolve",
})
GROUPABLE_FIELDS = FILTERABLE_FIELDS


@dataclass(frozen=True)
class ErrorLogQuery:
    """
    Storage-level query over one owner's records.

    The owner constraint is mandatory. `equals` constraints and the search
    clause are ANDed together; the search clause is a case-insensitive
    literal substring match ORed across `search_fields`.
    """
    owner_id: str
    equals: Tuple[Tuple[str, str], ...] = ()
    search: Optional[str] = None
    search_fields: Tuple[str, ...] = SEARCHABLE_FIELDS
    sort_field: str = "created_at"
    descending: bool = True
    skip: int = 0
    limit: Optional[int] = None


@dataclass(frozen=True)
class GroupCount:
    """Number of records sharing one value of a grouped field"""
    key: str
    count: int


@dataclass(frozen=True)
class MonthlyCount:
    """Number of records created in one (year, month) bucket"""
    year: int
    month: int
    count: int


class ErrorLogStore(Protocol):
    """
    Persistent collection of error log records.

    Every by-id operation filters by id AND owner in a single call, so a
    record owned by someone else is indistinguishable from a missing one.
    Implementations raise StorageError when the backend fails.
    """

    def insert(self, owner_id: str, payload: ErrorLogPayload) -> ErrorLogRecord:
        """Persist a new record and return it with id and timestamps set"""
        ...

    def find(self, query: ErrorLogQuery) -> List[ErrorLogRecord]:
        """Return matching records, sorted then sliced by skip/limit"""
        ...

    def count(self, query: ErrorLogQuery) -> int:
        """Count matching records, ignoring sort and skip/limit"""
        ...

    def find_one(self, record_id: str, owner_id: str) -> Optional[ErrorLogRecord]:
        ...

    def update_one(
        self,
        record_id: str,
        owner_id: str,
        payload: ErrorLogPayload,
    ) -> Optional[ErrorLogRecord]:
        """Replace the mutable fields; None if absent or not owned"""
        ...

    def delete_one(self, record_id: str, owner_id: str) -> bool:
        """Delete a record; False if absent or not owned"""
        ...

    def count_by_field(self, owner_id: str, field_name: str) -> List[GroupCount]:
        """Group the owner's records by a categorical field (unordered)"""
        ...

    def count_by_month(self, owner_id: str) -> List[MonthlyCount]:
        """Group the owner's records by UTC (year, month) of creation (unordered)"""
        ...
