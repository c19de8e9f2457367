"""
Query/filter builder for listing error logs.

Turns the optional list parameters a caller supplies into one
storage-level query plus pagination metadata.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from error_tracker.core.domain.error_log import ErrorCategory, ErrorLogRecord, ProgrammingLanguage
from error_tracker.core.storage.store_protocol import ErrorLogQuery, ErrorLogStore
from error_tracker.utils.errors import InvalidInputError

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest row offset the storage backends accept (signed 64-bit)
MAX_OFFSET = 2 ** 63 - 1

# API sort keys and the record attribute each one sorts on
SORT_FIELDS: Dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
    "programmingLanguage": "programming_language",
    "category": "category",
    "severity": "severity",
    "timeToResolve": "time_to_resolve",
}
SORT_ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class ErrorLogFilter:
    """
    Typed list criteria for one owner.

    Attributes:
        owner_id: Authenticated owner (trusted, never from client input)
        page: 1-based page number
        limit: Page size
        programming_language: Exact-match language filter
        category: Exact-match category filter
        search: Case-insensitive substring over title/description/solution
        sort_by: API sort key (see SORT_FIELDS)
        sort_order: "asc" or "desc"
        max_limit: Largest accepted page size
    """
    owner_id: str
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    programming_language: Optional[str] = None
    category: Optional[str] = None
    search: Optional[str] = None
    sort_by: str = "createdAt"
    sort_order: str = "desc"
    max_limit: int = field(default=MAX_PAGE_SIZE, compare=False)

    def __post_init__(self):
        errors = []
        if not self.owner_id:
            errors.append({"field": "ownerId", "message": "Owner is required"})
        if self.page < 1:
            errors.append({"field": "page", "message": "Page must be a positive integer"})
        elif 1 <= self.limit <= self.max_limit and self.skip > MAX_OFFSET:
            errors.append({"field": "page", "message": "Page is out of range"})
        if self.limit < 1:
            errors.append({"field": "limit", "message": "Limit must be a positive integer"})
        elif self.limit > self.max_limit:
            errors.append({"field": "limit", "message": f"Limit cannot exceed {self.max_limit}"})
        if self.programming_language and self.programming_language not in _values(ProgrammingLanguage):
            errors.append({"field": "programmingLanguage", "message": "Unknown programming language"})
        if self.category and self.category not in _values(ErrorCategory):
            errors.append({"field": "category", "message": "Unknown category"})
        if self.sort_by not in SORT_FIELDS:
            errors.append({"field": "sortBy", "message": f"Cannot sort by '{self.sort_by}'"})
        if self.sort_order not in SORT_ORDERS:
            errors.append({"field": "sortOrder", "message": "Sort order must be 'asc' or 'desc'"})
        if errors:
            raise InvalidInputError("Invalid list parameters", errors)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def search_term(self) -> Optional[str]:
        """Search text with surrounding whitespace removed; None when blank"""
        if self.search is None:
            return None
        term = self.search.strip()
        return term or None


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata for one page of results"""
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


@dataclass
class ErrorLogPage:
    """One page of matching records plus pagination metadata"""
    records: List[ErrorLogRecord]
    pagination: Pagination


def _values(enum_cls) -> set:
    return {member.value for member in enum_cls}


def build_query(criteria: ErrorLogFilter) -> ErrorLogQuery:
    """
    Translate list criteria into a storage-level query.

    The owner constraint is always present. Language and category become
    exact-match constraints, a non-blank search term becomes an OR of
    substring matches over title, description and solution.
    """
    equals = []
    if criteria.programming_language:
        equals.append(("programming_language", criteria.programming_language))
    if criteria.category:
        equals.append(("category", criteria.category))

    return ErrorLogQuery(
        owner_id=criteria.owner_id,
        equals=tuple(equals),
        search=criteria.search_term,
        sort_field=SORT_FIELDS[criteria.sort_by],
        descending=criteria.sort_order == "desc",
        skip=criteria.skip,
        limit=criteria.limit,
    )


def paginate(total_items: int, page: int, limit: int) -> Pagination:
    """Build pagination metadata; total_pages = ceil(total_items / limit)"""
    return Pagination(
        current_page=page,
        total_pages=math.ceil(total_items / limit),
        total_items=total_items,
        items_per_page=limit,
    )


def fetch_page(store: ErrorLogStore, criteria: ErrorLogFilter) -> ErrorLogPage:
    """
    Fetch one page of an owner's error logs.

    A page past the end yields no records but still reports the true totals.
    """
    query = build_query(criteria)
    records = store.find(query)
    total = store.count(query)
    return ErrorLogPage(
        records=records,
        pagination=paginate(total, criteria.page, criteria.limit),
    )
