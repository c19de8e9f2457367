"""
Analytics aggregation over one owner's error logs.

Each statistic is a named function over the store so it can be tested on
its own; AnalyticsAggregator composes them into a single bundle. Nothing
is cached: every call reads the store afresh.
"""
import logging
from dataclasses import dataclass
from typing import List

from error_tracker.core.domain.error_log import RecentErrorSummary
from error_tracker.core.storage.store_protocol import (
    ErrorLogQuery,
    ErrorLogStore,
    GroupCount,
    MonthlyCount,
)

logger = logging.getLogger(__name__)

MONTHLY_TREND_BUCKETS = 12
RECENT_ERRORS_LIMIT = 5


@dataclass
class AnalyticsBundle:
    """Descriptive statistics for one owner's error logs"""
    total_errors: int
    language_stats: List[GroupCount]
    category_stats: List[GroupCount]
    monthly_stats: List[MonthlyCount]
    severity_stats: List[GroupCount]
    recent_errors: List[RecentErrorSummary]


def total_count(store: ErrorLogStore, owner_id: str) -> int:
    return store.count(ErrorLogQuery(owner_id=owner_id))


def group_by(store: ErrorLogStore, owner_id: str, field_name: str) -> List[GroupCount]:
    """
    Count the owner's records per value of a categorical field.

    Sorted by count descending; equal counts are ordered by key so the
    result is deterministic.
    """
    groups = store.count_by_field(owner_id, field_name)
    return sorted(groups, key=lambda g: (-g.count, g.key))


def language_breakdown(store: ErrorLogStore, owner_id: str) -> List[GroupCount]:
    return group_by(store, owner_id, "programming_language")


def category_breakdown(store: ErrorLogStore, owner_id: str) -> List[GroupCount]:
    return group_by(store, owner_id, "category")


def severity_breakdown(store: ErrorLogStore, owner_id: str) -> List[GroupCount]:
    return group_by(store, owner_id, "severity")


def monthly_trend(
    store: ErrorLogStore,
    owner_id: str,
    buckets: int = MONTHLY_TREND_BUCKETS,
) -> List[MonthlyCount]:
    """
    Records per (year, month) of creation, newest month first.

    Only months with at least one record appear; at most `buckets` are kept.
    """
    months = store.count_by_month(owner_id)
    months = sorted(months, key=lambda m: (m.year, m.month), reverse=True)
    return months[:buckets]


def recent_errors(
    store: ErrorLogStore,
    owner_id: str,
    limit: int = RECENT_ERRORS_LIMIT,
) -> List[RecentErrorSummary]:
    """The owner's most recently created records, as summaries"""
    query = ErrorLogQuery(owner_id=owner_id, sort_field="created_at", descending=True, limit=limit)
    return [RecentErrorSummary.from_record(record) for record in store.find(query)]


class AnalyticsAggregator:
    """Computes the analytics bundle for an owner"""

    def __init__(self, store: ErrorLogStore):
        self.store = store

    def compute(self, owner_id: str) -> AnalyticsBundle:
        """
        Compute all statistics for one owner.

        An owner without records gets zero counts and empty lists.
        """
        bundle = AnalyticsBundle(
            total_errors=total_count(self.store, owner_id),
            language_stats=language_breakdown(self.store, owner_id),
            category_stats=category_breakdown(self.store, owner_id),
            monthly_stats=monthly_trend(self.store, owner_id),
            severity_stats=severity_breakdown(self.store, owner_id),
            recent_errors=recent_errors(self.store, owner_id),
        )
        logger.debug(
            f"Computed analytics: {bundle.total_errors} records, "
            f"{len(bundle.monthly_stats)} monthly buckets",
            extra={'operation': 'analytics', 'owner_id': owner_id},
        )
        return bundle
