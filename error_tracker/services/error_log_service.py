"""
Error log service.

CRUD, listing and analytics operations for one authenticated owner,
over an injected ErrorLogStore.
"""
import logging
from typing import Optional

from error_tracker.core.analytics.aggregator import AnalyticsAggregator, AnalyticsBundle
from error_tracker.core.domain.error_log import ErrorLogRecord
from error_tracker.core.domain.schemas import ErrorLogPayload
from error_tracker.core.query.filter_builder import ErrorLogFilter, ErrorLogPage, fetch_page
from error_tracker.core.storage.store_protocol import ErrorLogStore
from error_tracker.utils.errors import InvalidInputError
from error_tracker.utils.identifiers import is_valid_record_id

logger = logging.getLogger(__name__)


def _require_valid_id(record_id: str) -> None:
    if not is_valid_record_id(record_id):
        raise InvalidInputError(
            "Invalid error log ID",
            [{"field": "id", "message": "Malformed identifier"}],
        )


class ErrorLogService:
    """
    Error log operations scoped to an owner.

    Every by-id lookup matches id and owner together; a record owned by
    someone else is reported exactly like a missing one (None / False).
    """

    def __init__(self, store: ErrorLogStore):
        """
        Initialize error log service.

        Args:
            store: Storage capability for error log records
        """
        self.store = store
        self.aggregator = AnalyticsAggregator(store)

    def create_error_log(self, owner_id: str, payload: ErrorLogPayload) -> ErrorLogRecord:
        record = self.store.insert(owner_id, payload)
        logger.info(
            f"Created error log '{record.title}' ({record.programming_language.value}, {record.category.value})",
            extra={'operation': 'create', 'owner_id': owner_id, 'record_id': record.id},
        )
        return record

    def list_error_logs(self, criteria: ErrorLogFilter) -> ErrorLogPage:
        page = fetch_page(self.store, criteria)
        logger.debug(
            f"Listed page {page.pagination.current_page}/{page.pagination.total_pages} "
            f"({len(page.records)} of {page.pagination.total_items} records)",
            extra={'operation': 'list', 'owner_id': criteria.owner_id},
        )
        return page

    def get_error_log(self, owner_id: str, record_id: str) -> Optional[ErrorLogRecord]:
        _require_valid_id(record_id)
        return self.store.find_one(record_id, owner_id)

    def update_error_log(
        self,
        owner_id: str,
        record_id: str,
        payload: ErrorLogPayload,
    ) -> Optional[ErrorLogRecord]:
        """Replace all mutable fields of an owned record; None if not found"""
        _require_valid_id(record_id)
        record = self.store.update_one(record_id, owner_id, payload)
        if record:
            logger.info(
                "Updated error log",
                extra={'operation': 'update', 'owner_id': owner_id, 'record_id': record_id},
            )
        return record

    def delete_error_log(self, owner_id: str, record_id: str) -> bool:
        _require_valid_id(record_id)
        deleted = self.store.delete_one(record_id, owner_id)
        if deleted:
            logger.info(
                "Deleted error log",
                extra={'operation': 'delete', 'owner_id': owner_id, 'record_id': record_id},
            )
        return deleted

    def get_analytics(self, owner_id: str) -> AnalyticsBundle:
        return self.aggregator.compute(owner_id)
