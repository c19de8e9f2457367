"""Error log routes. All routes act on the authenticated caller's records only."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from error_tracker.api.dependencies import get_current_owner, get_error_log_service
from error_tracker.config import AppConfig, get_config
from error_tracker.core.analytics.aggregator import AnalyticsBundle
from error_tracker.core.domain.error_log import ErrorLogRecord, OwnerSummary
from error_tracker.core.domain.schemas import (
    AnalyticsOut,
    CategoryStatOut,
    ErrorLogOut,
    ErrorLogPayload,
    LanguageStatOut,
    MonthlyStatOut,
    PaginationOut,
    RecentErrorOut,
    SeverityStatOut,
)
from error_tracker.core.query.filter_builder import ErrorLogFilter
from error_tracker.services.error_log_service import ErrorLogService
from error_tracker.utils.error_handler import error_handler, success_response
from error_tracker.utils.errors import StorageError

router = APIRouter(prefix="/api/error-logs", tags=["error-logs"])


def serialize_record(record: ErrorLogRecord) -> Dict[str, Any]:
    return ErrorLogOut.model_validate(record).model_dump(mode="json", by_alias=True)


def serialize_analytics(bundle: AnalyticsBundle) -> Dict[str, Any]:
    analytics = AnalyticsOut(
        total_errors=bundle.total_errors,
        language_stats=[LanguageStatOut(language=g.key, count=g.count) for g in bundle.language_stats],
        category_stats=[CategoryStatOut(category=g.key, count=g.count) for g in bundle.category_stats],
        monthly_stats=[
            MonthlyStatOut(year=m.year, month=m.month, count=m.count) for m in bundle.monthly_stats
        ],
        severity_stats=[SeverityStatOut(severity=g.key, count=g.count) for g in bundle.severity_stats],
        recent_errors=[RecentErrorOut.model_validate(r) for r in bundle.recent_errors],
    )
    return analytics.model_dump(mode="json", by_alias=True)


@router.post("")
def create_error_log(
    payload: ErrorLogPayload,
    owner: OwnerSummary = Depends(get_current_owner),
    service: ErrorLogService = Depends(get_error_log_service),
):
    try:
        record = service.create_error_log(owner.id, payload)
    except StorageError as e:
        return error_handler.handle_storage_error("creating error log", e, owner.id)
    return success_response(
        "Error log created successfully",
        {"errorLog": serialize_record(record)},
        status_code=201,
    )


@router.get("")
def list_error_logs(
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    programming_language: Optional[str] = Query(None, alias="programmingLanguage"),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    owner: OwnerSummary = Depends(get_current_owner),
    service: ErrorLogService = Depends(get_error_log_service),
    config: AppConfig = Depends(get_config),
):
    criteria = ErrorLogFilter(
        owner_id=owner.id,
        page=page,
        limit=limit if limit is not None else config.api.default_page_size,
        programming_language=programming_language or None,
        category=category or None,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        max_limit=config.api.max_page_size,
    )
    try:
        result = service.list_error_logs(criteria)
    except StorageError as e:
        return error_handler.handle_storage_error("fetching error logs", e, owner.id)
    return success_response(
        "Error logs retrieved successfully",
        {
            "errorLogs": [serialize_record(r) for r in result.records],
            "pagination": PaginationOut.model_validate(result.pagination).model_dump(by_alias=True),
        },
    )


@router.get("/analytics")
def get_analytics(
    owner: OwnerSummary = Depends(get_current_owner),
    service: ErrorLogService = Depends(get_error_log_service),
):
    try:
        bundle = service.get_analytics(owner.id)
    except StorageError as e:
        return error_handler.handle_storage_error("fetching analytics", e, owner.id)
    return success_response("Analytics retrieved successfully", serialize_analytics(bundle))


@router.get("/{record_id}")
def get_error_log(
    record_id: str,
    owner: OwnerSummary = Depends(get_current_owner),
    service: ErrorLogService = Depends(get_error_log_service),
):
    try:
        record = service.get_error_log(owner.id, record_id)
    except StorageError as e:
        return error_handler.handle_storage_error("fetching error log", e, owner.id)
    if record is None:
        return error_handler.handle_not_found()
    return success_response("Error log retrieved successfully", {"errorLog": serialize_record(record)})


@router.put("/{record_id}")
def update_error_log(
    record_id: str,
    payload: ErrorLogPayload,
    owner: OwnerSummary = Depends(get_current_owner),
    service: ErrorLogService = Depends(get_error_log_service),
):
    try:
        record = service.update_error_log(owner.id, record_id, payload)
    except StorageError as e:
        return error_handler.handle_storage_error("updating error log", e, owner.id)
    if record is None:
        return error_handler.handle_not_found()
    return success_response("Error log updated successfully", {"errorLog": serialize_record(record)})


@router.delete("/{record_id}")
def delete_error_log(
    record_id: str,
    owner: OwnerSummary = Depends(get_current_owner),
    service: ErrorLogService = Depends(get_error_log_service),
):
    try:
        deleted = service.delete_error_log(owner.id, record_id)
    except StorageError as e:
        return error_handler.handle_storage_error("deleting error log", e, owner.id)
    if not deleted:
        return error_handler.handle_not_found()
    return success_response("Error log deleted successfully")
