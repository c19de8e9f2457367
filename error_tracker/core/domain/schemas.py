"""Request and response schemas for the error log API"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from error_tracker.config.timezone import as_utc
from error_tracker.core.domain.error_log import ErrorCategory, ProgrammingLanguage, Severity

MAX_TAG_LENGTH = 30


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorLogPayload(CamelModel):
    """
    Validated body for creating or replacing an error log.

    Constructing this model is the validation step: anything that reaches
    the storage layer has already passed these constraints.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    programming_language: ProgrammingLanguage
    category: ErrorCategory
    solution: str = Field(..., min_length=1, max_length=2000)
    severity: Severity = Severity.MEDIUM
    tags: List[str] = Field(default_factory=list)
    is_resolved: bool = True
    time_to_resolve: Optional[float] = Field(None, ge=0, allow_inf_nan=False)

    @field_validator("tags", mode="before")
    @classmethod
    def _drop_blank_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [tag for tag in value if not (isinstance(tag, str) and not tag.strip())]
        return value

    @field_validator("tags")
    @classmethod
    def _check_tag_length(cls, value: List[str]) -> List[str]:
        for tag in value:
            if len(tag) > MAX_TAG_LENGTH:
                raise ValueError(f"Tag cannot exceed {MAX_TAG_LENGTH} characters")
        return value


class OwnerOut(CamelModel):
    id: str
    name: str
    email: str


class ErrorLogOut(CamelModel):
    id: str
    owner: OwnerOut
    title: str
    description: str
    programming_language: ProgrammingLanguage
    category: ErrorCategory
    solution: str
    severity: Severity
    tags: List[str]
    is_resolved: bool
    time_to_resolve: Optional[float] = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return as_utc(value).isoformat()


class PaginationOut(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class LanguageStatOut(CamelModel):
    language: str
    count: int


class CategoryStatOut(CamelModel):
    category: str
    count: int


class SeverityStatOut(CamelModel):
    severity: str
    count: int


class MonthlyStatOut(CamelModel):
    year: int
    month: int
    count: int


class RecentErrorOut(CamelModel):
    id: str
    title: str
    description: str
    programming_language: ProgrammingLanguage
    category: ErrorCategory
    created_at: datetime

    @field_serializer("created_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return as_utc(value).isoformat()


class AnalyticsOut(CamelModel):
    total_errors: int
    language_stats: List[LanguageStatOut]
    category_stats: List[CategoryStatOut]
    monthly_stats: List[MonthlyStatOut]
    severity_stats: List[SeverityStatOut]
    recent_errors: List[RecentErrorOut]
