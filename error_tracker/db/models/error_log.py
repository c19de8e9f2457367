"""Error log database model"""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
    JSON,
)
from sqlalchemy.orm import relationship
from error_tracker.config.timezone import utc_now
from error_tracker.core.domain.error_log import (
    ErrorCategory,
    ErrorLogRecord,
    OwnerSummary,
    ProgrammingLanguage,
    Severity,
)
from error_tracker.db.database import Base
from error_tracker.utils.identifiers import new_record_id


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class ErrorLog(Base):
    """
    Error log model: one programming error a user ran into and how they fixed it.
    """
    __tablename__ = "error_logs"
    __table_args__ = (
        Index("ix_error_logs_owner_created", "owner_id", "created_at"),
        Index("ix_error_logs_owner_language", "owner_id", "programming_language"),
        Index("ix_error_logs_owner_category", "owner_id", "category"),
    )
    
    id = Column(String(32), primary_key=True, default=new_record_id)
    owner_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    programming_language = Column(
        SQLEnum(ProgrammingLanguage, values_callable=_enum_values, name="programminglanguage"),
        nullable=False,
        index=True,
    )
    category = Column(
        SQLEnum(ErrorCategory, values_callable=_enum_values, name="errorcategory"),
        nullable=False,
        index=True,
    )
    solution = Column(Text, nullable=False)
    severity = Column(
        SQLEnum(Severity, values_callable=_enum_values, name="severity"),
        nullable=False,
        default=Severity.MEDIUM,
    )
    tags = Column(JSON, nullable=False, default=list)
    is_resolved = Column(Boolean, nullable=False, default=True)
    time_to_resolve = Column(Float, nullable=True)  # minutes
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)
    
    # Relationship
    owner = relationship("User", back_populates="error_logs", lazy="joined")
    
    def to_record(self) -> ErrorLogRecord:
        """Convert to the storage-independent domain record"""
        return ErrorLogRecord(
            id=self.id,
            owner=OwnerSummary(id=self.owner.id, name=self.owner.name, email=self.owner.email),
            title=self.title,
            description=self.description,
            programming_language=self.programming_language,
            category=self.category,
            solution=self.solution,
            severity=self.severity,
            tags=list(self.tags or []),
            is_resolved=self.is_resolved,
            time_to_resolve=self.time_to_resolve,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
    
    def __repr__(self):
        return f"<ErrorLog(id={self.id}, language={self.programming_language}, category={self.category})>"
