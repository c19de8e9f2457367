"""Error log domain types"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class ProgrammingLanguage(str, Enum):
    """Programming languages an error can be tagged with"""
    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"
    PYTHON = "Python"
    JAVA = "Java"
    CPP = "C++"
    REACT = "React"
    NODEJS = "Node.js"
    PHP = "PHP"
    GO = "Go"
    RUST = "Rust"
    CSHARP = "C#"
    SWIFT = "Swift"
    KOTLIN = "Kotlin"
    RUBY = "Ruby"


class ErrorCategory(str, Enum):
    """Error category enumeration"""
    SYNTAX_ERROR = "Syntax Error"
    LOGIC_ERROR = "Logic Error"
    RUNTIME_ERROR = "Runtime Error"
    TYPE_ERROR = "Type Error"
    API_ERROR = "API Error"
    DATABASE_ERROR = "Database Error"
    PERFORMANCE_ISSUE = "Performance Issue"
    SECURITY_ISSUE = "Security Issue"
    BUILD_ERROR = "Build Error"
    DEPLOYMENT_ERROR = "Deployment Error"
    CONFIGURATION_ERROR = "Configuration Error"
    NETWORK_ERROR = "Network Error"


class Severity(str, Enum):
    """Severity enumeration"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


@dataclass(frozen=True)
class OwnerSummary:
    """Public shape of a record owner (no credential material)"""
    id: str
    name: str
    email: str


@dataclass
class ErrorLogRecord:
    """
    One user-authored incident report as returned by the storage layer.

    Attributes:
        id: Record identifier, immutable
        owner: Owning user, resolved to its public shape
        title: Short summary
        description: What happened
        programming_language: Language the error occurred in
        category: Error category
        solution: How it was fixed
        severity: Severity level
        tags: Ordered free-form tags
        is_resolved: Whether the error has been resolved
        time_to_resolve: Minutes spent resolving, if known
        created_at: Insert timestamp (UTC)
        updated_at: Last update timestamp (UTC)
    """
    id: str
    owner: OwnerSummary
    title: str
    description: str
    programming_language: ProgrammingLanguage
    category: ErrorCategory
    solution: str
    severity: Severity
    created_at: datetime
    updated_at: datetime
    tags: List[str] = field(default_factory=list)
    is_resolved: bool = True
    time_to_resolve: Optional[float] = None

    @property
    def owner_id(self) -> str:
        return self.owner.id


@dataclass(frozen=True)
class RecentErrorSummary:
    """Summary projection used by the analytics recent-items list"""
    id: str
    title: str
    description: str
    programming_language: ProgrammingLanguage
    category: ErrorCategory
    created_at: datetime

    @classmethod
    def from_record(cls, record: ErrorLogRecord) -> "RecentErrorSummary":
        return cls(
            id=record.id,
            title=record.title,
            description=record.description,
            programming_language=record.programming_language,
            category=record.category,
            created_at=record.created_at,
        )
