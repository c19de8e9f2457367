"""Database connection and session management"""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator

Base = declarative_base()

# Global engine and session maker
_engine = None
_SessionLocal = None


def init_database(database_url: str, echo: bool = False) -> None:
    """
    Initialize database engine and session maker.
    
    Args:
        database_url: SQLAlchemy connection URL (SQLite or PostgreSQL)
        echo: Log emitted SQL
    """
    global _engine, _SessionLocal
    
    if database_url.startswith("sqlite"):
        engine_kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            # Share one in-memory database across threads (TestClient runs
            # sync routes in a threadpool)
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs = {
            "pool_pre_ping": True,  # Verify connections before using
            "pool_size": 5,
            "max_overflow": 10,
        }
    
    _engine = create_engine(database_url, echo=echo, **engine_kwargs)
    if database_url.startswith("sqlite"):
        event.listen(_engine, "connect", _register_unicode_lower)
    
    _SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=_engine
    )


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_unicode_lower(dbapi_connection, connection_record) -> None:
    """Replace SQLite's ASCII-only lower() with Unicode case mapping"""
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def is_initialized() -> bool:
    """Check whether init_database() has been called"""
    return _engine is not None


def get_engine():
    """Get database engine"""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _engine


def get_session() -> Generator[Session, None, None]:
    """
    Get database session.
    
    Yields:
        Database session
    """
    if _SessionLocal is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    
    db = _SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_all_tables() -> None:
    """Create all tables that do not exist yet"""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    # Register models on Base.metadata
    import error_tracker.db.models  # noqa: F401
    Base.metadata.create_all(bind=_engine)


def drop_all_tables() -> None:
    """Drop all tables (for testing purposes)"""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    Base.metadata.drop_all(bind=_engine)
