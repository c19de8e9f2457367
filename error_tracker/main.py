"""
Main application entry point.

This module initializes and runs the error tracker API.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from error_tracker.api.error_logs import router as error_logs_router
from error_tracker.config import get_config
from error_tracker.utils.error_handler import error_handler, failure_response
from error_tracker.utils.errors import InvalidInputError, StorageError
from error_tracker.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    config = get_config()
    setup_logging(config.logging.level, config.logging.structured)

    logger.info("=" * 60)
    logger.info("Error Tracker API Starting...")
    logger.info("=" * 60)

    try:
        from error_tracker.db.database import create_all_tables, init_database, is_initialized

        if not is_initialized():
            init_database(config.database.url, echo=config.database.echo)
        logger.info("✓ Database initialized")

        if config.database.auto_migrate:
            from error_tracker.db.migration_runner import run_migrations
            run_migrations(config.database.url)
            logger.info("✓ Database migrations completed")
        else:
            create_all_tables()
            logger.info("✓ Database tables ensured")

        app.state.config = config

        logger.info("=" * 60)
        logger.info("Error Tracker API Started Successfully")
        logger.info(f"Environment: {config.environment}")
        logger.info("=" * 60)
    except Exception as e:
        logger.error(f"Failed to start application: {e}", exc_info=True)
        raise

    yield

    # Shutdown
    logger.info("Error Tracker API Shutting Down...")


# Create FastAPI app
app = FastAPI(
    title="Error Tracker API",
    description="Personal log of programming errors, their solutions and statistics",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_config().api.client_url],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(error_logs_router)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return error_handler.handle_validation_error(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "header")]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return failure_response("Validation failed", 400, errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return failure_response(str(exc.detail), exc.status_code)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return error_handler.handle_storage_error(exc.operation, exc)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return failure_response("Server error", 500)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "success": True,
        "message": "Welcome to Error Tracker API",
        "version": "1.0.0",
        "endpoints": {
            "errorLogs": "/api/error-logs",
            "analytics": "/api/error-logs/analytics",
            "health": "/api/health",
        },
    }


@app.get("/api/health")
def health_check():
    """
    Health check endpoint.

    Returns:
        JSON with health status
    """
    try:
        # Check database connection
        from error_tracker.db.database import get_engine
        from sqlalchemy import text

        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        db_status = "healthy"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "unhealthy"

    # Overall status
    is_healthy = db_status == "healthy"

    response = {
        "success": is_healthy,
        "message": "Server is running" if is_healthy else "Database unavailable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": get_config().environment,
        "database": db_status,
    }

    status_code = 200 if is_healthy else 503
    return JSONResponse(content=response, status_code=status_code)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "error_tracker.main:app",
        host="0.0.0.0",
        port=8000,
        log_level="info",
        access_log=True
    )
