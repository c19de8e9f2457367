"""Automatic migration runner"""
import logging
import os
from typing import Optional
from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "migrations")


def get_alembic_config(database_url: Optional[str] = None) -> Config:
    """
    Build an Alembic config pointing at the bundled migrations.

    Args:
        database_url: Overrides the URL resolved from application config
    """
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", MIGRATIONS_DIR)
    if database_url:
        alembic_cfg.set_main_option("sqlalchemy.url", database_url)
    return alembic_cfg


def run_migrations(database_url: Optional[str] = None) -> None:
    """
    Run Alembic migrations automatically on startup.
    
    This function runs 'alembic upgrade head' programmatically.
    """
    try:
        alembic_cfg = get_alembic_config(database_url)
        
        # Run migrations
        logger.info("Running database migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed successfully")
        
    except Exception as e:
        logger.error(f"Failed to run database migrations: {e}")
        raise
