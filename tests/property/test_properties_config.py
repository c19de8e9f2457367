"""
Property-based tests for configuration management.
"""
import os
from contextlib import contextmanager

import pytest
from hypothesis import given, settings, strategies as st

from error_tracker.config.settings import AppConfig, DatabaseConfig, get_config, reset_config


@contextmanager
def environment(**env_vars):
    """Temporarily set environment variables"""
    env_backup = {}
    for key, value in env_vars.items():
        env_backup[key] = os.environ.get(key)
        os.environ[key] = value
    try:
        yield
    finally:
        for key, value in env_backup.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


def test_defaults_are_valid():
    config = AppConfig()
    config.validate_all()

    assert config.api.default_page_size == 10
    assert config.api.max_page_size == 100
    assert config.database.url.startswith("sqlite")


# Property: page size validation
@given(
    default_size=st.integers(min_value=-5, max_value=200),
    max_size=st.integers(min_value=-5, max_value=200),
)
@settings(max_examples=100)
def test_page_size_validation(default_size, max_size):
    """
    Configuration is accepted only when both page sizes are positive and the
    default does not exceed the maximum; otherwise validation fails clearly.
    """
    with environment(API__DEFAULT_PAGE_SIZE=str(default_size), API__MAX_PAGE_SIZE=str(max_size)):
        config = AppConfig()
        if 1 <= default_size <= max_size:
            config.validate_all()
            assert config.api.default_page_size == default_size
        else:
            with pytest.raises(ValueError) as exc_info:
                config.validate_all()
            assert "Configuration validation failed" in str(exc_info.value)


def test_unknown_log_level_rejected():
    with environment(LOG_LEVEL="CHATTY"):
        with pytest.raises(ValueError) as exc_info:
            AppConfig().validate_all()
    assert "LOG_LEVEL" in str(exc_info.value)


def test_postgres_settings_build_url():
    with environment(
        POSTGRES_USER="tracker",
        POSTGRES_PASSWORD="secret",
        POSTGRES_DB="errors",
        POSTGRES_HOST="db",
        POSTGRES_PORT="5433",
    ):
        database = DatabaseConfig()

    assert database.url == "postgresql://tracker:secret@db:5433/errors"


def test_postgres_host_requires_database_name():
    with environment(POSTGRES_HOST="db", POSTGRES_USER="tracker", POSTGRES_DB=""):
        with pytest.raises(ValueError) as exc_info:
            AppConfig().validate_all()
    assert "POSTGRES_DB" in str(exc_info.value)


def test_get_config_is_cached_until_reset():
    reset_config()
    try:
        first = get_config()
        assert get_config() is first
        with environment(API__DEFAULT_PAGE_SIZE="25"):
            reset_config()
            assert get_config().api.default_page_size == 25
    finally:
        reset_config()
