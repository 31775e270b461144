"""
Core pytest configuration for the test suite.

Shared fixtures live in tests/test_fixtures/ and are imported at the bottom of this
module so every test package can use them without importing them explicitly.
"""

from __future__ import annotations

import logging

# Silence noisy third-party loggers before anything imports them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest

from dbvalidation.core.logging.builder import setup_logging

from .test_fixtures.settings_fixtures import make_test_settings, settings  # noqa: F401
from .test_fixtures.translator_fixtures import (  # noqa: F401
    schema_lookup,
    localizer,
    registry,
    rules,
    translator,
    sqlite_engine,
)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the package logging configuration once for the whole session.

    dictConfig replaces the root handlers, but pytest re-attaches its capture handler
    for every test phase, so caplog keeps working.
    """
    setup_logging(make_test_settings())
    yield
