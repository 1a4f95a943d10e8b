"""Pytest configuration and fixtures.

Provides settings isolation, shared error fixtures and tracing toggles.
"""

from __future__ import annotations

import os

import pytest

from railway.core.config import get_settings
from railway.errors import ConflictError, NotFoundError, ValidationError

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch):
    """Clear RAILWAY_* env vars and the cached Settings around each test."""
    for key in list(os.environ.keys()):
        if key.startswith("RAILWAY_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def trace_on(monkeypatch):
    """Turn combinator tracing on for one test."""
    monkeypatch.setenv("RAILWAY_TRACE_COMBINATORS", "true")
    get_settings.cache_clear()


# =============================================================================
# Shared Errors
# =============================================================================


@pytest.fixture
def email_invalid() -> ValidationError:
    return ValidationError.for_field("email", "Email address is not valid.")


@pytest.fixture
def name_required() -> ValidationError:
    return ValidationError.for_field("name", "Name is required.")


@pytest.fixture
def user_missing() -> NotFoundError:
    return NotFoundError("User not found: 42")


@pytest.fixture
def version_conflict() -> ConflictError:
    return ConflictError("Version mismatch")
