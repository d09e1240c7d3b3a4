"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any app import so that settings are
built from them rather than from a developer's .env file.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-REDACTED")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from app.adapters.llm.factory import clear_llm_client_cache
from app.core.config import settings
from app.core.rate_limit import reset_rate_limit


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch):
    """Give every test an empty rate limiter, a fresh client cache and a key."""
    monkeypatch.setattr(settings.llm, "api_key", "sk-ant-REDACTED")
    reset_rate_limit()
    clear_llm_client_cache()
    yield
    reset_rate_limit()
    clear_llm_client_cache()
