"""Pytest configuration: isolate tests from ambient UPSERT_* configuration."""

from __future__ import annotations

import os
from typing import Generator

import pytest

from batch_upsert.config import get_settings
from batch_upsert.utils.logging import configure_logging


@pytest.fixture(scope="session", autouse=True)
def _json_logging() -> None:
    """Render package log events as JSON so tests can parse caplog records."""
    configure_logging()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop UPSERT_* variables and the cached Settings around every test."""
    for key in list(os.environ):
        if key.upper().startswith("UPSERT_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
