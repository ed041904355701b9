"""
Global pytest fixtures for the shortcode_platform test suite.

Responsibilities:
    - Provide isolated in-memory and file-backed storage fixtures
    - Provide a ShortenerManager fixture wired to in-memory storage with a
      random generator (length 6) and the default validator
"""

from datetime import datetime, timedelta, timezone

import pytest

from shortcode_platform.manager.shortener_manager import ShortenerManager
from shortcode_platform.manager.strategies import RandomStrategy
from shortcode_platform.storage.file_storage import FileStorage
from shortcode_platform.storage.records import AnalyticsRecord, UrlRecord
from shortcode_platform.storage.storage import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    """Provide a fresh in-memory storage backend."""
    return MemoryStorage()


@pytest.fixture
def file_storage(tmp_path) -> FileStorage:
    """Provide a FileStorage rooted in a per-test temporary directory."""
    return FileStorage(str(tmp_path / "data"))


@pytest.fixture
def manager(storage: MemoryStorage) -> ShortenerManager:
    """
    Provide a ShortenerManager wired to the storage fixture.

    Notes:
        - The generator is injected so tests never depend on SHORTCODE_* env vars.
    """
    return ShortenerManager(storage=storage, generator=RandomStrategy(length=6))


@pytest.fixture
def make_record():
    """Factory for UrlRecord values with sensible defaults."""

    def _make(short_code="abc123", url="https://example.com", **overrides):
        fields = {
            "short_code": short_code,
            "original_url": url,
            "created_at": datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return UrlRecord(**fields)

    return _make


@pytest.fixture
def make_click():
    """Factory for AnalyticsRecord values; `minutes` offsets the click time."""
    base = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def _make(short_code="abc123", minutes=0, **overrides):
        fields = {"short_code": short_code, "clicked_at": base + timedelta(minutes=minutes)}
        fields.update(overrides)
        return AnalyticsRecord(**fields)

    return _make
