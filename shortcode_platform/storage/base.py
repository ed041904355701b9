"""
Base storage interface for shortcode_platform.

Purpose:
    Define a small, stable contract that every storage backend
    (in-memory, JSON files, PostgreSQL) implements, so the manager can be
    wired to any of them without changes.

Contract invariants:
    - `store` is an upsert keyed by short code; a full record replaces the
      prior one and no partial write is ever visible.
    - `retrieve` performs no expiration filtering; expiry is the manager's job.
    - `delete` removes the record and all of its analytics in one logical
      operation.
    - `get_analytics` returns clicks newest-first.
    - Driver errors are wrapped in `StorageFailureError`.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .records import AnalyticsRecord, UrlRecord


class BaseStorage(ABC):
    """Abstract base class for storage backends."""

    @abstractmethod  # pragma: no cover
    def store(self, record: UrlRecord) -> bool:
        """
        Insert or replace the record for `record.short_code`.

        Returns:
            bool: True when the record was persisted.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def retrieve(self, short_code: str) -> Optional[UrlRecord]:
        """
        Exact-key lookup.

        Returns:
            Optional[UrlRecord]: The stored record, or None.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def exists(self, short_code: str) -> bool:
        """Return True if a record is stored under `short_code`."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete(self, short_code: str) -> bool:
        """
        Delete a record and cascade to its analytics.

        Returns:
            bool: True iff a record existed and was removed.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def store_analytics(self, record: AnalyticsRecord) -> bool:
        """Append a click event. Duplicates are allowed."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_analytics(self, short_code: str) -> List[AnalyticsRecord]:
        """Return every click event for `short_code`, newest first."""
        raise NotImplementedError
