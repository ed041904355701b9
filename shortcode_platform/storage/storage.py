"""
Storage module for shortcode_platform (in-memory implementation).

Responsibilities:
    - Hold URL records keyed by short code
    - Hold the click log for each short code
    - Cascade click logs away when a record is deleted

Design:
    - This is the in-memory reference implementation of the BaseStorage contract.
    - It is intentionally simple to keep unit/integration tests fast and deterministic.
    - Records go in and come out as deep copies, so callers never hold the stored instance.
    - Clicks are kept in append order and reversed on read (newest first).
"""

import copy
import logging
from typing import Dict, List, Optional

from .base import BaseStorage
from .records import AnalyticsRecord, UrlRecord

log = logging.getLogger(__name__)


class MemoryStorage(BaseStorage):
    def __init__(self):
        """
        Initialize empty storage dictionaries.

        Internal schema:
            self.urls = { short_code: UrlRecord }
            self.analytics = { short_code: [AnalyticsRecord, ...] }  # oldest first
        """
        self.urls: Dict[str, UrlRecord] = {}
        self.analytics: Dict[str, List[AnalyticsRecord]] = {}

    def store(self, record: UrlRecord) -> bool:
        self.urls[record.short_code] = copy.deepcopy(record)
        return True

    def retrieve(self, short_code: str) -> Optional[UrlRecord]:
        record = self.urls.get(short_code)
        return copy.deepcopy(record) if record is not None else None

    def exists(self, short_code: str) -> bool:
        return short_code in self.urls

    def delete(self, short_code: str) -> bool:
        """
        Remove a record and its click log.

        Returns:
            bool: True if the record existed, False otherwise.
        """
        if short_code not in self.urls:
            return False
        del self.urls[short_code]
        self.analytics.pop(short_code, None)
        return True

    def store_analytics(self, record: AnalyticsRecord) -> bool:
        self.analytics.setdefault(record.short_code, []).append(copy.deepcopy(record))
        return True

    def get_analytics(self, short_code: str) -> List[AnalyticsRecord]:
        return [copy.deepcopy(r) for r in reversed(self.analytics.get(short_code, []))]

    # ---- Helpers -----------------------------------------------------------

    def clear(self) -> None:
        """Drop every record and click log."""
        log.debug("Clearing in-memory storage (%d records)", len(self.urls))
        self.urls.clear()
        self.analytics.clear()

    def all_urls(self) -> Dict[str, UrlRecord]:
        """Return a deep copy of the code -> record mapping."""
        return copy.deepcopy(self.urls)
