"""
FileStorage – JSON-file-backed storage for shortcode_platform
============================================================

Persists state as two JSON documents inside a data directory:

- ``urls.json``      : { short_code: UrlRecord.to_dict() }
- ``analytics.json`` : { short_code: [AnalyticsRecord.to_dict(), ...] }  (append order)

Every mutating call loads the whole document, changes it, and rewrites it.
Writes go to a temporary file in the same directory followed by
``os.replace`` so readers never observe a half-written document. There is no
locking: two processes writing the same directory can overwrite each other.

Example
-------
>>> storage = FileStorage("./data")
>>> storage.store(record)
True
"""

import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

from ..exceptions import StorageFailureError
from .base import BaseStorage
from .records import AnalyticsRecord, UrlRecord

log = logging.getLogger(__name__)

URLS_FILENAME = "urls.json"
ANALYTICS_FILENAME = "analytics.json"


class FileStorage(BaseStorage):
    """JSON file implementation of the storage contract.

    Parameters
    ----------
    data_dir : str
        Directory holding ``urls.json`` and ``analytics.json``. Created if missing.
    """

    def __init__(self, data_dir: str) -> None:
        self.data_dir = os.fspath(data_dir)
        try:
            os.makedirs(self.data_dir, exist_ok=True)
        except OSError as e:
            raise StorageFailureError(f"Cannot create data directory: {self.data_dir}", cause=e) from e
        if not os.access(self.data_dir, os.W_OK):
            raise StorageFailureError(f"Data directory is not writable: {self.data_dir}")

        self.urls_file = os.path.join(self.data_dir, URLS_FILENAME)
        self.analytics_file = os.path.join(self.data_dir, ANALYTICS_FILENAME)

    # ---- Internal helpers -------------------------------------------------

    def _load(self, path: str) -> Dict[str, Any]:
        if not os.path.exists(path):
            return {}
        try:
            with open(path, "r", encoding="utf-8") as fh:
                content = fh.read()
        except OSError as e:
            raise StorageFailureError(f"Cannot read file: {path}", cause=e) from e
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except ValueError as e:
            raise StorageFailureError(f"Invalid JSON in {path}: {e}", cause=e) from e
        if not isinstance(data, dict):
            raise StorageFailureError(f"Expected a JSON object in {path}")
        return data

    def _save(self, path: str, data: Dict[str, Any]) -> bool:
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=4, ensure_ascii=False)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageFailureError(f"Cannot write file: {path}", cause=e) from e
        return True

    def _load_urls(self) -> Dict[str, Any]:
        return self._load(self.urls_file)

    def _load_analytics(self) -> Dict[str, Any]:
        return self._load(self.analytics_file)

    # ---- Contract methods -------------------------------------------------

    def store(self, record: UrlRecord) -> bool:
        urls = self._load_urls()
        urls[record.short_code] = record.to_dict()
        log.debug("FileStorage.store: code=%s", record.short_code)
        return self._save(self.urls_file, urls)

    def retrieve(self, short_code: str) -> Optional[UrlRecord]:
        data = self._load_urls().get(short_code)
        if data is None:
            return None
        try:
            return UrlRecord.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageFailureError(f"Corrupt record for '{short_code}' in {self.urls_file}", cause=e) from e

    def exists(self, short_code: str) -> bool:
        return short_code in self._load_urls()

    def delete(self, short_code: str) -> bool:
        urls = self._load_urls()
        if short_code not in urls:
            return False
        analytics = self._load_analytics()
        del urls[short_code]
        had_clicks = analytics.pop(short_code, None) is not None
        # analytics before urls: clicks never outlive their parent record
        if had_clicks:
            self._save(self.analytics_file, analytics)
        return self._save(self.urls_file, urls)

    def store_analytics(self, record: AnalyticsRecord) -> bool:
        analytics = self._load_analytics()
        analytics.setdefault(record.short_code, []).append(record.to_dict())
        return self._save(self.analytics_file, analytics)

    def get_analytics(self, short_code: str) -> List[AnalyticsRecord]:
        rows = self._load_analytics().get(short_code, [])
        try:
            records = [AnalyticsRecord.from_dict(row) for row in rows]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageFailureError(f"Corrupt analytics for '{short_code}' in {self.analytics_file}", cause=e) from e
        records.reverse()
        return records
