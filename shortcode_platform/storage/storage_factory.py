"""
Storage factory – switch storage backend from config (lazy env version)
======================================================================

This module centralizes selection of the storage backend so the rest of the
package can stay ignorant of where data lives.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- SHORTCODE_STORAGE_BACKEND: "memory" (default), "file" or "postgres"
- SHORTCODE_DATA_DIR:        directory if backend=="file"
- SHORTCODE_DB_DSN:          DSN string if backend=="postgres"
"""

import logging
import os
from typing import Optional

from shortcode_platform.storage.base import BaseStorage
from shortcode_platform.storage.storage import MemoryStorage

log = logging.getLogger(__name__)


def get_storage(backend: Optional[str] = None, **kwargs) -> BaseStorage:
    """
    Return a storage backend based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory", "file" or "postgres". If omitted, reads SHORTCODE_STORAGE_BACKEND.
    kwargs : dict
        Extra args for the backend constructor: data_dir="..." for file,
        dsn="..." for postgres.

    Returns
    -------
    BaseStorage
    """
    be = (backend or os.getenv("SHORTCODE_STORAGE_BACKEND", "memory")).strip().lower()
    log.info("Selected storage backend: %r", be)

    if be == "memory":
        return MemoryStorage()

    if be == "file":
        data_dir = kwargs.get("data_dir") or os.getenv("SHORTCODE_DATA_DIR", "")
        if not data_dir:
            raise ValueError("DATA_DIR is required for file backend (env SHORTCODE_DATA_DIR)")
        from shortcode_platform.storage.file_storage import FileStorage
        return FileStorage(data_dir=data_dir)

    if be == "postgres":
        dsn = kwargs.get("dsn") or os.getenv("SHORTCODE_DB_DSN", "")
        if not dsn:
            raise ValueError("DB_DSN is required for postgres backend (env SHORTCODE_DB_DSN)")
        # Local import to avoid hard dependency when not using postgres
        from shortcode_platform.storage.db_storage import DBStorage
        return DBStorage(dsn=dsn)

    raise ValueError(f"Unknown storage backend: {be!r}")
