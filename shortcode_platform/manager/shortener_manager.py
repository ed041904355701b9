"""
ShortenerManager module for shortcode_platform.

Responsibilities:
    - Validate URLs before creating short codes
    - Find a free code with a bounded number of generator attempts
    - Resolve codes back to URLs, treating expired codes as absent
    - Track clicks (click count + one analytics event per tracked expand)
    - Expose analytics, record lookup, metadata update and delete

Design notes:
    - Storage, generator and validator are injected; the manager only talks to
      the BaseStorage / BaseStrategy interfaces.
    - Records are immutable. Click counts and metadata change by building a new
      record and storing it again (replace-on-write).
    - Expiry is derived at read time and never written back to storage.
    - `get_analytics` and `get_url_record` deliberately skip the expiry check,
      so an expired-but-undeleted code can still be inspected.
    - A tracked expand is three separate storage calls (retrieve, store,
      store_analytics). Concurrent expands of the same code can lose an
      increment; there is no locking here.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..analytics.analytics import AnalyticsReport
from ..analytics.context import EMPTY_CONTEXT, RequestContext
from ..exceptions import (
    GenerationExhaustedError,
    InvalidUrlError,
    ShortCodeNotFoundError,
    StorageFailureError,
)
from ..storage.base import BaseStorage
from ..storage.records import AnalyticsRecord, UrlRecord, utcnow
from .strategies import BaseStrategy, get_strategy_from_config
from .validator import UrlValidator

log = logging.getLogger(__name__)

MAX_GENERATION_ATTEMPTS = 10


class ShortenerManager:
    """
    Coordinates validation, code generation and storage for short codes.

    Per-code lifecycle: absent -> active -> expired | deleted.
    """

    def __init__(
        self,
        storage: BaseStorage,
        generator: Optional[BaseStrategy] = None,
        validator: Optional[UrlValidator] = None,
        max_attempts: int = MAX_GENERATION_ATTEMPTS,
    ):
        """
        Args:
            storage (BaseStorage): Backend storage instance.
            generator (Optional[BaseStrategy]): Code generator; resolved from config when omitted.
            validator (Optional[UrlValidator]): URL validator; defaults to UrlValidator().
            max_attempts (int): Generator calls allowed per `shorten` before giving up.
        """
        self._storage = storage
        self._generator = generator if generator is not None else get_strategy_from_config()
        self._validator = validator if validator is not None else UrlValidator()
        self._max_attempts = max_attempts

    @property
    def storage(self) -> BaseStorage:
        return self._storage

    @property
    def generator(self) -> BaseStrategy:
        return self._generator

    @property
    def validator(self) -> UrlValidator:
        return self._validator

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def shorten(
        self,
        url: str,
        expires_at: Optional[datetime] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Create a short code for `url`.

        Args:
            url (str): Long URL; must pass the validator.
            expires_at (Optional[datetime]): After this instant the code resolves as absent.
            metadata (Optional[Dict[str, Any]]): Arbitrary JSON-like data stored with the record.

        Returns:
            str: The new short code.

        Raises:
            InvalidUrlError: The validator rejected `url`.
            GenerationExhaustedError: Every attempt produced a code already in storage.
            StorageFailureError: The backend did not persist the record.
        """
        if not self._validator.is_valid(url):
            raise InvalidUrlError(url)

        short_code = self._generate_unique_code()
        record = UrlRecord(
            short_code=short_code,
            original_url=url,
            created_at=utcnow(),
            expires_at=expires_at,
            click_count=0,
            metadata=metadata or {},
        )
        if not self._storage.store(record):
            raise StorageFailureError("Failed to store URL record")

        log.info("Created short code %s for %s", short_code, url)
        return short_code

    def expand(
        self,
        short_code: str,
        track_click: bool = True,
        context: Optional[RequestContext] = None,
    ) -> str:
        """
        Resolve `short_code` to its original URL.

        When `track_click` is True the click count is incremented and one
        analytics event is appended, carrying `context` (IP, user agent,
        referrer, extra data). The URL is returned either way.

        Raises:
            ShortCodeNotFoundError: The code is absent or expired.
            StorageFailureError: The backend did not persist the click.
        """
        record = self._storage.retrieve(short_code)
        if record is None:
            raise ShortCodeNotFoundError(short_code)
        if record.is_expired():
            log.warning("Short code %s requested after expiry", short_code)
            raise ShortCodeNotFoundError(short_code)

        if track_click:
            self._track_click(record, context or EMPTY_CONTEXT)

        return record.original_url

    def exists(self, short_code: str) -> bool:
        """True iff the code is stored and not expired."""
        record = self._storage.retrieve(short_code)
        return record is not None and not record.is_expired()

    def delete(self, short_code: str) -> bool:
        """Delete a code and its analytics. No expiry check."""
        deleted = self._storage.delete(short_code)
        if deleted:
            log.info("Deleted short code %s", short_code)
        return deleted

    def get_analytics(self, short_code: str) -> AnalyticsReport:
        """
        Build the analytics report for a code.

        Expired codes are still reported; only a missing record raises.

        Raises:
            ShortCodeNotFoundError: The code is not in storage.
        """
        record = self._storage.retrieve(short_code)
        if record is None:
            raise ShortCodeNotFoundError(short_code)
        clicks = self._storage.get_analytics(short_code)
        return AnalyticsReport.from_records(record, clicks)

    def get_url_record(self, short_code: str) -> UrlRecord:
        record = self._storage.retrieve(short_code)
        if record is None:
            raise ShortCodeNotFoundError(short_code)
        return record

    def update_metadata(self, short_code: str, metadata: Dict[str, Any]) -> bool:
        """Replace the metadata of a code. Raises ShortCodeNotFoundError if absent."""
        record = self.get_url_record(short_code)
        return self._storage.store(record.with_metadata(metadata))

    # ---------------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------------
    def _track_click(self, record: UrlRecord, context: RequestContext) -> None:
        if not self._storage.store(record.with_click_count(record.click_count + 1)):
            raise StorageFailureError("Failed to update click count")
        if not self._storage.store_analytics(
            AnalyticsRecord(
                short_code=record.short_code,
                clicked_at=utcnow(),
                ip_address=context.ip_address,
                user_agent=context.user_agent,
                referrer=context.referrer,
                additional_data=dict(context.additional_data),
            )
        ):
            raise StorageFailureError("Failed to store analytics record")
        log.debug("Tracked click on %s (count=%d)", record.short_code, record.click_count + 1)

    def _generate_unique_code(self) -> str:
        for attempt in range(1, self._max_attempts + 1):
            code = self._generator.generate()
            if not self._storage.exists(code):
                return code
            log.warning("Generated code %s already exists (attempt %d/%d)", code, attempt, self._max_attempts)
        raise GenerationExhaustedError(self._max_attempts)
