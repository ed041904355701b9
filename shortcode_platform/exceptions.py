"""
Error taxonomy for shortcode_platform.

Every error raised across the public API derives from `ShortenerError`, so
callers can catch the whole family at once. Validation errors additionally
subclass `ValueError` and lookup errors subclass `LookupError`, which keeps
`except ValueError` call sites working.

Storage backends never leak driver-specific exceptions: OS, JSON and psycopg
errors are wrapped into `StorageFailureError` with the original attached.
"""

from typing import Optional


class ShortenerError(Exception):
    """Base exception for the package."""


class InvalidUrlError(ShortenerError, ValueError):
    """Raised when a URL fails validation."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: '{url}'")


class ShortCodeNotFoundError(ShortenerError, LookupError):
    """Raised when a short code is absent (or expired, for expand/exists)."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' not found.")


class GenerationExhaustedError(ShortenerError):
    """Raised when no unique short code is found within the attempt budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Unable to generate unique short code after {attempts} attempts")


class StorageFailureError(ShortenerError):
    """Wraps any backend-level I/O or constraint error."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class InvalidArgumentError(ShortenerError, ValueError):
    """Raised on invalid constructor arguments (generators, records)."""
