"""
Record types shared by the manager and every storage backend.

Both records are frozen dataclasses: updates go through `with_*` helpers that
return a new value (replace-on-write), which the manager then re-stores
explicitly. The JSON-like `metadata` and `additional_data` mappings are deep
copied on construction, so a record never shares them with its caller.

Timestamps are timezone-aware UTC. Naive datetimes are read as UTC.
The persisted form uses "YYYY-MM-DD HH:MM:SS" without an offset.
"""

import copy
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from ..exceptions import InvalidArgumentError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return as_utc(value).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse a persisted timestamp.

    Accepts the canonical "YYYY-MM-DD HH:MM:SS" text, any ISO-8601 string, or
    a datetime already decoded by a database driver.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        parsed = datetime.fromisoformat(value)
    return as_utc(parsed)


@dataclass(frozen=True)
class UrlRecord:
    """A short code and everything known about the URL it points to."""

    short_code: str
    original_url: str
    created_at: datetime
    expires_at: Optional[datetime] = None
    click_count: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.click_count < 0:
            raise InvalidArgumentError("click_count must be non-negative")
        object.__setattr__(self, "metadata", copy.deepcopy(self.metadata))
        object.__setattr__(self, "created_at", as_utc(self.created_at))
        if self.expires_at is not None:
            object.__setattr__(self, "expires_at", as_utc(self.expires_at))

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        current = as_utc(now) if now is not None else utcnow()
        return current > self.expires_at

    def with_click_count(self, click_count: int) -> "UrlRecord":
        return replace(self, click_count=click_count)

    def with_metadata(self, metadata: Dict[str, Any]) -> "UrlRecord":
        return replace(self, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "short_code": self.short_code,
            "original_url": self.original_url,
            "created_at": format_timestamp(self.created_at),
            "expires_at": format_timestamp(self.expires_at),
            "click_count": self.click_count,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UrlRecord":
        return cls(
            short_code=data["short_code"],
            original_url=data["original_url"],
            created_at=parse_timestamp(data["created_at"]),
            expires_at=parse_timestamp(data.get("expires_at")),
            click_count=int(data.get("click_count") or 0),
            metadata=data.get("metadata") or {},
        )


@dataclass(frozen=True)
class AnalyticsRecord:
    """One click on a short code. Append-only."""

    short_code: str
    clicked_at: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    referrer: Optional[str] = None
    additional_data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "clicked_at", as_utc(self.clicked_at))
        object.__setattr__(self, "additional_data", copy.deepcopy(self.additional_data))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "short_code": self.short_code,
            "clicked_at": format_timestamp(self.clicked_at),
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "referrer": self.referrer,
            "additional_data": self.additional_data,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyticsRecord":
        return cls(
            short_code=data["short_code"],
            clicked_at=parse_timestamp(data["clicked_at"]),
            ip_address=data.get("ip_address"),
            user_agent=data.get("user_agent"),
            referrer=data.get("referrer"),
            additional_data=data.get("additional_data") or {},
        )
