"""
Analytics report for shortcode_platform.

Responsibilities:
    - Aggregate a URL record with its click log into one report
    - Provide summary statistics (total, last click, referrer counts)
    - Serialize to JSON-safe dicts

`clicks` is newest first, as returned by every storage backend, so the most
recent click is `clicks[0]`.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..storage.records import AnalyticsRecord, UrlRecord

DIRECT_REFERRER = "direct"


class AnalyticsReport(BaseModel):
    """Aggregate returned by `ShortenerManager.get_analytics`."""

    short_code: str
    original_url: str
    created_at: datetime
    expires_at: Optional[datetime] = None
    total_clicks: int = Field(ge=0)
    clicks: List[AnalyticsRecord] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_records(cls, record: UrlRecord, clicks: List[AnalyticsRecord]) -> "AnalyticsReport":
        return cls(
            short_code=record.short_code,
            original_url=record.original_url,
            created_at=record.created_at,
            expires_at=record.expires_at,
            total_clicks=record.click_count,
            clicks=list(clicks),
            metadata=record.metadata,
        )

    @property
    def last_click(self) -> Optional[datetime]:
        return self.clicks[0].clicked_at if self.clicks else None

    def summary(self) -> Dict[str, Any]:
        """
        Compact statistics for this code.

        Returns:
            Dict[str, Any]: total_clicks, last_click (datetime or None), and
            referrers mapping referrer -> count (missing referrer counted as "direct").

        Example:
            {
                "total_clicks": 3,
                "last_click": datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc),
                "referrers": {"https://news.example": 2, "direct": 1},
            }
        """
        referrers: Dict[str, int] = {}
        for click in self.clicks:
            key = click.referrer or DIRECT_REFERRER
            referrers[key] = referrers.get(key, 0) + 1
        return {
            "total_clicks": self.total_clicks,
            "last_click": self.last_click,
            "referrers": referrers,
        }

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
