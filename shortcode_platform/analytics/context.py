"""
Client context captured with each tracked click.

The manager never reads request state from globals. Callers that sit behind a
web framework build a `RequestContext` for the current request and pass it to
`ShortenerManager.expand(..., context=...)`. Outside a request the default,
empty context is used.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RequestContext:
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    referrer: Optional[str] = None
    additional_data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_request(cls, request: Any, **additional_data: Any) -> "RequestContext":
        """
        Build a context from a Starlette/FastAPI-style request.

        Only `request.client.host` and `request.headers.get(...)` are used, so
        no web framework is imported here. Missing values become None.
        """
        client = getattr(request, "client", None)
        headers = getattr(request, "headers", None) or {}
        return cls(
            ip_address=getattr(client, "host", None) if client else None,
            user_agent=headers.get("user-agent") or None,
            referrer=headers.get("referer") or None,
            additional_data=dict(additional_data),
        )


EMPTY_CONTEXT = RequestContext()
