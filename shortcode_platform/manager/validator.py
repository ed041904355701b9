"""
URL validation for shortcode_platform.

`UrlValidator.is_valid` is the gate the manager runs before creating a short
code: scheme allow-list (case-insensitive), a non-empty host, and a length
bound. `normalize` is a separate, opt-in clean-up; the manager never calls it.
"""

import re
from typing import Iterable, Tuple
from urllib.parse import urlsplit

_SCHEME_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_FORBIDDEN_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")

_DEFAULT_PORTS = {"http": 80, "https": 443}


class UrlValidator:
    def __init__(self, allowed_schemes: Iterable[str] = ("http", "https"), max_length: int = 2048):
        """
        Args:
            allowed_schemes (Iterable[str]): Accepted schemes, compared lower-cased.
            max_length (int): Maximum accepted URL length in characters.
        """
        self._allowed_schemes: Tuple[str, ...] = tuple(s.lower() for s in allowed_schemes)
        self._max_length = max_length

    @property
    def allowed_schemes(self) -> Tuple[str, ...]:
        return self._allowed_schemes

    @property
    def max_length(self) -> int:
        return self._max_length

    def is_valid(self, url: str) -> bool:
        """
        Validate a candidate URL.

        Rejects when:
            - the URL is not a non-empty string or exceeds max_length
            - it contains whitespace or control characters
            - it cannot be parsed (bad IPv6 literal, non-numeric port, ...)
            - the scheme is missing or not in the allow-list
            - the host is missing or empty
        """
        if not isinstance(url, str) or not url:
            return False
        if len(url) > self._max_length:
            return False
        if _FORBIDDEN_CHARS.search(url):
            return False

        try:
            parts = urlsplit(url)
            # Accessing .port validates it; raises ValueError when out of range.
            parts.port
        except ValueError:
            return False

        if not parts.scheme or parts.scheme.lower() not in self._allowed_schemes:
            return False
        if not parts.hostname:
            return False
        return True

    def normalize(self, url: str) -> str:
        """
        Best-effort normalization.

        Trims whitespace, prepends "http://" when no scheme is present,
        lower-cases scheme and host, drops the scheme's default port (80 for
        http, 443 for https) and reassembles scheme://host[:port]path[?query][#fragment].
        User info is not carried over. Unparseable input is returned trimmed.
        """
        url = url.strip()
        if not _SCHEME_PREFIX.match(url):
            url = "http://" + url

        try:
            parts = urlsplit(url)
            port = parts.port
        except ValueError:
            return url

        scheme = parts.scheme.lower()
        host = parts.hostname or ""
        if ":" in host:
            host = f"[{host}]"

        normalized = f"{scheme}://{host}"
        if port is not None and port != _DEFAULT_PORTS.get(scheme):
            normalized += f":{port}"
        normalized += parts.path
        if parts.query:
            normalized += "?" + parts.query
        if parts.fragment:
            normalized += "#" + parts.fragment
        return normalized
