"""
Unit tests for UrlValidator.

Covers:
    - accepted and rejected URLs (scheme, host, length, syntax)
    - case-insensitive scheme allow-list and custom configuration
    - best-effort normalization
"""

import pytest

from shortcode_platform.manager.validator import UrlValidator


@pytest.fixture
def validator():
    return UrlValidator()


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com",
        "http://example.com/path?q=1#frag",
        "HTTPS://Example.com/Path",
        "http://localhost:8080/",
        "http://127.0.0.1/x",
        "http://[::1]:8000/",
        "https://user:pw@example.com/",
    ],
)
def test_valid_urls(validator, url):
    assert validator.is_valid(url) is True


@pytest.mark.parametrize(
    "url",
    [
        "",
        "not-a-url",
        "example.com/path",
        "ftp://bad.example.com",
        "javascript:alert(1)",
        "mailto:someone@example.com",
        "https://",
        "https:///missing-host",
        "http://exa mple.com",
        "http://example.com:99999/",
        "http://example.com:port/",
        "http://[::1/",
    ],
)
def test_invalid_urls(validator, url):
    assert validator.is_valid(url) is False


def test_non_string_rejected(validator):
    assert validator.is_valid(None) is False  # type: ignore[arg-type]


def test_length_bound():
    validator = UrlValidator(max_length=30)
    base = "https://example.com/"
    assert validator.is_valid(base + "a" * (30 - len(base))) is True
    assert validator.is_valid(base + "a" * (31 - len(base))) is False


def test_default_length_bound(validator):
    base = "https://example.com/"
    assert validator.is_valid(base + "a" * (2048 - len(base))) is True
    assert validator.is_valid(base + "a" * (2049 - len(base))) is False


def test_custom_schemes_case_insensitive():
    validator = UrlValidator(allowed_schemes=["FTP"])
    assert validator.allowed_schemes == ("ftp",)
    assert validator.is_valid("ftp://files.example.com/a.txt") is True
    assert validator.is_valid("https://example.com") is False


def test_accessors(validator):
    assert validator.allowed_schemes == ("http", "https")
    assert validator.max_length == 2048


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("  example.com/path  ", "http://example.com/path"),
        ("HTTP://Example.COM/Path", "http://example.com/Path"),
        ("http://example.com:80/a", "http://example.com/a"),
        ("https://example.com:443/a", "https://example.com/a"),
        ("http://example.com:443/a", "http://example.com:443/a"),
        ("https://example.com:8443/a?x=1#top", "https://example.com:8443/a?x=1#top"),
        ("https://user:pw@Example.com/", "https://example.com/"),
        ("http://[::1]:8080/x", "http://[::1]:8080/x"),
        ("example.com", "http://example.com"),
        ("FTP://Files.Example.com:21/x", "ftp://files.example.com:21/x"),
    ],
)
def test_normalize(validator, raw, expected):
    assert validator.normalize(raw) == expected


def test_normalize_unparseable_returned_as_is(validator):
    assert validator.normalize("http://example.com:notaport/") == "http://example.com:notaport/"
