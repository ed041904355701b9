"""
Integration tests: ShortenerManager end-to-end against every storage backend.

Memory and file backends always run. PostgreSQL runs only when
SHORTCODE_DB_DSN points at a live server; the tables are truncated per test.
"""

import os
from datetime import timedelta

import pytest

from shortcode_platform.analytics.context import RequestContext
from shortcode_platform.exceptions import InvalidUrlError, ShortCodeNotFoundError
from shortcode_platform.manager.shortener_manager import ShortenerManager
from shortcode_platform.manager.strategies import RandomStrategy, SequentialStrategy
from shortcode_platform.storage.file_storage import FileStorage
from shortcode_platform.storage.records import utcnow
from shortcode_platform.storage.storage_factory import get_storage

BACKENDS = ["memory", "file"] + (["postgres"] if os.getenv("SHORTCODE_DB_DSN") else [])


def _truncate(storage):
    with storage._conn() as con, con.cursor() as cur:
        cur.execute("TRUNCATE analytics, urls")


@pytest.fixture(params=BACKENDS)
def backend(request, tmp_path):
    if request.param == "file":
        return get_storage("file", data_dir=str(tmp_path / "data"))
    if request.param == "postgres":
        storage = get_storage("postgres", dsn=os.environ["SHORTCODE_DB_DSN"])
        _truncate(storage)
        return storage
    return get_storage("memory")


@pytest.fixture
def shortener(backend):
    return ShortenerManager(storage=backend, generator=RandomStrategy(length=6))


def test_complete_workflow(shortener):
    url = "https://www.example.com/very/long/url"
    metadata = {"source": "test", "campaign": "integration"}

    code = shortener.shorten(url, metadata=metadata)
    assert shortener.exists(code)
    assert shortener.expand(code) == url

    report = shortener.get_analytics(code)
    assert report.total_clicks == 1
    assert report.original_url == url
    assert report.metadata == metadata


def test_click_count_matches_analytics(shortener):
    code = shortener.shorten("https://example.com/popular-page")
    for i in range(4):
        shortener.expand(code, context=RequestContext(ip_address=f"10.0.0.{i}"))
    report = shortener.get_analytics(code)
    assert report.total_clicks == 4
    assert len(report.clicks) == 4
    assert shortener.get_url_record(code).click_count == 4


def test_analytics_newest_first(shortener):
    code = shortener.shorten("https://example.com/order")
    for i in range(3):
        shortener.expand(code, context=RequestContext(referrer=f"https://ref{i}.example"))
    clicks = shortener.get_analytics(code).clicks
    assert [c.referrer for c in clicks] == [
        "https://ref2.example",
        "https://ref1.example",
        "https://ref0.example",
    ]


def test_expiration_asymmetry(shortener):
    code = shortener.shorten("https://example.com/expired", expires_at=utcnow() - timedelta(hours=1))
    with pytest.raises(ShortCodeNotFoundError):
        shortener.expand(code)
    assert shortener.exists(code) is False
    assert shortener.get_url_record(code).original_url == "https://example.com/expired"
    assert shortener.get_analytics(code).total_clicks == 0


def test_deletion(shortener):
    code = shortener.shorten("https://example.com/to-be-deleted")
    shortener.expand(code)
    assert shortener.delete(code) is True
    assert shortener.exists(code) is False
    assert shortener.delete(code) is False
    assert shortener.storage.get_analytics(code) == []
    with pytest.raises(ShortCodeNotFoundError):
        shortener.expand(code)


def test_metadata_update(shortener):
    code = shortener.shorten("https://example.com/updateable", metadata={"version": 1})
    new_meta = {"version": 2, "updated": True, "nested": {"a": [1, 2]}}
    assert shortener.update_metadata(code, new_meta) is True
    assert shortener.get_url_record(code).metadata == new_meta


def test_invalid_urls_rejected(shortener):
    for url in ["", "not-a-valid-url", "ftp://example.com", "https://"]:
        with pytest.raises(InvalidUrlError):
            shortener.shorten(url)


def test_sequential_generator_on_backend(backend):
    shortener = ShortenerManager(storage=backend, generator=SequentialStrategy(prefix="test", padding=3))
    assert shortener.shorten("https://example.com/first") == "test001"
    assert shortener.shorten("https://example.com/second") == "test002"
    assert shortener.expand("test002", track_click=False) == "https://example.com/second"


def test_many_codes_unique(shortener):
    codes = {shortener.shorten(f"https://example.com/page/{i}") for i in range(25)}
    assert len(codes) == 25
    for code in codes:
        assert shortener.exists(code)


def test_file_backend_survives_restart(tmp_path):
    data_dir = str(tmp_path / "persist")
    first = ShortenerManager(FileStorage(data_dir), RandomStrategy())
    code = first.shorten("https://example.com/persisted", metadata={"k": "v"})
    first.expand(code, context=RequestContext(user_agent="pytest"))

    second = ShortenerManager(FileStorage(data_dir), RandomStrategy())
    assert second.expand(code, track_click=False) == "https://example.com/persisted"
    report = second.get_analytics(code)
    assert report.total_clicks == 1
    assert report.clicks[0].user_agent == "pytest"
    assert report.metadata == {"k": "v"}
