"""Shared test fixtures and configuration."""

from __future__ import annotations

import logging
from typing import Any

import pytest
import structlog

from prowlstream.config.settings import Settings
from prowlstream.models.stream import StreamRequest
from prowlstream.models.user import UserConfig

PROWLARR_URL = "http://prowlarr.test:9696"
SEARCH_URL = f"{PROWLARR_URL}/api/v1/search"


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance pointing at a fake Prowlarr."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        prowlarr={"url": PROWLARR_URL, "api_key": "test-key"},
    )


@pytest.fixture
def stream_request() -> StreamRequest:
    return StreamRequest(type="movie", id="tt0111161")


@pytest.fixture
def user_config() -> UserConfig:
    return UserConfig(requesting_ip="203.0.113.7")


@pytest.fixture
def sample_release() -> dict[str, Any]:
    """A fully populated Prowlarr search hit."""
    return {
        "guid": "https://tracker.example.com/torrent/42",
        "title": "The.Shawshank.Redemption.1994.1080p.BluRay.x264",
        "magnetUrl": "magnet:?xt=urn:btih:0123456789abcdef0123456789abcdef01234567",
        "downloadUrl": "http://prowlarr.test:9696/1/download?link=abc",
        "infoHash": "0123456789abcdef0123456789abcdef01234567",
        "size": 2147483648,
        "seeders": 57,
        "leechers": 3,
        "indexer": "TrackerOne",
        "protocol": "torrent",
    }


@pytest.fixture
def sample_releases(sample_release: dict[str, Any]) -> list[dict[str, Any]]:
    """A search response with a full hit, a download-only hit and a bare hit."""
    return [
        sample_release,
        {
            "title": "The.Shawshank.Redemption.1994.720p.WEB",
            "downloadUrl": "http://prowlarr.test:9696/2/download?link=def",
            "size": 1073741824,
            "seeders": 0,
            "indexer": "UsenetOne",
        },
        {"title": "Shawshank"},
    ]


@pytest.fixture
def restore_logging():
    """Undo the root logger and structlog changes made by ``setup_logging``."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
