"""Integration test fixtures — a real Prowlarr instance.

Point the tests at a running Prowlarr with:
    PROWLSTREAM_IT_URL=http://localhost:9696 PROWLSTREAM_IT_API_KEY=... pytest -m integration

Tests are skipped when no API key is given or Prowlarr does not answer.
"""

from __future__ import annotations

import os
import time

import httpx
import pytest


def _wait_for_service(url: str, timeout: float = 30.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=10)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


@pytest.fixture(scope="session")
def prowlarr_ready() -> tuple[str, str]:
    """Return ``(base_url, api_key)`` of a reachable Prowlarr instance."""
    url = os.environ.get("PROWLSTREAM_IT_URL", "http://localhost:9696").rstrip("/")
    api_key = os.environ.get("PROWLSTREAM_IT_API_KEY", "")
    if not api_key:
        pytest.skip("PROWLSTREAM_IT_API_KEY not set")
    if not _wait_for_service(f"{url}/ping"):
        pytest.skip(f"Prowlarr not available at {url}")
    return url, api_key
