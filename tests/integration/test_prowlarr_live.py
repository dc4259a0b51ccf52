"""Integration tests for ProwlarrAdapter against a real Prowlarr instance."""

from __future__ import annotations

import pytest

from prowlstream.adapters.prowlarr.adapter import ProwlarrAdapter, get_prowlarr_streams
from prowlstream.config.settings import Settings
from prowlstream.models.options import ProwlarrOptions
from prowlstream.models.stream import StreamRequest
from prowlstream.models.user import UserConfig

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


class TestProwlarrSearch:
    """Tests for searching a live Prowlarr instance."""

    async def test_search_returns_streams(self, prowlarr_ready, settings: Settings) -> None:
        url, api_key = prowlarr_ready
        adapter = ProwlarrAdapter(api_key, url, settings=settings)
        streams = await adapter.get_streams(StreamRequest(id="tt0111161"))
        assert isinstance(streams, list)
        for stream in streams:
            assert "\n🌐 " in stream.description

    async def test_search_no_results_for_gibberish(self, prowlarr_ready, settings: Settings) -> None:
        url, api_key = prowlarr_ready
        adapter = ProwlarrAdapter(api_key, url, settings=settings)
        streams = await adapter.get_streams(StreamRequest(id="zzqxv-no-such-release-9f3a"))
        assert streams == []

    async def test_wrong_api_key_reported(self, prowlarr_ready, settings: Settings) -> None:
        url, _ = prowlarr_ready
        collection = await get_prowlarr_streams(
            UserConfig(requesting_ip="127.0.0.1"),
            ProwlarrOptions(prowlarr_url=url, api_key="definitely-wrong"),
            StreamRequest(id="tt0111161"),
            "prowlarr",
            settings=settings,
        )
        assert collection.addon_streams == []
        assert collection.addon_errors[0].startswith("Prowlarr: 401")
