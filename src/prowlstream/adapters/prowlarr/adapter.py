"""Prowlarr adapter — Search a Prowlarr instance and return streams.

Prowlarr aggregates many torrent/usenet indexers behind one REST API. This
adapter issues a single ``GET /api/v1/search`` and maps every release to a
``Stream``; there is no pagination, retry or caching.

Usage::

    adapter = ProwlarrAdapter(
        api_key="0123456789abcdef",
        override_url="http://localhost:9696/",
        name="Prowlarr",
        addon_id="prowlarr",
        user_config=UserConfig(requesting_ip="203.0.113.7"),
    )
    streams = await adapter.get_streams(StreamRequest(id="tt0111161"))
"""

from __future__ import annotations

import logging
import re

import httpx
from pydantic import TypeAdapter, ValidationError

from prowlstream.adapters.base.adapter import StreamAdapter
from prowlstream.adapters.base.exceptions import ConfigurationError, DeserializationError, QueryError
from prowlstream.adapters.base.transport import TransportPolicy
from prowlstream.config.settings import Settings
from prowlstream.core.collector import collect_streams
from prowlstream.models.options import ProwlarrOptions
from prowlstream.models.release import ProwlarrRelease
from prowlstream.models.stream import BehaviorHints, Stream, StreamCollection, StreamRequest
from prowlstream.models.user import UserConfig

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/v1/search"
RESULT_LIMIT = 100

_RELEASES = TypeAdapter(list[ProwlarrRelease])
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class ProwlarrAdapter(StreamAdapter):
    """Stream adapter for Prowlarr.

    Communicates with Prowlarr via its `search API`_ over HTTP.

    .. _search API: https://prowlarr.com/docs/api/#/Search

    Args:
        api_key: Prowlarr API key, sent as ``X-Api-Key``.
        override_url: Prowlarr base URL. Falls back to ``settings.prowlarr.url``.
        name: Display name. Falls back to ``settings.prowlarr.name``.
        addon_id: Identifier of this instance.
        user_config: Caller configuration (originating client IP).
        indexer_timeout: Request timeout in milliseconds. Falls back to
            ``settings.prowlarr.default_timeout_ms``.
        policy: Transport policy. Built from ``settings.proxy`` when omitted.
        settings: Application settings used for fallbacks.
    """

    def __init__(
        self,
        api_key: str,
        override_url: str | None = None,
        name: str | None = None,
        addon_id: str = "prowlarr",
        user_config: UserConfig | None = None,
        indexer_timeout: int | None = None,
        *,
        policy: TransportPolicy | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or Settings()
        self._api_key = api_key
        self._base_url = self.standardize_url(override_url or settings.prowlarr.url)
        self._name = name or settings.prowlarr.name
        self._addon_id = addon_id
        self._user_config = user_config or UserConfig()
        self._timeout_ms = indexer_timeout or settings.prowlarr.default_timeout_ms
        self._policy = policy or TransportPolicy.from_settings(settings.proxy)

    @property
    def name(self) -> str:
        return self._name

    @property
    def addon_id(self) -> str:
        return self._addon_id

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, url: str) -> None:
        self._base_url = self.standardize_url(url)

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self._timeout_ms / 1000

    @staticmethod
    def standardize_url(url: str) -> str:
        """Strip trailing slashes so paths can be appended safely."""
        return url.rstrip("/")

    # ── Request construction ─────────────────────────────────────────────

    def build_url(self, request: StreamRequest) -> str:
        """Return the search URL for *request*."""
        url = httpx.URL(
            f"{self._base_url}{SEARCH_PATH}",
            params={"query": request.id, "limit": RESULT_LIMIT},
        )
        return str(url)

    def build_headers(self) -> dict[str, str]:
        """Return the API key header plus client IP forwarding headers."""
        headers = {"X-Api-Key": self._api_key}
        user_ip = self._user_config.requesting_ip
        if user_ip:
            headers["X-Client-IP"] = user_ip
            headers["X-Forwarded-For"] = user_ip
            headers["X-Real-IP"] = user_ip
        return headers

    # ── Search ───────────────────────────────────────────────────────────

    async def get_streams(self, request: StreamRequest) -> list[Stream]:
        """Search Prowlarr for ``request.id`` and map every release to a stream."""
        url = self.build_url(request)
        headers = self.build_headers()

        use_proxy = self._policy.should_proxy(url)
        logger.info(
            "Making a %s request to %s (%s)",
            "proxied" if use_proxy else "direct",
            self._name,
            self._policy.loggable_url(url),
        )

        try:
            async with self._policy.client(proxied=use_proxy) as client:
                response = await client.get(
                    url,
                    headers=headers,
                    timeout=self.timeout,
                    follow_redirects=True,
                )
        except httpx.TimeoutException as e:
            raise QueryError(f"{self._name} request timed out after {self._timeout_ms} ms") from e
        except httpx.HTTPError as e:
            raise QueryError(f"{self._name} request failed: {e}") from e

        if not response.is_success:
            raise QueryError(f"{response.status_code} - {response.reason_phrase} {response.text}")

        releases = self._parse_releases(response)
        return [self.map_to_stream(release) for release in releases]

    def _parse_releases(self, response: httpx.Response) -> list[ProwlarrRelease]:
        try:
            payload = response.json()
        except ValueError as e:
            raise DeserializationError(f"{self._name} returned invalid JSON: {e}") from e

        try:
            return _RELEASES.validate_python(payload)
        except ValidationError as e:
            raise DeserializationError(
                f"{self._name} returned an unexpected response shape ({e.error_count()} errors)"
            ) from e

    # ── Schema mapping ───────────────────────────────────────────────────

    @staticmethod
    def map_to_stream(release: ProwlarrRelease) -> Stream:
        """Map a Prowlarr release to ``Stream``.

        The description has the title, then the indexer, then the seeder
        count. A seeder count of 0 is dropped just like a missing one.
        """
        description = f"{release.title or ''}\n🌐 {release.indexer or ''}"
        if release.seeders:
            description += f"\n👥 {release.seeders}"

        return Stream(
            url=release.magnet_url or release.download_url or None,
            info_hash=release.info_hash or None,
            name=release.title,
            description=description,
            behavior_hints=BehaviorHints(filename=release.title, video_size=release.size),
        )


def parse_timeout(value: str | None) -> int | None:
    """Parse a millisecond timeout given as text.

    Only the leading integer is read (``"20000"`` and ``"20000ms"`` both give
    20000). Returns ``None`` when nothing usable is found so callers fall
    back to the default.
    """
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if match is None or int(match.group(1)) <= 0:
        logger.warning("Ignoring invalid indexer timeout %r, using the default", value)
        return None
    return int(match.group(1))


async def get_prowlarr_streams(
    config: UserConfig,
    options: ProwlarrOptions,
    request: StreamRequest,
    addon_id: str,
    *,
    policy: TransportPolicy | None = None,
    settings: Settings | None = None,
) -> StreamCollection:
    """Search Prowlarr with user-supplied options.

    Args:
        config: Caller configuration.
        options: Endpoint override, API key, display name and timeout.
        request: The stream request.
        addon_id: Identifier of this instance.
        policy: Transport policy passed to the adapter.
        settings: Application settings used for fallbacks.

    Returns:
        The collected streams and any adapter errors.

    Raises:
        ConfigurationError: If ``options.api_key`` is empty. Raised before
            any network activity.
    """
    if not options.api_key:
        raise ConfigurationError("Missing API key for Prowlarr")

    adapter = ProwlarrAdapter(
        options.api_key,
        options.prowlarr_url,
        options.override_name,
        addon_id,
        config,
        parse_timeout(options.indexer_timeout),
        policy=policy,
        settings=settings,
    )
    return await collect_streams(adapter, request)
