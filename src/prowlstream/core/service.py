"""Stream service — Owns settings and shared HTTP clients for the API and CLI.

The service manages the lifecycle of the pooled ``httpx.AsyncClient``
instances (one direct, one bound to the forward proxy when configured) and
answers stream requests with the configured Prowlarr instance.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from prowlstream.adapters.base.transport import TransportPolicy
from prowlstream.adapters.prowlarr.adapter import get_prowlarr_streams
from prowlstream.models.options import ProwlarrOptions
from prowlstream.models.stream import StreamCollection, StreamRequest
from prowlstream.models.user import UserConfig

if TYPE_CHECKING:
    from prowlstream.config.settings import Settings

logger = logging.getLogger(__name__)


class StreamService:
    """Serve stream requests against the configured Prowlarr instance.

    Attributes:
        settings: Application configuration.
        policy: Transport policy shared by every request.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        client: httpx.AsyncClient | None = None,
        proxy_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self._client = client
        self._proxy_client = proxy_client
        self._owns_clients = False
        self.policy = TransportPolicy.from_settings(settings.proxy, client=client, proxy_client=proxy_client)

    async def initialize(self) -> None:
        """Open the shared HTTP clients unless they were injected."""
        if self._client is None:
            self._client = httpx.AsyncClient()
            if self.settings.proxy.url:
                self._proxy_client = httpx.AsyncClient(proxy=self.settings.proxy.url)
            self._owns_clients = True
            self.policy = TransportPolicy.from_settings(
                self.settings.proxy,
                client=self._client,
                proxy_client=self._proxy_client,
            )
        logger.info(
            "Stream service initialized (prowlarr: %s, proxy: %s)",
            self.settings.prowlarr.url,
            "enabled" if self.settings.proxy.url else "disabled",
        )

    async def shutdown(self) -> None:
        """Close the HTTP clients opened by ``initialize``."""
        if self._owns_clients:
            for client in (self._client, self._proxy_client):
                if client is not None:
                    await client.aclose()
            self._client = None
            self._proxy_client = None
            self._owns_clients = False
            self.policy = TransportPolicy.from_settings(self.settings.proxy)
        logger.info("Stream service shut down")

    def default_options(self) -> ProwlarrOptions:
        """Options derived from ``settings.prowlarr``."""
        prowlarr = self.settings.prowlarr
        return ProwlarrOptions(
            prowlarr_url=prowlarr.url,
            api_key=prowlarr.api_key,
            override_name=prowlarr.name,
            indexer_timeout=str(prowlarr.default_timeout_ms),
        )

    async def search(
        self,
        request: StreamRequest,
        user_config: UserConfig | None = None,
        options: ProwlarrOptions | None = None,
    ) -> StreamCollection:
        """Collect streams for *request*.

        Args:
            request: The stream request.
            user_config: Caller configuration (originating client IP).
            options: Per-call options. Defaults to ``default_options()``.

        Returns:
            The collected streams and any adapter errors.

        Raises:
            ConfigurationError: If no API key is available.
        """
        return await get_prowlarr_streams(
            user_config or UserConfig(),
            options or self.default_options(),
            request,
            self.settings.prowlarr.addon_id,
            policy=self.policy,
            settings=self.settings,
        )
