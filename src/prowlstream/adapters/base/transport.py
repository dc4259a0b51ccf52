"""Transport policy — Proxy routing, URL redaction and HTTP clients for adapters.

Adapters hold a ``TransportPolicy`` instead of inheriting shared request
behaviour. For every outbound URL an adapter asks the policy:

  1. ``should_proxy(url)`` — route through the forward proxy or go direct?
  2. ``loggable_url(url)`` — what may be written to the logs?
  3. ``client(proxied=...)`` — which ``httpx.AsyncClient`` issues the request?

Usage::

    policy = TransportPolicy(
        proxy_url="http://proxy:3128",
        proxy_rules=["*:false", "*.example.com:true"],
    )
    policy.should_proxy("https://tracker.example.com/api")  # True
    policy.should_proxy("http://localhost:9696/api")        # False
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from prowlstream.adapters.base.exceptions import ConfigurationError

if TYPE_CHECKING:
    from prowlstream.config.settings import ProxySettings

logger = logging.getLogger(__name__)

REDACTED = "REDACTED"

_SENSITIVE_PARAMS = frozenset(
    {
        "apikey",
        "api_key",
        "api-key",
        "key",
        "passkey",
        "token",
        "access_token",
        "auth",
        "password",
        "secret",
    }
)


class TransportPolicy:
    """Per-URL transport decisions shared by all adapters.

    Args:
        proxy_url: Forward proxy URL. ``None`` disables proxying entirely.
        proxy_rules: Ordered ``<host-pattern>:<true|false>`` rules. Without
            rules every request goes through the proxy (when one is set).
        log_sensitive_info: Log URLs verbatim instead of redacting them.
        client: Shared client for direct requests. A short-lived client is
            created per request when omitted.
        proxy_client: Shared client for proxied requests. A short-lived
            client bound to ``proxy_url`` is created per request when omitted.
    """

    def __init__(
        self,
        proxy_url: str | None = None,
        proxy_rules: Iterable[str] = (),
        *,
        log_sensitive_info: bool = False,
        client: httpx.AsyncClient | None = None,
        proxy_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._proxy_url = proxy_url or None
        self._proxy_rules = tuple(proxy_rules)
        self._log_sensitive_info = log_sensitive_info
        self._client = client
        self._proxy_client = proxy_client

    @classmethod
    def from_settings(
        cls,
        settings: ProxySettings,
        *,
        client: httpx.AsyncClient | None = None,
        proxy_client: httpx.AsyncClient | None = None,
    ) -> TransportPolicy:
        """Build a policy from ``ProxySettings``."""
        return cls(
            proxy_url=settings.url,
            proxy_rules=settings.rules,
            log_sensitive_info=settings.log_sensitive_info,
            client=client,
            proxy_client=proxy_client,
        )

    @property
    def proxy_url(self) -> str | None:
        return self._proxy_url

    # ── Proxy decision ───────────────────────────────────────────────────

    def should_proxy(self, url: str) -> bool:
        """Decide whether *url* is fetched through the forward proxy.

        Rules are evaluated in order and the last matching rule wins. A
        malformed rule disables proxying for the request.
        """
        if not self._proxy_url:
            return False
        if not self._proxy_rules:
            return True

        hostname = (urlsplit(url).hostname or "").lower()
        use_proxy = False
        for rule in self._proxy_rules:
            pattern, sep, value = rule.rpartition(":")
            pattern = pattern.strip().lower()
            value = value.strip().lower()
            if not sep or not pattern or value not in ("true", "false"):
                logger.error("Invalid proxy rule %r, sending request directly", rule)
                return False

            enabled = value == "true"
            if pattern == "*":
                use_proxy = enabled
            elif pattern.startswith("*."):
                if hostname.endswith(pattern[1:]):
                    use_proxy = enabled
            elif hostname == pattern:
                use_proxy = enabled
        return use_proxy

    # ── Log redaction ────────────────────────────────────────────────────

    def loggable_url(self, url: str) -> str:
        """Return *url* with credentials removed, unless sensitive logging is on."""
        if self._log_sensitive_info:
            return url

        parts = urlsplit(url)
        netloc = parts.netloc
        if "@" in netloc:
            host = parts.hostname or ""
            if ":" in host:
                host = f"[{host}]"
            netloc = f"{host}:{parts.port}" if parts.port else host

        query = parts.query
        pairs = parse_qsl(query, keep_blank_values=True)
        if any(k.lower() in _SENSITIVE_PARAMS for k, _ in pairs):
            query = urlencode([(k, REDACTED if k.lower() in _SENSITIVE_PARAMS else v) for k, v in pairs])

        return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))

    # ── Clients ──────────────────────────────────────────────────────────

    @asynccontextmanager
    async def client(self, *, proxied: bool) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the client for a direct or a proxied request.

        Shared clients are yielded as-is and left open; per-request clients
        are closed on exit.
        """
        shared = self._proxy_client if proxied else self._client
        if shared is not None:
            yield shared
            return

        if proxied and not self._proxy_url:
            raise ConfigurationError("Proxied request requested but no proxy URL is configured")

        async with httpx.AsyncClient(proxy=self._proxy_url if proxied else None) as client:
            yield client
