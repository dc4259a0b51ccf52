"""Base stream adapter — Abstract interface for all indexer connectors.

Every stream source must implement this interface to integrate with
prowlstream. The adapter is responsible for:
  1. Building and issuing the outbound search request
  2. Mapping raw results to the common ``Stream`` schema
  3. Raising ``AdapterError`` subclasses on failure

Shared request behaviour (proxy routing, URL redaction, HTTP clients) is
not inherited; adapters receive a ``TransportPolicy``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from prowlstream.models.stream import Stream, StreamRequest


class StreamAdapter(ABC):
    """Abstract base class for stream adapters.

    All adapters must implement:
      - name: Display name used in logs and error reports
      - addon_id: Identifier of the configured instance
      - get_streams(): Execute one query and return normalized streams

    Adapters hold only configuration captured at construction and are safe
    to call concurrently.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name (e.g., 'Prowlarr')."""

    @property
    @abstractmethod
    def addon_id(self) -> str:
        """Identifier of this adapter instance."""

    @abstractmethod
    async def get_streams(self, request: StreamRequest) -> list[Stream]:
        """Query the backend and return normalized streams.

        Args:
            request: The stream request.

        Returns:
            One ``Stream`` per backend result.

        Raises:
            QueryError: On network failure, timeout, or non-2xx status.
            DeserializationError: If the response body cannot be parsed.
        """
