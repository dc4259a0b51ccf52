"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from prowlstream.core.service import StreamService

# Global service instance (set during application lifespan)
_service: StreamService | None = None


def set_service(service: StreamService | None) -> None:
    """Set the global service instance (called during app lifespan)."""
    global _service
    _service = service


def get_service() -> StreamService:
    """Get the global stream service instance.

    Returns:
        The initialized StreamService.

    Raises:
        RuntimeError: If the service is not initialized.
    """
    if _service is None:
        raise RuntimeError("Stream service not initialized. Is the server running?")
    return _service
