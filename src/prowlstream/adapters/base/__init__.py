"""Base adapter interface — Abstract classes and shared transport for stream adapters."""

from prowlstream.adapters.base.adapter import StreamAdapter
from prowlstream.adapters.base.transport import TransportPolicy

__all__ = ["StreamAdapter", "TransportPolicy"]
