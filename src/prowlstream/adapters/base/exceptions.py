"""Adapter-specific exceptions."""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class QueryError(AdapterError):
    """Raised when a search query fails (network error, timeout or non-2xx status)."""


class DeserializationError(AdapterError):
    """Raised when a response body is not valid JSON or not the expected shape."""


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid."""
