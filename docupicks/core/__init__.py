"""Core infrastructure modules."""

from .exceptions import (
    DocuPicksException,
    ConfigurationError,
    NotFoundError,
    UpstreamError,
)

__all__ = [
    "DocuPicksException",
    "ConfigurationError",
    "NotFoundError",
    "UpstreamError",
]
