"""Pydantic models for the DocuPicks backend."""

from .movie import CandidateItem, ValidatedItem, StreamingProvider
from .cache import CacheEntry
from .response import DocsResponse, RefreshResult, ResultSource, ErrorResponse

__all__ = [
    "CandidateItem",
    "ValidatedItem",
    "StreamingProvider",
    "CacheEntry",
    "DocsResponse",
    "RefreshResult",
    "ResultSource",
    "ErrorResponse",
]
