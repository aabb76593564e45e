"""
API Response Models

Standardized response structures for documentary endpoints.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


class ResultSource(str, Enum):
    """Which layer of the recovery chain produced a result."""
    CACHE = "cache"
    PIPELINE = "pipeline"
    STALE = "stale"
    STATIC = "static"


class DocsResponse(BaseModel):
    """Documentary list returned to the front-end."""
    items: List[Dict[str, Any]] = Field(default_factory=list)
    source: ResultSource
    count: int = 0
    date_key: str = Field(alias="dateKey")
    generated_at: datetime = Field(
        default_factory=datetime.utcnow,
        alias="generatedAt"
    )
    # Set when the stale copy or static titles are served after a failure
    error: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)


class RefreshResult(BaseModel):
    """Outcome of a refresh run (scheduler trigger)."""
    success: bool
    date_key: str = Field(alias="dateKey")
    count: int = 0
    cached: bool = False
    message: Optional[str] = None
    
    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: bool = True
    message: str
    status_code: int
