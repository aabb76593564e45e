"""
Cache Entry Model

One day's curated result set as stored in the key-value cache.
"""

import time
from typing import List
from pydantic import BaseModel, Field, ConfigDict

from .movie import ValidatedItem


class CacheEntry(BaseModel):
    """
    Stored as ``{"id": <date key>, "data": [...], "ttl": <epoch seconds>}``.

    Entries are never mutated; the next day's key supersedes them.
    """
    date_key: str = Field(..., alias="id")
    payload: List[ValidatedItem] = Field(default_factory=list, alias="data")
    expiry_timestamp: int = Field(..., alias="ttl", description="Expiry in epoch seconds")
    
    model_config = ConfigDict(populate_by_name=True)

    def is_expired(self, now: float = None) -> bool:
        return (time.time() if now is None else now) >= self.expiry_timestamp
