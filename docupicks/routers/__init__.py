"""API Routers."""

from .docs import router as docs_router
from .scheduler import router as scheduler_router

__all__ = [
    "docs_router",
    "scheduler_router",
]
