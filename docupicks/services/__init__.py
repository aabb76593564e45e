"""Services for documentary discovery, validation and caching."""

from .tmdb_client import TMDBClient
from .omdb_client import OMDbClient
from .validator import CrossValidator
from .batch import BatchScheduler
from .discovery import DiscoveryService
from .assembler import ResultAssembler
from .pipeline import DocumentaryPipeline
from .cache_service import CacheService, get_cache_service
from .catalog_service import CatalogService, get_catalog_service
from .search_service import SearchService, get_search_service
from .scheduler import SchedulerService, get_scheduler_service

__all__ = [
    "TMDBClient",
    "OMDbClient",
    "CrossValidator",
    "BatchScheduler",
    "DiscoveryService",
    "ResultAssembler",
    "DocumentaryPipeline",
    "CacheService",
    "get_cache_service",
    "CatalogService",
    "get_catalog_service",
    "SearchService",
    "get_search_service",
    "SchedulerService",
    "get_scheduler_service",
]
