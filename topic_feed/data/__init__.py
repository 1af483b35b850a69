"""Data fetching, normalization and caching."""

from .fetcher import TopicFetcher
from .cache import DataCache
from .service import DataService

__all__ = ["TopicFetcher", "DataCache", "DataService"]
