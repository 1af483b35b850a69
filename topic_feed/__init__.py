"""Topic and comment feed with local caching."""

from topic_feed.data import DataService, TopicFetcher, DataCache
from topic_feed.data.cache import CacheReadError, CacheWriteError
from topic_feed.data.fetcher import FetchError
from topic_feed.data.normalizer import process_data, get_person_name
from topic_feed.errors import TopicFeedError

__all__ = [
    "DataService",
    "TopicFetcher",
    "DataCache",
    "process_data",
    "get_person_name",
    "TopicFeedError",
    "FetchError",
    "CacheReadError",
    "CacheWriteError",
]
