"""Data models for topics and comments."""

from topic_feed.models.topic_data import (
    Person,
    Comment,
    Topic,
    Dataset,
    SOURCE_API,
    SOURCE_CACHE,
    SOURCE_CACHE_FALLBACK,
)

__all__ = [
    "Person",
    "Comment",
    "Topic",
    "Dataset",
    "SOURCE_API",
    "SOURCE_CACHE",
    "SOURCE_CACHE_FALLBACK",
]
