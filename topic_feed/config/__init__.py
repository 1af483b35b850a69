"""Configuration."""

from topic_feed.config.settings import Settings, DEFAULT_TOPICS_URL, CACHE_KEY

__all__ = ["Settings", "DEFAULT_TOPICS_URL", "CACHE_KEY"]
