"""Base exception for the topic feed."""


class TopicFeedError(Exception):
    """Base class for topic feed errors."""
