"""Shared fixtures for topic feed tests."""

import httpx
import pytest

from topic_feed.config import Settings
from topic_feed.data.fetcher import TopicFetcher


TEST_URL = "https://feed.example.test/topics.json"


class MemoryStore:
    """Dict-backed key-value store."""

    def __init__(self, initial: dict | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.values[key] = value


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, json=None, content: bytes | None = None,
                 error: Exception | None = None) -> None:
        self.status_code = status_code
        self.json = json
        self.content = content
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a temp cache dir and a fake URL."""
    return Settings(topics_url=TEST_URL, cache_dir=tmp_path / "cache")


@pytest.fixture
def raw_payload() -> dict:
    """Small feed payload with one known and one unknown author."""
    return {
        "persons": [
            {"guid": "p1", "first": "Ada", "last": "Lovelace"},
            {"guid": "p2", "name": "Grace Hopper"},
        ],
        "topics": [
            {
                "guid": "t1",
                "name": "Intro",
                "comments": [
                    {"comment": "hi", "date": "2024-01-01", "by": "p1"},
                    {"comment": "hello", "date": "2024-01-02", "by": "p2"},
                ],
            },
            {
                "guid": "t2",
                "name": "Follow-up",
                "comments": [
                    {"comment": "who?", "date": "2024-01-03", "by": "pX"},
                ],
            },
        ],
    }


@pytest.fixture
def make_fetcher(settings):
    """Build a TopicFetcher backed by a MockTransport handler."""

    def _make(handler: RecordingHandler) -> TopicFetcher:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return TopicFetcher(settings, client=client)

    return _make
