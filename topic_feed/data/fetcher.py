"""Topic feed fetcher."""

import logging
from typing import Any

import httpx

from topic_feed.config import Settings
from topic_feed.errors import TopicFeedError


logger = logging.getLogger(__name__)


class FetchError(TopicFeedError):
    """Network fetch failed: bad status, transport error or unparseable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TopicFetcher:
    """Fetches the raw topic/person payload over HTTP."""

    HEADERS = {
        "Accept": "application/json",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }

    def __init__(
        self, settings: Settings | None = None, client: httpx.Client | None = None
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.request_timeout)
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "TopicFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def fetch_data(self) -> Any:
        """
        Fetch the raw feed payload.

        Returns:
            Parsed JSON body, expected to look like {"topics": [...], "persons": [...]}

        Raises:
            FetchError: on a non-2xx status, a transport failure or a body
                that is not valid JSON
        """
        url = self.settings.topics_url
        logger.info(f"Fetching data from: {url}")

        try:
            response = self.client.get(url, headers=self.HEADERS)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching data: {e}")
            raise FetchError(f"Failed to fetch data: {e}") from e

        if not response.is_success:
            message = (
                f"Failed to fetch data: HTTP error! Status: "
                f"{response.status_code} {response.reason_phrase}"
            )
            logger.error(message)
            raise FetchError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Error parsing response from {url}: {e}")
            raise FetchError(
                f"Failed to fetch data: invalid JSON body ({e})",
                status_code=response.status_code,
            ) from e

        if isinstance(data, dict):
            topics = data.get("topics")
            persons = data.get("persons")
            logger.info(
                f"Successfully fetched data with "
                f"{len(topics) if isinstance(topics, list) else 0} topics and "
                f"{len(persons) if isinstance(persons, list) else 0} persons"
            )
        else:
            logger.warning(f"Unexpected payload type from {url}: {type(data).__name__}")

        return data
