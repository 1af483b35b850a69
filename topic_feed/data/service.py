"""Cache-first loading of the topic dataset."""

import json
import logging
from typing import Any

from topic_feed.config import Settings
from topic_feed.data.cache import (
    CacheReadError,
    CacheWriteError,
    DataCache,
    KeyValueStore,
)
from topic_feed.data.fetcher import FetchError, TopicFetcher
from topic_feed.data.normalizer import get_person_name, process_data
from topic_feed.models.topic_data import (
    Dataset,
    Person,
    Topic,
    SOURCE_API,
    SOURCE_CACHE,
    SOURCE_CACHE_FALLBACK,
)


logger = logging.getLogger(__name__)


class DataService:
    """Loads topics from the local cache, falling back to the network."""

    def __init__(
        self,
        settings: Settings | None = None,
        fetcher: TopicFetcher | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or TopicFetcher(self.settings)
        self.store = store if store is not None else DataCache(self.settings.db_path)

    def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._owns_fetcher:
            self.fetcher.close()

    def __enter__(self) -> "DataService":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def fetch_data(self) -> Any:
        """Fetch the raw payload from the network. Raises FetchError."""
        return self.fetcher.fetch_data()

    def process_data(self, raw: Any) -> list[Topic]:
        """Normalize a raw payload into display-ready topics."""
        return process_data(raw)

    def get_person_name(self, person: dict | Person | None) -> str:
        """Resolve the display name for a person record."""
        return get_person_name(person)

    def _read_cached(self) -> Dataset | None:
        """Read the cache slot. Returns None when the slot is empty."""
        try:
            saved = self.store.get(self.settings.cache_key)
        except CacheReadError:
            raise
        except Exception as e:
            raise CacheReadError(f"Could not read cache slot: {e}") from e
        if not saved:
            return None
        try:
            data = json.loads(saved)
        except ValueError as e:
            raise CacheReadError(f"Cached payload is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise CacheReadError(
                f"Cached payload is a {type(data).__name__}, expected an object"
            )
        return Dataset.from_dict(data)

    def _write_cached(self, dataset: Dataset) -> None:
        """Persist a dataset (without its source tag) to the cache slot."""
        try:
            payload = json.dumps(dataset.to_dict())
        except (TypeError, ValueError) as e:
            raise CacheWriteError(f"Could not serialize dataset: {e}") from e
        try:
            self.store.set(self.settings.cache_key, payload)
        except CacheWriteError:
            raise
        except Exception as e:
            raise CacheWriteError(f"Could not write cache slot: {e}") from e

    def load_data(self, force_reload: bool = False) -> Dataset | None:
        """
        Load the topic dataset.

        Args:
            force_reload: Skip the cache and go to the network first. When the
                network fails, the cached copy is returned as a fallback.

        Returns:
            Dataset tagged with its source ("localStorage", "api" or
            "localStorage (fallback)"), or None when no data is available
        """
        if not force_reload:
            try:
                cached = self._read_cached()
            except CacheReadError as e:
                logger.warning(f"Error loading from cache: {e}")
                cached = None
            if cached is not None:
                logger.info(f"Loaded data from cache with {len(cached.topics)} topics")
                cached.source = SOURCE_CACHE
                return cached

        try:
            raw = self.fetch_data()
        except FetchError as e:
            logger.error(f"Error loading data from network: {e}")
            return self._load_fallback(force_reload)

        persons = raw.get("persons") if isinstance(raw, dict) else None
        dataset = Dataset(
            topics=self.process_data(raw),
            persons=persons if isinstance(persons, list) else [],
            raw=raw,
        )

        try:
            self._write_cached(dataset)
        except CacheWriteError as e:
            logger.error(f"Could not persist fetched data, returning it uncached: {e}")

        dataset.source = SOURCE_API
        return dataset

    def _load_fallback(self, force_reload: bool) -> Dataset | None:
        if force_reload:
            try:
                cached = self._read_cached()
            except CacheReadError as e:
                logger.error(f"Fallback to cache also failed: {e}")
                cached = None
            if cached is not None:
                logger.info(
                    f"Falling back to cached data with {len(cached.topics)} topics"
                )
                cached.source = SOURCE_CACHE_FALLBACK
                return cached

        logger.warning("No data available from network or cache")
        return None

    def clear_cache(self) -> bool:
        """Remove the cached dataset. Returns True if a slot was removed."""
        key = self.settings.cache_key
        if isinstance(self.store, DataCache):
            removed = self.store.delete(key)
        else:
            # Plain get/set stores have no delete; an empty value reads as a miss
            removed = bool(self.store.get(key))
            self.store.set(key, "")
        if removed:
            logger.info(f"Cleared cache slot {key!r}")
        return removed

    def get_status(self) -> dict:
        """Get status of the cache slot."""
        status = {
            "key": self.settings.cache_key,
            "url": self.settings.topics_url,
            "cached": False,
            "topics": 0,
            "size": None,
            "updated_at": None,
        }

        try:
            cached = self._read_cached()
        except CacheReadError as e:
            logger.warning(f"Cache slot unreadable: {e}")
            cached = None
        if cached is not None:
            status["cached"] = True
            status["topics"] = len(cached.topics)

        if isinstance(self.store, DataCache):
            try:
                slots = self.store.get_cache_status()
            except CacheReadError as e:
                logger.warning(f"Cache status unavailable: {e}")
                slots = {}
            slot = slots.get(self.settings.cache_key, {})
            status["size"] = slot.get("size")
            status["updated_at"] = slot.get("updated_at")

        return status


def main() -> None:
    """CLI entry point for refreshing and inspecting the cache."""
    import argparse
    import sys

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Load the topic feed")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Fetch from the network even if cached data exists",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show cache status and exit",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Remove cached data and exit",
    )
    args = parser.parse_args()

    try:
        with DataService() as service:
            if args.status:
                status = service.get_status()
                print("\nCache Status:")
                print("-" * 70)
                for key, value in status.items():
                    print(f"  {key:12} | {value if value is not None else 'N/A'}")
                return

            if args.clear:
                removed = service.clear_cache()
                print("Cache cleared." if removed else "Cache was already empty.")
                return

            dataset = service.load_data(force_reload=args.reload)
            if dataset is None:
                print("No data available.")
                sys.exit(1)

            print(f"\nLoaded {len(dataset.topics)} topics (source: {dataset.source})")
            for topic in dataset.topics:
                print(f"  {topic.name or topic.guid}: {len(topic.comments)} comments")

    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
