"""Configuration settings for the topic feed."""

from dataclasses import dataclass, field
from pathlib import Path
import os

from dotenv import load_dotenv


load_dotenv()


DEFAULT_TOPICS_URL = (
    "https://atillc.blob.core.windows.net/data-collector/icode/test-data/topics.json"
)

# Name of the single slot holding the last normalized dataset
CACHE_KEY = "topicData"


@dataclass
class Settings:
    """Application settings."""

    topics_url: str = field(
        default_factory=lambda: os.getenv("TOPICS_URL", DEFAULT_TOPICS_URL)
    )
    cache_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv(
                "TOPIC_FEED_CACHE_DIR",
                str(Path(__file__).parent.parent.parent / "cache"),
            )
        )
    )
    cache_key: str = CACHE_KEY
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("TOPIC_FEED_TIMEOUT", "30"))
    )
    db_path: Path = field(init=False)

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.cache_dir / "topic_data.db"

    def validate(self) -> None:
        """Validate required settings."""
        if not self.topics_url.startswith(("http://", "https://")):
            raise ValueError(
                f"TOPICS_URL must be an http(s) URL, got: {self.topics_url!r}"
            )
        if self.request_timeout <= 0:
            raise ValueError(
                f"TOPIC_FEED_TIMEOUT must be positive, got: {self.request_timeout}"
            )
        if not self.cache_key:
            raise ValueError("cache_key must not be empty")
