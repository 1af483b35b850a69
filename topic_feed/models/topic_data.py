"""Data models for topics, comments and the cached dataset."""

from dataclasses import dataclass, field
from typing import Any


# Provenance tags for a loaded dataset
SOURCE_API = "api"
SOURCE_CACHE = "localStorage"
SOURCE_CACHE_FALLBACK = "localStorage (fallback)"


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class Person:
    """Comment author as delivered by the feed."""

    guid: str
    name: str = ""
    first: str = ""
    last: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Person":
        return cls(
            guid=_as_str(data.get("guid")),
            name=_as_str(data.get("name")),
            first=_as_str(data.get("first")),
            last=_as_str(data.get("last")),
        )


@dataclass
class Comment:
    """Display-ready comment with the author name resolved."""

    text: str
    time: str
    by: str
    by_guid: str

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "time": self.time,
            "by": self.by,
            "byGuid": self.by_guid,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Comment":
        return cls(
            text=_as_str(data.get("text")),
            time=_as_str(data.get("time")),
            by=_as_str(data.get("by")) or "Unknown",
            by_guid=_as_str(data.get("byGuid")),
        )


@dataclass
class Topic:
    """Display-ready topic with its comments in feed order."""

    guid: str
    name: str
    comments: list[Comment] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "guid": self.guid,
            "name": self.name,
            "comments": [c.to_dict() for c in self.comments],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Topic":
        return cls(
            guid=_as_str(data.get("guid")),
            name=_as_str(data.get("name")),
            comments=[
                Comment.from_dict(c if isinstance(c, dict) else {})
                for c in _as_list(data.get("comments"))
            ],
        )


@dataclass
class Dataset:
    """
    Normalized dataset as returned to callers.

    `raw` is the untouched fetch payload. `source` is only set on datasets
    handed back by `DataService.load_data` and is never persisted.
    """

    topics: list[Topic]
    persons: list[dict]
    raw: Any
    source: str | None = None

    def to_dict(self, include_source: bool = False) -> dict:
        data = {
            "topics": [t.to_dict() for t in self.topics],
            "persons": self.persons,
            "raw": self.raw,
        }
        if include_source:
            data["source"] = self.source
        return data

    @classmethod
    def from_dict(cls, data: dict, source: str | None = None) -> "Dataset":
        """Rebuild a dataset from its persisted form."""
        return cls(
            topics=[
                Topic.from_dict(t if isinstance(t, dict) else {})
                for t in _as_list(data.get("topics"))
            ],
            persons=_as_list(data.get("persons")),
            raw=data.get("raw", {}),
            source=source,
        )
