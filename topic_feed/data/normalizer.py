"""Reshape the raw feed payload into display-ready topics."""

from collections.abc import Mapping
from typing import Any

from topic_feed.models.topic_data import Comment, Person, Topic


UNKNOWN_NAME = "Unknown"

# Stand-in author for comments whose guid is not in the person list
UNKNOWN_PERSON: dict[str, str] = {"name": UNKNOWN_NAME, "first": "", "last": ""}


def _text(value: Any) -> str:
    """Coerce a feed field to a string, treating missing values as empty."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    return value if isinstance(value, str) else str(value)


def _sequence(value: Any) -> list:
    return value if isinstance(value, list) else []


def _person_fields(person: Mapping | Person) -> tuple[str, str, str]:
    if isinstance(person, Person):
        return person.name, person.first, person.last
    return (
        _text(person.get("name")),
        _text(person.get("first")),
        _text(person.get("last")),
    )


def get_person_name(person: Mapping | Person | None) -> str:
    """
    Resolve a display name for a person.

    Order: `name` if set, then "first last" if `first` is set, else "Unknown".
    The result is never empty.
    """
    if person is None:
        return UNKNOWN_NAME

    name, first, last = _person_fields(person)
    if name:
        return name
    if first:
        return f"{first} {last}"
    return UNKNOWN_NAME


def build_person_lookup(persons: Any) -> dict[str, Mapping]:
    """Map person guid to person record, ignoring malformed entries."""
    lookup: dict[str, Mapping] = {}
    for person in _sequence(persons):
        if not isinstance(person, Mapping):
            continue
        guid = _text(person.get("guid"))
        if guid:
            lookup[guid] = person
    return lookup


def _process_comment(comment: Any, lookup: dict[str, Mapping]) -> Comment:
    if not isinstance(comment, Mapping):
        comment = {}
    by_guid = _text(comment.get("by"))
    person = lookup.get(by_guid, UNKNOWN_PERSON)
    return Comment(
        text=_text(comment.get("comment")),
        time=_text(comment.get("date")),
        by=get_person_name(person),
        by_guid=by_guid,
    )


def _process_topic(topic: Any, lookup: dict[str, Mapping]) -> Topic:
    if not isinstance(topic, Mapping):
        topic = {}
    return Topic(
        guid=_text(topic.get("guid")),
        name=_text(topic.get("name")),
        comments=[
            _process_comment(c, lookup) for c in _sequence(topic.get("comments"))
        ],
    )


def process_data(raw: Any) -> list[Topic]:
    """
    Turn a raw feed payload into topics with resolved comment authors.

    Never raises: missing or malformed `topics`, `persons` and `comments`
    fields are read as empty lists, and topic/comment order is preserved.
    """
    if not isinstance(raw, Mapping):
        return []

    lookup = build_person_lookup(raw.get("persons"))
    return [_process_topic(t, lookup) for t in _sequence(raw.get("topics"))]
