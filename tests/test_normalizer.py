"""Tests for feed normalization and author name resolution."""

import copy

import pytest

from topic_feed.data.normalizer import (
    UNKNOWN_NAME,
    build_person_lookup,
    get_person_name,
    process_data,
)
from topic_feed.models.topic_data import Comment, Person, Topic


class TestProcessData:
    """Test suite for process_data"""

    def test_resolves_first_and_last_name(self):
        """Comment author is rendered from first/last when name is absent"""
        raw = {
            "persons": [{"guid": "p1", "first": "Ada", "last": "Lovelace"}],
            "topics": [{
                "guid": "t1",
                "name": "Intro",
                "comments": [{"comment": "hi", "date": "2024-01-01", "by": "p1"}],
            }],
        }

        result = process_data(raw)

        assert result == [
            Topic(
                guid="t1",
                name="Intro",
                comments=[Comment(text="hi", time="2024-01-01", by="Ada Lovelace", by_guid="p1")],
            )
        ]
        assert result[0].to_dict() == {
            "guid": "t1",
            "name": "Intro",
            "comments": [
                {"text": "hi", "time": "2024-01-01", "by": "Ada Lovelace", "byGuid": "p1"}
            ],
        }

    def test_unknown_author_guid(self):
        """Unknown person guid resolves to Unknown but keeps the guid"""
        raw = {"persons": [], "topics": [{"comments": [{"comment": "x", "by": "pX"}]}]}

        comment = process_data(raw)[0].comments[0]

        assert comment.by == "Unknown"
        assert comment.by_guid == "pX"

    def test_preserves_topic_and_comment_order(self, raw_payload):
        """Processed topics and comments line up index-for-index with the input"""
        result = process_data(raw_payload)

        assert [t.guid for t in result] == [t["guid"] for t in raw_payload["topics"]]
        for topic, raw_topic in zip(result, raw_payload["topics"]):
            assert len(topic.comments) == len(raw_topic["comments"])
            assert [c.text for c in topic.comments] == [
                c["comment"] for c in raw_topic["comments"]
            ]

    def test_name_takes_precedence(self, raw_payload):
        result = process_data(raw_payload)

        assert result[0].comments[1].by == "Grace Hopper"

    def test_empty_input(self):
        assert process_data({}) == []

    @pytest.mark.parametrize("raw", [
        {"topics": None, "persons": "x"},
        {"topics": "nope"},
        {"topics": {"guid": "t1"}},
        None,
        [],
        "garbage",
    ])
    def test_malformed_input_degrades_to_empty(self, raw):
        """Malformed root fields never raise"""
        assert process_data(raw) == []

    def test_missing_fields_default_to_empty_strings(self):
        """Absent topic and comment fields become empty strings"""
        result = process_data({"topics": [{"comments": [{}]}]})

        assert result == [
            Topic(guid="", name="", comments=[Comment(text="", time="", by="Unknown", by_guid="")])
        ]

    def test_malformed_comments_list(self):
        result = process_data({"topics": [{"guid": "t1", "comments": "oops"}]})

        assert result[0].comments == []

    def test_non_mapping_entries_keep_their_slot(self):
        """Malformed topic/comment entries are defaulted, not dropped"""
        result = process_data({"topics": [None, {"comments": [None, {"comment": "ok"}]}]})

        assert len(result) == 2
        assert result[0] == Topic(guid="", name="", comments=[])
        assert [c.text for c in result[1].comments] == ["", "ok"]

    def test_person_without_names_is_unknown(self):
        raw = {
            "persons": [{"guid": "p1", "first": "", "last": "Solo"}],
            "topics": [{"comments": [{"by": "p1"}]}],
        }

        assert process_data(raw)[0].comments[0].by == "Unknown"

    def test_first_name_only_keeps_trailing_space(self):
        raw = {
            "persons": [{"guid": "p1", "first": "Cher"}],
            "topics": [{"comments": [{"by": "p1"}]}],
        }

        assert process_data(raw)[0].comments[0].by == "Cher "

    def test_stable_on_processed_shape(self, raw_payload):
        """Re-processing already-processed topics leaves shared fields alone"""
        first = process_data(raw_payload)
        second = process_data({
            "topics": [t.to_dict() for t in first],
            "persons": raw_payload["persons"],
        })

        assert [(t.guid, t.name) for t in second] == [(t.guid, t.name) for t in first]
        assert [len(t.comments) for t in second] == [len(t.comments) for t in first]

    def test_does_not_mutate_input(self, raw_payload):
        before = copy.deepcopy(raw_payload)
        process_data(raw_payload)

        assert raw_payload == before


class TestGetPersonName:
    """Test suite for get_person_name"""

    def test_none(self):
        assert get_person_name(None) == UNKNOWN_NAME

    def test_name(self):
        assert get_person_name({"name": "Grace Hopper", "first": "G"}) == "Grace Hopper"

    def test_first_last(self):
        assert get_person_name({"first": "Ada", "last": "Lovelace"}) == "Ada Lovelace"

    def test_first_only(self):
        assert get_person_name({"first": "Ada"}) == "Ada "

    def test_empty_record(self):
        assert get_person_name({}) == UNKNOWN_NAME

    def test_person_dataclass(self):
        assert get_person_name(Person(guid="p1", first="Ada", last="Lovelace")) == "Ada Lovelace"

    @pytest.mark.parametrize("person", [
        None,
        {},
        {"name": ""},
        {"first": "", "last": ""},
        {"name": None, "first": None},
        Person(guid="p9"),
    ])
    def test_never_empty(self, person):
        assert get_person_name(person) != ""


class TestBuildPersonLookup:
    """Test suite for build_person_lookup"""

    def test_indexes_by_guid(self, raw_payload):
        lookup = build_person_lookup(raw_payload["persons"])

        assert set(lookup) == {"p1", "p2"}
        assert lookup["p2"]["name"] == "Grace Hopper"

    def test_skips_malformed_entries(self):
        lookup = build_person_lookup([{"guid": "p1"}, "bogus", None, {"name": "no guid"}])

        assert list(lookup) == ["p1"]

    def test_not_a_list(self):
        assert build_person_lookup("x") == {}
