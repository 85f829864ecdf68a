# tests/test_entry.py
"""Tests for normalizing raw term-bank records."""

import pytest

from yomilookup.indexing.record.content import ContentList, Node, Text
from yomilookup.indexing.record.entry import DictionaryEntry, normalize, split_tags


def test_full_record():
    entry = normalize(["猫", "ねこ", "n  common ", "", 5, ["cat"], 1234, "P"])

    assert entry.term == "猫"
    assert entry.reading == "ねこ"
    assert entry.tags == ("n", "common")
    assert entry.rules == ""
    assert entry.score == 5
    assert entry.sequence == 1234
    assert entry.term_tags == "P"
    assert entry.content == ContentList((Text("cat"),))
    assert entry.definition_lines() == ["cat"]


def test_missing_trailing_fields_default():
    entry = normalize(["猫"])

    assert entry.reading == ""
    assert entry.tags == ()
    assert entry.rules == ""
    assert entry.score == 0
    assert entry.sequence == 0
    assert entry.term_tags == ""
    assert entry.definition_lines() == []


def test_falsy_numbers_default_to_zero():
    entry = normalize(["猫", "ねこ", "", "", None, "cat", None, None])
    assert entry.score == 0
    assert entry.sequence == 0


def test_single_content_object_is_accepted():
    entry = normalize(["猫", "ねこ", "", "", 0, {"type": "structured-content", "content": "cat"}, 0, ""])
    assert entry.content == Node(Text("cat"))
    assert entry.definition_lines() == ["cat"]


@pytest.mark.parametrize("tag_string, expected", [
    ("", ()),
    ("a", ("a",)),
    (" a  b ", ("a", "b")),
    (None, ()),
    (7, ()),
])
def test_split_tags(tag_string, expected):
    assert split_tags(tag_string) == expected


@pytest.mark.parametrize("raw", ["猫", {"term": "猫"}, 42, None])
def test_non_array_record_is_rejected(raw):
    with pytest.raises(TypeError):
        normalize(raw)


def test_empty_record_is_rejected():
    with pytest.raises(ValueError):
        normalize([])


def test_normalize_is_deterministic():
    raw = ["猫", "ねこ", "n", "", 0, [{"content": ["a", "b"]}], 0, ""]
    first, second = normalize(raw), normalize(raw)

    assert first is not second
    assert (first.term, first.reading, first.tags, first.score, first.sequence) == (
        second.term, second.reading, second.tags, second.score, second.sequence,
    )
    assert first.content == second.content


def test_equal_records_stay_distinct():
    raw = ["猫", "ねこ", "", "", 0, "cat", 0, ""]
    assert normalize(raw) != normalize(raw)

