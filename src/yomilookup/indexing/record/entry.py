from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple

from .content import Content, ContentList, flatten, parse_content

__all__ = ["DictionaryEntry", "normalize", "split_tags"]

RAW_FIELD_COUNT = 8


def split_tags(tag_string: Any) -> Tuple[str, ...]:
    """Split a space separated tag string, discarding empty segments."""
    if not isinstance(tag_string, str):
        return ()
    return tuple(tag for tag in tag_string.split(" ") if tag)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True, eq=False)
class DictionaryEntry:
    """
    Canonical form of one Yomichan term-bank record.

    Raw layout: [term, reading, tagString, rules, score, content, sequence, termTags].
    Equality is by identity; two records with equal fields stay distinct.
    """

    term: str
    reading: str
    tags: Tuple[str, ...] = ()
    rules: str = ""
    score: Any = 0
    content: Optional[Content] = field(default_factory=ContentList)
    sequence: Any = 0
    term_tags: str = ""

    @classmethod
    def from_raw(cls, payload: Sequence[Any]) -> "DictionaryEntry":
        if isinstance(payload, (str, bytes)) or not isinstance(payload, (list, tuple)):
            raise TypeError(f"Expected an entry array, got {type(payload).__name__}")
        if not payload:
            raise ValueError("Entry array is empty, no term present")
        values = list(payload[:RAW_FIELD_COUNT])
        values += [None] * (RAW_FIELD_COUNT - len(values))
        term, reading, tag_string, rules, score, content, sequence, term_tags = values
        return cls(
            term=_text(term),
            reading=_text(reading),
            tags=split_tags(tag_string),
            rules=_text(rules),
            score=score or 0,
            content=parse_content(content),
            sequence=sequence or 0,
            term_tags=_text(term_tags),
        )

    def definition_lines(self, indent: str = "") -> list[str]:
        """Flattened display lines of the definition payload."""
        return list(flatten(self.content, indent))


def normalize(raw: Sequence[Any]) -> DictionaryEntry:
    """Convert one raw term-bank record into a `DictionaryEntry`."""
    return DictionaryEntry.from_raw(raw)
