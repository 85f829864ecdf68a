from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple, Union

__all__ = [
    "Text",
    "ContentList",
    "Node",
    "Content",
    "parse_content",
    "flatten",
]

INDENT_STEP = "  "


@dataclass(frozen=True)
class Text:
    """A literal string; embedded newlines separate display lines."""

    value: str


@dataclass(frozen=True)
class ContentList:
    """Ordered sequence of nested content nodes."""

    items: Tuple["Content", ...] = ()


@dataclass(frozen=True)
class Node:
    """Structured-content wrapper. Only its `content` field is rendered."""

    content: Optional["Content"] = None


Content = Union[Text, ContentList, Node]


def _scalar(raw: Any) -> Optional[Content]:
    if raw is None:
        return None
    if isinstance(raw, str):
        return Text(raw)
    if isinstance(raw, bool):
        return Text("true" if raw else "false")
    return Text(str(raw))


def parse_content(raw: Any) -> Optional[Content]:
    """
    Convert raw JSON definition data into the tagged `Content` variants.

    Strings become `Text`, arrays become `ContentList` and objects become
    `Node`. Numbers and booleans are coerced to their string form. `None`
    yields `None` and is dropped from lists.
    """
    built: List[Optional[Content]] = []
    stack: List[Tuple[Any, bool]] = [(raw, False)]
    while stack:
        current, children_done = stack.pop()
        if children_done:
            if isinstance(current, dict):
                built.append(Node(built.pop()))
            else:
                count = len(current)
                items = built[len(built) - count:]
                del built[len(built) - count:]
                built.append(ContentList(tuple(item for item in items if item is not None)))
        elif isinstance(current, dict):
            inner = current.get("content")
            # An absent or falsy content field renders nothing.
            if not inner:
                built.append(Node(None))
                continue
            stack.append((current, True))
            stack.append((inner, False))
        elif isinstance(current, (list, tuple)):
            stack.append((current, True))
            stack.extend((item, False) for item in reversed(current))
        else:
            built.append(_scalar(current))
    return built[0]


def _text_lines(value: str, indent: str) -> Iterator[str]:
    for line in value.split("\n"):
        stripped = line.strip()
        if stripped:
            yield f"{indent}{stripped}"


def flatten(content: Optional[Content], indent: str = "") -> Iterator[str]:
    """
    Yield the display lines of a content tree.

    Text is split on newlines with blank lines dropped. List items stay at
    the current indent. A Node holding Text stays at the current indent,
    any other Node payload is indented by two more spaces.

    Walks the tree with an explicit stack so nesting depth is unbounded.
    """
    stack = [(content, indent)]
    while stack:
        current, level = stack.pop()
        if current is None:
            continue
        if isinstance(current, Text):
            yield from _text_lines(current.value, level)
        elif isinstance(current, ContentList):
            stack.extend((item, level) for item in reversed(current.items))
        elif isinstance(current, Node):
            inner = current.content
            if isinstance(inner, Text):
                stack.append((inner, level))
            elif inner is not None:
                stack.append((inner, level + INDENT_STEP))
        else:
            yield f"{level}{str(current).strip()}"
