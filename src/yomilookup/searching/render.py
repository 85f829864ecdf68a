from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..indexing.record.entry import DictionaryEntry
from .resolver import CollectionMatches

__all__ = ["RenderedEntry", "render_entry", "format_entry", "format_results"]

ENTRY_SEPARATOR = "---"


@dataclass(frozen=True)
class RenderedEntry:
    term: str
    reading: str
    tags: Tuple[str, ...]
    lines: Tuple[str, ...]


def render_entry(entry: DictionaryEntry) -> RenderedEntry:
    """Everything a caller needs to display one match."""
    return RenderedEntry(
        term=entry.term,
        reading=entry.reading,
        tags=tuple(entry.tags),
        lines=tuple(entry.definition_lines()),
    )


def format_entry(rendered: RenderedEntry) -> str:
    header = f"■ {rendered.term}"
    if rendered.reading and rendered.reading != rendered.term:
        header = f"{header} ({rendered.reading})"
    output_lines = [header]
    if rendered.tags:
        output_lines.append(f"   [{', '.join(rendered.tags)}]")
    output_lines.extend(f"   {line}" for line in rendered.lines)
    return "\n".join(output_lines)


def format_results(results: Sequence[CollectionMatches]) -> str:
    """Text block with one section per collection that matched."""
    chunks: List[str] = []
    for match in results:
        title = f"=== Results from {match.collection_id} ==="
        if match.via_lemma:
            title = f"{title} (base form: {match.matched_key})"
        chunks.append(title)
        for entry in match.entries:
            chunks.append(format_entry(render_entry(entry)))
            chunks.append(ENTRY_SEPARATOR)
    return "\n".join(chunks)
