from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from tqdm import tqdm

from ..config import DEFAULT_FILE_PATTERN, DEFAULT_LOAD_WORKERS
from ..errors import LoadIOError, MalformedEntryError, ParseError
from .index import DictionaryIndex
from .record.entry import RAW_FIELD_COUNT

__all__ = [
    "LoadReport",
    "discover_collections",
    "read_term_bank",
    "load_index",
]

logger = logging.getLogger(__name__)


@dataclass
class LoadReport:
    """What a load produced, including every recovered error."""

    index: DictionaryIndex
    files_read: int = 0
    skipped_files: List[ParseError] = field(default_factory=list)
    skipped_entries: List[MalformedEntryError] = field(default_factory=list)


def discover_collections(
    root: Path, pattern: str = DEFAULT_FILE_PATTERN
) -> List[Tuple[str, List[Path]]]:
    """
    List every collection directory under `root` with its term-bank files.

    Non-directories under `root` are ignored. Collections and files are
    sorted by name.
    """
    root = Path(root)
    if not root.is_dir():
        raise LoadIOError(root, "collections root is not a directory")
    try:
        children = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise LoadIOError(root, str(exc)) from exc

    collections: List[Tuple[str, List[Path]]] = []
    for child in children:
        if not child.is_dir():
            continue
        try:
            files = sorted(
                (p for p in child.glob(pattern) if p.is_file()), key=lambda p: p.name
            )
        except OSError as exc:
            raise LoadIOError(child, str(exc)) from exc
        collections.append((child.name, files))
    return collections


def _is_single_record(data: List[Any]) -> bool:
    # Only the definitions field (position 5) of a record may be an array.
    return (
        0 < len(data) <= RAW_FIELD_COUNT
        and isinstance(data[0], str)
        and not any(
            isinstance(item, (list, tuple))
            for position, item in enumerate(data)
            if position != 5
        )
    )


def _as_records(data: Any) -> List[Any]:
    # A file may hold a single record instead of an array of records.
    if isinstance(data, list):
        if _is_single_record(data):
            return [data]
        return data
    return [data]


def read_term_bank(path: Path) -> List[Any]:
    """
    Read one term-bank file and return its raw records.

    Raises `LoadIOError` when the file cannot be read and `ParseError` when
    its content is not JSON.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not UTF-8 text ({exc.reason})") from exc
    except OSError as exc:
        raise LoadIOError(path, str(exc)) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(path, f"invalid JSON at line {exc.lineno} column {exc.colno}") from exc
    return _as_records(data)


def _read_or_skip(path: Path) -> Tuple[Path, Optional[List[Any]], Optional[ParseError]]:
    try:
        return path, read_term_bank(path), None
    except ParseError as exc:
        return path, None, exc


def load_index(
    root: Path,
    pattern: str = DEFAULT_FILE_PATTERN,
    workers: int = DEFAULT_LOAD_WORKERS,
    show_progress: bool = False,
) -> LoadReport:
    """
    Load every collection under `root` into a ready `DictionaryIndex`.

    Files are read concurrently. Unparseable files and malformed records are
    reported and skipped; a read failure aborts the whole load. The index is
    marked ready only once every file has been accounted for.
    """
    collections = discover_collections(root, pattern)
    jobs: List[Tuple[str, Path]] = [
        (collection_id, path) for collection_id, paths in collections for path in paths
    ]
    index = DictionaryIndex()
    report = LoadReport(index=index)
    # Register every collection up front so empty ones keep their place.
    for collection_id, _ in collections:
        index.add_entries(collection_id, ())

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        # map() keeps submission order, so entries land in sorted file order.
        results = executor.map(_read_or_skip, [path for _, path in jobs])
        progress = tqdm(
            zip(jobs, results),
            total=len(jobs),
            desc="Loading dictionaries",
            unit="file",
            disable=not show_progress,
        )
        for (collection_id, _), (path, records, error) in progress:
            if error is not None:
                logger.warning("Skipping file: %s", error)
                report.skipped_files.append(error)
                continue
            report.files_read += 1
            report.skipped_entries.extend(
                index.add_entries(collection_id, records, source=path)
            )

    index.mark_ready()

    logger.info(
        "Loaded %d files from %s (%d files skipped, %d entries skipped)",
        report.files_read,
        root,
        len(report.skipped_files),
        len(report.skipped_entries),
    )
    return report
