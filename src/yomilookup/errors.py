from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence


class YomiLookupError(Exception):
    """Base class for every error raised by yomilookup."""


class LoadIOError(YomiLookupError):
    """A collection directory or file could not be read. Aborts the load."""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Could not read {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ParseError(YomiLookupError):
    """A term-bank file is not valid JSON or not entry-shaped. The file is skipped."""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Could not parse {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedEntryError(ParseError):
    """A single record is not tuple-shaped. Only that record is skipped."""

    def __init__(self, path: Path | str, position: int, reason: str = ""):
        self.position = position
        super().__init__(path, f"record {position}: {reason}" if reason else f"record {position}")


class NotReadyError(YomiLookupError):
    """Lookup attempted before the index finished building."""


class IndexFrozenError(YomiLookupError):
    """Attempt to add a collection to an index that is already ready."""


class TokenizationError(YomiLookupError):
    """
    The morphological analyser failed to start or to tokenize.

    `partial` holds the exact-match results gathered for the query before the
    lemma pass was aborted.
    """

    def __init__(self, message: str, partial: Sequence[Any] = ()):
        super().__init__(message)
        self.partial = list(partial)
