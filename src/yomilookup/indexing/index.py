from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..errors import IndexFrozenError, MalformedEntryError, NotReadyError
from .record.entry import DictionaryEntry, normalize

__all__ = ["Collection", "DictionaryIndex"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Collection:
    """One dictionary's entries plus its term and reading buckets.

    Buckets hold positions into `entries`, in source order.
    """

    collection_id: str
    entries: Tuple[DictionaryEntry, ...]
    by_term: Mapping[str, Tuple[int, ...]]
    by_reading: Mapping[str, Tuple[int, ...]]

    def lookup(self, key: str) -> List[DictionaryEntry]:
        positions = set(self.by_term.get(key, ()))
        positions.update(self.by_reading.get(key, ()))
        return [self.entries[position] for position in sorted(positions)]

    def __len__(self) -> int:
        return len(self.entries)


class _CollectionBuilder:
    def __init__(self, collection_id: str):
        self.collection_id = collection_id
        self.entries: List[DictionaryEntry] = []
        self.by_term: Dict[str, List[int]] = defaultdict(list)
        self.by_reading: Dict[str, List[int]] = defaultdict(list)

    def append(self, entry: DictionaryEntry) -> None:
        position = len(self.entries)
        self.entries.append(entry)
        self.by_term[entry.term].append(position)
        self.by_reading[entry.reading].append(position)

    def freeze(self) -> Collection:
        return Collection(
            collection_id=self.collection_id,
            entries=tuple(self.entries),
            by_term=MappingProxyType({k: tuple(v) for k, v in self.by_term.items()}),
            by_reading=MappingProxyType({k: tuple(v) for k, v in self.by_reading.items()}),
        )


class DictionaryIndex:
    """
    Term and reading lookup across every loaded collection.

    The index is filled with `add_entries` and becomes readable only after
    `mark_ready`. From then on it is an immutable snapshot: further adds raise
    `IndexFrozenError` and lookups before readiness raise `NotReadyError`.
    """

    def __init__(self) -> None:
        self._builders: Dict[str, _CollectionBuilder] = {}
        self._collections: Mapping[str, Collection] = MappingProxyType({})
        self._ready = False

    @classmethod
    def build(
        cls, collections: Iterable[Tuple[str, Iterable[Sequence[Any]]]]
    ) -> "DictionaryIndex":
        """Build a ready index from `(collection_id, raw_entries)` pairs."""
        index = cls()
        for collection_id, raw_entries in collections:
            index.add_entries(collection_id, raw_entries)
        return index.mark_ready()

    def add_entries(
        self,
        collection_id: str,
        raw_entries: Iterable[Sequence[Any]],
        source: Optional[Path | str] = None,
    ) -> List[MalformedEntryError]:
        """
        Normalize `raw_entries` and append them to `collection_id`.

        Records that are not entry arrays are logged and skipped; the
        returned list describes them. `source` names the file for diagnostics.
        """
        if self._ready:
            raise IndexFrozenError(f"Index is ready; cannot add to {collection_id!r}")
        builder = self._builders.get(collection_id)
        if builder is None:
            builder = self._builders[collection_id] = _CollectionBuilder(collection_id)

        skipped: List[MalformedEntryError] = []
        origin = source if source is not None else collection_id
        for position, raw in enumerate(raw_entries):
            try:
                entry = normalize(raw)
            except (TypeError, ValueError) as exc:
                error = MalformedEntryError(origin, position, str(exc))
                logger.warning("Skipping malformed entry: %s", error)
                skipped.append(error)
                continue
            builder.append(entry)
        return skipped

    def mark_ready(self) -> "DictionaryIndex":
        if self._ready:
            return self
        self._collections = MappingProxyType(
            {cid: builder.freeze() for cid, builder in self._builders.items()}
        )
        self._builders = {}
        self._ready = True
        logger.info(
            "Index ready: %d collections, %d entries", len(self._collections), len(self)
        )
        return self

    @property
    def is_ready(self) -> bool:
        return self._ready

    def _require_ready(self) -> None:
        if not self._ready:
            raise NotReadyError("Dictionary index is still loading")

    @property
    def collection_ids(self) -> List[str]:
        self._require_ready()
        return list(self._collections)

    def collection(self, collection_id: str) -> Collection:
        self._require_ready()
        try:
            return self._collections[collection_id]
        except KeyError:
            raise KeyError(f"Unknown collection: {collection_id!r}") from None

    def lookup(self, collection_id: str, key: str) -> List[DictionaryEntry]:
        """Entries of one collection whose term or reading equals `key`."""
        return self.collection(collection_id).lookup(key)

    def lookup_all(self, key: str) -> Iterator[Tuple[str, List[DictionaryEntry]]]:
        """Yield `(collection_id, entries)` for every collection with a match."""
        self._require_ready()
        for collection_id, collection in self._collections.items():
            matches = collection.lookup(key)
            if matches:
                yield collection_id, matches

    def stats(self) -> Dict[str, int]:
        self._require_ready()
        return {cid: len(collection) for cid, collection in self._collections.items()}

    def __len__(self) -> int:
        return sum(len(collection) for collection in self._collections.values())

    def __repr__(self) -> str:
        state = "ready" if self._ready else "loading"
        return f"<DictionaryIndex {state} collections={len(self._collections) or len(self._builders)}>"
