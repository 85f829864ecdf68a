from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..errors import TokenizationError
from ..indexing.index import DictionaryIndex
from ..indexing.record.entry import DictionaryEntry
from .tokenizer import BaseForm

__all__ = ["CollectionMatches", "LemmaMemo", "LookupResolver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionMatches:
    collection_id: str
    entries: Tuple[DictionaryEntry, ...]
    matched_key: str
    via_lemma: bool = False

    def __iter__(self):
        # Unpacks as (collection_id, entries).
        yield self.collection_id
        yield self.entries


class LemmaMemo:
    """Base form of one query, computed at most once and only when asked for."""

    def __init__(self, query: str, base_form: BaseForm):
        self.query = query
        self._base_form = base_form
        self._value: Optional[str] = None
        self.calls = 0

    @property
    def value(self) -> str:
        if self._value is None:
            self.calls += 1
            self._value = self._base_form(self.query) or self.query
            logger.debug("Base form of %r is %r", self.query, self._value)
        return self._value


class LookupResolver:
    """
    Resolve a query against every collection of a ready index.

    Each collection is tried with the query as typed. Collections with no
    exact match are retried with the query's base form, which is computed
    once per query and only if some collection needs it.
    """

    def __init__(self, index: DictionaryIndex, base_form: BaseForm):
        self.index = index
        self.base_form = base_form

    def resolve(self, query: str) -> List[CollectionMatches]:
        if not query:
            return []

        lemma = LemmaMemo(query, self.base_form)
        results: List[CollectionMatches] = []
        failure: Optional[TokenizationError] = None

        for collection_id in self.index.collection_ids:
            exact = self.index.lookup(collection_id, query)
            if exact:
                results.append(CollectionMatches(collection_id, tuple(exact), query))
                continue
            if failure is not None:
                continue
            try:
                base = lemma.value
            except TokenizationError as exc:
                failure = exc
                continue
            if base == query:
                continue
            fallback = self.index.lookup(collection_id, base)
            if fallback:
                results.append(
                    CollectionMatches(collection_id, tuple(fallback), base, via_lemma=True)
                )

        if failure is not None:
            raise TokenizationError(str(failure), partial=results) from failure
        return results
