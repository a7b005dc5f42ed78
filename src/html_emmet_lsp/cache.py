"""Bounded cache for per-document structural parses.

Entries are keyed by document URI and tagged with the document version and
language they were computed from. The cache is bounded both by entry count
(least recently used entries are evicted first) and by age since the last
access. It is not thread safe: a multi-threaded host must guard ``get``,
``on_document_removed`` and ``dispose`` with one lock.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from ._logging import get_logger
from .constants import DEFAULT_CACHE_MAX_AGE_SECONDS, DEFAULT_CACHE_MAX_ENTRIES

if TYPE_CHECKING:
    from collections.abc import Callable

logger = get_logger(__name__, "cache")

T = TypeVar("T")


class CacheableDocument(Protocol):
    uri: str
    version: int | None
    language_id: str | None


class DocumentIdentity(Protocol):
    uri: str


@dataclass
class CacheEntry(Generic[T]):
    """A computed model and the document state it was computed from."""

    uri: str
    version: int | None
    language_id: str | None
    model: T
    last_access: float


class LanguageModelCache(Generic[T]):
    """Memoize ``parse(document)`` per document URI and version."""

    def __init__(
        self,
        parse: Callable[[CacheableDocument], T],
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        max_age_seconds: float = DEFAULT_CACHE_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            msg = f"max_entries must be at least 1, got {max_entries}"
            raise ValueError(msg)
        self._parse = parse
        self._max_entries = max_entries
        self._max_age_seconds = max_age_seconds
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry[T]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, uri: str) -> bool:
        return uri in self._entries

    def _is_fresh(self, entry: CacheEntry[T], document: CacheableDocument, now: float) -> bool:
        return (
            entry.version == document.version
            and entry.language_id == document.language_id
            and now - entry.last_access <= self._max_age_seconds
        )

    def get(self, document: CacheableDocument) -> T:
        """Return the cached model for ``document``, parsing it when stale or absent."""
        now = self._clock()
        entry = self._entries.get(document.uri)
        if entry is not None and self._is_fresh(entry, document, now):
            entry.last_access = now
            self._entries.move_to_end(document.uri)
            return entry.model

        model = self._parse(document)
        self._entries[document.uri] = CacheEntry(
            uri=document.uri,
            version=document.version,
            language_id=document.language_id,
            model=model,
            last_access=now,
        )
        self._entries.move_to_end(document.uri)

        while len(self._entries) > self._max_entries:
            evicted_uri, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted parse of {evicted_uri}")

        return model

    def on_document_removed(self, document: DocumentIdentity) -> None:
        """Drop the entry of a document the client closed."""
        self._entries.pop(document.uri, None)

    def dispose(self) -> None:
        """Release every entry."""
        self._entries.clear()

    def stats(self) -> dict[str, float]:
        return {
            "size": len(self._entries),
            "capacity": self._max_entries,
            "max_age_seconds": self._max_age_seconds,
        }
