# event_search/core/protocols.py
"""
Protocol interfaces for the pieces EventSearchIndex talks to.

The index facade depends on these rather than on Trie / the concrete
sources, so tests can hand it fakes and hosts can swap in LockedTrie.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable

from event_search.core.trie import SearchResult


@runtime_checkable
class PrefixIndexProtocol(Protocol):
    """What EventSearchIndex needs from an index (Trie and LockedTrie both fit)."""

    max_results: int

    def insert(self, word: str, record: Any) -> None:
        ...

    def find_words_with_prefix(
        self, prefix: str, limit: Optional[int] = None
    ) -> List[SearchResult]:
        ...

    def clear(self) -> None:
        ...


@runtime_checkable
class EventSourceProtocol(Protocol):
    """
    Supplies the raw event list (dicts with id/name/location/description...).
    Implementations raise EventSourceError when the data cannot be read.
    """

    def load(self) -> List[dict]:
        ...
