# locked_index.py - one lock around a shared Trie

from __future__ import annotations
import threading
from typing import Any, Iterable, List, Optional, Tuple

from event_search.core.trie import RecordId, SearchResult, Trie


class LockedTrie:
    """
    Thread-safe facade over Trie.
    Every call holds a single re-entrant lock for its whole duration, so a
    query never walks children that a concurrent insert is mutating.
    """

    def __init__(self, trie: Optional[Trie] = None) -> None:
        self._trie = trie if trie is not None else Trie()
        self._lock = threading.RLock()

    @property
    def max_results(self) -> int:
        return self._trie.max_results

    def insert(self, word: str, record: Any) -> None:
        with self._lock:
            self._trie.insert(word, record)

    def find_words_with_prefix(
        self, prefix: str, limit: Optional[int] = None
    ) -> List[SearchResult]:
        with self._lock:
            return self._trie.find_words_with_prefix(prefix, limit)

    def remove(self, word: str, record_id: RecordId) -> bool:
        with self._lock:
            return self._trie.remove(word, record_id)

    def clear(self) -> None:
        with self._lock:
            self._trie.clear()

    def rebuild(self, pairs: Iterable[Tuple[str, Any]]) -> None:
        """clear() plus every insert under one acquisition; readers see old or new, never half."""
        with self._lock:
            self._trie.clear()
            for word, record in pairs:
                self._trie.insert(word, record)

    def node_count(self) -> int:
        with self._lock:
            return self._trie.node_count()

    def word_count(self) -> int:
        with self._lock:
            return self._trie.word_count()

    def is_empty(self) -> bool:
        with self._lock:
            return self._trie.is_empty()

    def __len__(self) -> int:
        return self.word_count()

    def __contains__(self, word: object) -> bool:
        with self._lock:
            return word in self._trie
