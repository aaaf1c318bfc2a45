# trie.py
# Character trie for search-as-you-type over event names and locations.
# Each terminal node carries a small, capped list of display records.
# Lookups walk breadth-first so the shortest completions come back first.

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Optional, Tuple, Union

RecordId = Union[str, int]

DEFAULT_MAX_RESULTS = 10
DEFAULT_MAX_RECORDS_PER_NODE = 5
DEFAULT_MAX_WORD_LENGTH = 50


def _field(source: Any, key: str) -> Any:
    """Read `key` from a mapping or an attribute-style object."""
    if isinstance(source, dict):
        return source.get(key)
    return getattr(source, key, None)


@dataclass(frozen=True)
class Record:
    """
    Display-only projection of a source entity.
    Anything besides id/name/location is dropped on purpose.
    """

    id: RecordId
    name: str = ""
    location: str = ""

    @classmethod
    def from_source(cls, source: Any) -> Optional["Record"]:
        """
        Project an event (dict or object). Returns None when there is no usable id.
        Ids must be a non-empty str or an int; 0 counts as a real id.
        """
        if source is None:
            return None
        if isinstance(source, Record):
            return source
        rid = _field(source, "id")
        if isinstance(rid, bool) or not isinstance(rid, (str, int)) or rid == "":
            return None
        return cls(
            id=rid,
            name=_field(source, "name") or "",
            location=_field(source, "location") or "",
        )

    def as_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "location": self.location}


@dataclass(frozen=True)
class SearchResult:
    word: str
    value: Record

    def as_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "value": self.value.as_dict()}


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode (insertion ordered)
    is_word: some inserted word ends exactly here
    records: records attached to that word, oldest first
    """

    __slots__ = ("children", "is_word", "records")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = {}
        self.is_word = False
        self.records: List[Record] = []

    def has_id(self, rid: RecordId) -> bool:
        return any(r.id == rid for r in self.records)


class Trie:
    """
    Prefix index mapping lowercase words to a bounded set of records.

    Not synchronised: share one instance across threads only through
    LockedTrie (see locked_index.py).
    """

    def __init__(
        self,
        max_results: int = DEFAULT_MAX_RESULTS,
        max_records_per_node: int = DEFAULT_MAX_RECORDS_PER_NODE,
        max_word_length: int = DEFAULT_MAX_WORD_LENGTH,
    ) -> None:
        self.max_results = max_results
        self.max_records_per_node = max_records_per_node
        self.max_word_length = max_word_length
        self._root = TrieNode()

    # insertion -----------------------------------------------------
    def insert(self, word: str, record: Any) -> None:
        """
        Index `record` under `word`.
        Empty words and records without an id are ignored, not rejected.
        Once a node holds max_records_per_node records, newcomers are dropped.
        """
        if not word or not isinstance(word, str):
            return
        rec = Record.from_source(record)
        if rec is None:
            return

        node = self._root
        for ch in word.lower()[: self.max_word_length]:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = node.children[ch] = TrieNode()
            node = nxt
        node.is_word = True

        if not node.has_id(rec.id) and len(node.records) < self.max_records_per_node:
            node.records.append(rec)

    # search/traversal ---------------------------------------------------------
    def find_words_with_prefix(
        self, prefix: str, limit: Optional[int] = None
    ) -> List[SearchResult]:
        """
        Return up to `limit` (word, record) pairs whose word starts with `prefix`.
        Order is breadth-first discovery order, then record insertion order.
        A record id shows up at most once even if it is reachable via several words.
        """
        if limit is None:
            limit = self.max_results
        if not prefix or not isinstance(prefix, str) or limit <= 0:
            return []

        lowered = prefix.lower()
        node = self._walk(lowered)
        if node is None:
            return []

        out: List[SearchResult] = []
        self._collect(node, lowered, out, limit)
        return out

    def _walk(self, word: str) -> Optional[TrieNode]:
        node = self._root
        for ch in word:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    # internal BFS collector ---------------------------------------------------------
    def _collect(
        self, start: TrieNode, prefix: str, results: List[SearchResult], limit: int
    ) -> None:
        seen = set()
        queue: Deque[Tuple[TrieNode, str]] = deque([(start, prefix)])

        while queue and len(results) < limit:
            node, word = queue.popleft()

            if node.is_word:
                for rec in node.records:
                    if rec.id in seen:
                        continue
                    seen.add(rec.id)
                    results.append(SearchResult(word, rec))
                    if len(results) >= limit:
                        return

            for ch, child in node.children.items():
                queue.append((child, word + ch))

    # removal ---------------------------------------------------------------
    def remove(self, word: str, record_id: RecordId) -> bool:
        """
        Drop one record from the node `word` ends at.
        A node left without records stops being a word, and branches that no
        longer lead anywhere are pruned from the bottom up.
        """
        if not word or not isinstance(word, str):
            return False

        path: List[Tuple[TrieNode, str]] = []
        node = self._root
        for ch in word.lower()[: self.max_word_length]:
            child = node.children.get(ch)
            if child is None:
                return False
            path.append((node, ch))
            node = child

        if not node.is_word or not node.has_id(record_id):
            return False

        node.records = [r for r in node.records if r.id != record_id]
        if node.records:
            return True

        node.is_word = False
        for parent, ch in reversed(path):
            child = parent.children[ch]
            if child.is_word or child.children:
                break
            del parent.children[ch]
        return True

    def clear(self) -> None:
        """Forget everything (used before a full re-index)."""
        self._root = TrieNode()

    # convenience/debugging -----------------------------------------------------
    def node_count(self) -> int:
        """Number of nodes, root included. O(N) walk."""
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count

    def word_count(self) -> int:
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            if node.is_word:
                count += 1
            stack.extend(node.children.values())
        return count

    def is_empty(self) -> bool:
        return not self._root.children

    def __len__(self) -> int:
        return self.word_count()

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or not word:
            return False
        node = self._walk(word.lower()[: self.max_word_length])
        return node is not None and node.is_word


PrefixIndex = Trie
