"""
event_search.core

The search engine behind the event search box.
Contains:
 - the prefix trie and its record/result types (Trie, Record, SearchResult)
 - a lock-guarded wrapper for hosts that share one index across threads (LockedTrie)
 - the event-level facade used by the CLI and TUI (EventSearchIndex)
"""

from .trie import Trie, PrefixIndex, TrieNode, Record, SearchResult
from .locked_index import LockedTrie
from .event_index import EventSearchIndex

__all__ = [
    "Trie",
    "PrefixIndex",
    "TrieNode",
    "Record",
    "SearchResult",
    "LockedTrie",
    "EventSearchIndex",
]
