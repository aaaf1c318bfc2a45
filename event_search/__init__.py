"""Event search: prefix index over event names, locations and descriptions."""

from event_search.core import EventSearchIndex, LockedTrie, Record, SearchResult, Trie

__all__ = ["EventSearchIndex", "LockedTrie", "Record", "SearchResult", "Trie"]

__version__ = "0.1.0"
