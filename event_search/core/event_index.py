# event_index.py
"""
EventSearchIndex - what the UI layer talks to.

Purpose:
 - own one prefix index (injected, fresh Trie by default)
 - (re)build it from a list of events: name, location and longer
   description words all become searchable
 - answer suggest(query) per keystroke, ignoring queries too short to be useful
 - keep load status (is_initialized / is_loading / error) for the caller to show
"""

from __future__ import annotations
import logging
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from event_search.core.protocols import EventSourceProtocol, PrefixIndexProtocol
from event_search.core.trie import SearchResult, Trie
from event_search.utils.event_store import EventSourceError

logger = logging.getLogger(__name__)


def _get(event: Any, key: str) -> Any:
    if isinstance(event, dict):
        return event.get(key)
    return getattr(event, key, None)


class EventSearchIndex:
    def __init__(
        self,
        index: Optional[PrefixIndexProtocol] = None,
        *,
        min_query_length: int = 2,
        index_descriptions: bool = True,
        description_min_word_length: int = 3,
    ):
        self.index = index if index is not None else Trie()
        self.min_query_length = min_query_length
        self.index_descriptions = index_descriptions
        self.description_min_word_length = description_min_word_length

        self.is_initialized = False
        self.is_loading = False
        self.error: Optional[str] = None
        self.event_count = 0

    @classmethod
    def from_config(cls, cfg, index: Optional[PrefixIndexProtocol] = None):
        return cls(
            index if index is not None else cfg.build_index(),
            min_query_length=cfg.get("min_query_length"),
            index_descriptions=cfg.get("index_descriptions"),
            description_min_word_length=cfg.get("description_min_word_length"),
        )

    # building ----------------------------------------------------------
    def populate(self, events: Iterable[Any]) -> int:
        """
        Clear and re-index. Returns how many events were indexed.
        Indexes exposing rebuild() (LockedTrie) swap contents in one step.
        """
        pairs: List[Tuple[str, Any]] = []
        count = 0
        for event in events or ():
            if event is None or isinstance(event, (str, bytes, int, float)):
                continue
            pairs.extend(self._terms(event))
            count += 1

        rebuild = getattr(self.index, "rebuild", None)
        if callable(rebuild):
            rebuild(pairs)
        else:
            self.index.clear()
            for word, event in pairs:
                self.index.insert(word, event)

        self.event_count = count
        logger.debug("indexed %d events (%d terms)", count, len(pairs))
        return count

    refresh = populate

    def _terms(self, event: Any) -> Iterator[Tuple[str, Any]]:
        name = _get(event, "name")
        if isinstance(name, str):
            yield name, event

        location = _get(event, "location")
        if location and isinstance(location, str):
            yield location, event

        if not self.index_descriptions:
            return
        description = _get(event, "description")
        if description and isinstance(description, str):
            for word in description.split():
                if len(word) > self.description_min_word_length:
                    yield word, event

    def load(self, source: EventSourceProtocol, force: bool = False) -> bool:
        """
        Pull events from `source` and index them.
        Failures end up in self.error (and the log), never as an exception.
        """
        if self.is_initialized and not force:
            return True

        self.is_loading = True
        self.error = None
        try:
            events = source.load()
            self.populate(events)
            self.is_initialized = True
        except EventSourceError as e:
            self.error = str(e) or "Unknown error initializing search"
            logger.error("Error initializing search index: %s", e)
        except Exception as e:
            self.error = str(e) or "Unknown error initializing search"
            logger.exception("Error initializing search index")
        finally:
            self.is_loading = False
        return self.is_initialized

    # querying ----------------------------------------------------------
    def suggest(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        """Whitespace only counts towards the length check; the raw query is searched."""
        if not query or not isinstance(query, str):
            return []
        if len(query.strip()) < self.min_query_length:
            return []
        return self.index.find_words_with_prefix(query, limit)
