# event_store.py - where the searchable events come from

# Three sources, all exposing load() -> list[dict]:
# - JsonFileSource: a JSON file holding an array of events (or {"events": [...]})
# - HttpEventSource: GET an events endpoint with requests
# - CachedEventSource: read a local JSON cache first, fall back to another source
#   and write what it got into the cache

import json
import logging
import os
from typing import Any, List, Optional

import requests

logger = logging.getLogger(__name__)


class EventSourceError(Exception):
    """Events could not be read (missing file, bad JSON, HTTP failure...)."""


def _as_event_list(data: Any, origin: str) -> List[dict]:
    if isinstance(data, dict) and "events" in data:
        data = data["events"]
    if not isinstance(data, list):
        raise EventSourceError(f"{origin}: expected a list of events")
    return [e for e in data if isinstance(e, dict)]


class JsonFileSource:
    def __init__(self, path: str):
        self.path = path

    def load(self) -> List[dict]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise EventSourceError(f"cannot read events from {self.path}: {e}") from e
        events = _as_event_list(data, self.path)
        logger.info("loaded %d events from %s", len(events), self.path)
        return events


class HttpEventSource:
    """Fetch events from a JSON endpoint (e.g. /api/events)."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def load(self) -> List[dict]:
        try:
            resp = self.session.get(
                self.url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EventSourceError(f"Failed to fetch events: {e}") from e
        if not resp.ok:
            raise EventSourceError(
                f"Failed to fetch events: HTTP {resp.status_code} from {self.url}"
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise EventSourceError(f"Failed to fetch events: bad JSON ({e})") from e
        events = _as_event_list(data, self.url)
        logger.info("fetched %d events from %s", len(events), self.url)
        return events


class CachedEventSource:
    """
    Cache in front of another source.
    A readable cache file wins; otherwise the primary source is asked and its
    result written back. A failed cache write is logged and otherwise ignored.
    """

    def __init__(self, primary, cache_path: str):
        self.primary = primary
        self.cache_path = cache_path

    def load(self) -> List[dict]:
        cached = self._read_cache()
        if cached is not None:
            return cached
        events = self.primary.load()
        self._write_cache(events)
        return events

    def invalidate(self) -> None:
        if os.path.exists(self.cache_path):
            os.remove(self.cache_path)

    def _read_cache(self) -> Optional[List[dict]]:
        if not os.path.exists(self.cache_path):
            return None
        try:
            with open(self.cache_path, "r", encoding="utf-8") as f:
                events = _as_event_list(json.load(f), self.cache_path)
        except (OSError, ValueError, EventSourceError) as e:
            logger.warning("ignoring unreadable event cache %s: %s", self.cache_path, e)
            return None
        logger.debug("event cache hit (%d events)", len(events))
        return events

    def _write_cache(self, events: List[dict]) -> None:
        try:
            folder = os.path.dirname(self.cache_path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(self.cache_path, "w", encoding="utf-8") as f:
                json.dump(events, f, indent=2, default=str)
        except OSError as e:
            logger.warning("could not write event cache %s: %s", self.cache_path, e)


def source_from_config(cfg, path: Optional[str] = None):
    """
    Pick a source: an explicit file path wins, then events_url (cached),
    then the cache file on its own.
    """
    if path:
        return JsonFileSource(path)
    url = cfg.get("events_url")
    if url:
        return CachedEventSource(HttpEventSource(url), cfg.get("events_cache"))
    return JsonFileSource(cfg.get("events_cache"))
