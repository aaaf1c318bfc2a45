# config_manager.py - JSON config for the search index and its event source

import json
import logging
import os

from event_search.core.trie import Trie

logger = logging.getLogger(__name__)

DEFAULTS = {
    "max_results": 10,
    "max_records_per_node": 5,
    "max_word_length": 50,
    "min_query_length": 2,
    "index_descriptions": True,
    "description_min_word_length": 3,
    "events_url": "",
    "events_cache": os.path.join("data", "events_cache.json"),
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _coerce(default, val):
    """Convert `val` to the type of `default` (bools need special handling)."""
    if isinstance(default, bool):
        if isinstance(val, bool):
            return val
        text = str(val).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"not a boolean: {val!r}")
    return type(default)(val)


class Config:
    def __init__(self, path="config.json", autosave=False):
        self.path = path
        self.data = dict(DEFAULTS)
        self._load()
        if autosave and not os.path.exists(self.path):
            self.save()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("config %s unreadable, using defaults: %s", self.path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("config %s is not an object, using defaults", self.path)
            return
        for key, val in loaded.items():
            if key not in DEFAULTS:
                logger.debug("ignoring unknown config key %r", key)
                continue
            try:
                self.data[key] = _coerce(DEFAULTS[key], val)
            except (TypeError, ValueError):
                logger.warning("bad value for %s: %r (keeping default)", key, val)

    def save(self):
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key):
        return self.data[key]

    def __getitem__(self, key):
        return self.data[key]

    def set(self, key, val):
        if key not in self.data:
            raise KeyError(f"No such option: {key}")
        self.data[key] = _coerce(DEFAULTS[key], val)
        self.save()

    def show(self, console=None):
        from rich.console import Console
        from rich.table import Table
        from rich import box

        table = Table(title="Config", box=box.SIMPLE)
        table.add_column("Option", style="cyan")
        table.add_column("Value")
        for k, v in self.data.items():
            table.add_row(k, str(v))
        (console or Console()).print(table)

    def build_index(self) -> Trie:
        """Fresh Trie sized by this config."""
        return Trie(
            max_results=self.data["max_results"],
            max_records_per_node=self.data["max_records_per_node"],
            max_word_length=self.data["max_word_length"],
        )
