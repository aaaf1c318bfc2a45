# metrics_tracker.py - running sum/count per metric (query latency, result counts)

import json
import logging
import os
from collections import defaultdict

logger = logging.getLogger(__name__)


class Metrics:
    """In-memory unless a path is given, in which case every record() is persisted."""

    def __init__(self, path=None):
        self.path = path
        self.m = defaultdict(float)
        self.n = defaultdict(int)
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                d = json.load(f)
            for k, v in d.items():
                self.m[k] = float(v["sum"])
                self.n[k] = int(v["count"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("metrics file %s unreadable: %s", self.path, e)

    def save(self):
        if not self.path:
            return
        d = {k: {"sum": self.m[k], "count": self.n[k]} for k in self.m}
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(d, f, indent=2)

    def record(self, key, val):
        self.m[key] += val
        self.n[key] += 1
        self.save()

    def count(self, key):
        return self.n.get(key, 0)

    def avg(self, key):
        if self.n.get(key, 0) == 0:
            return 0.0
        return self.m[key] / self.n[key]

    def summary(self):
        return {k: (self.n[k], self.avg(k)) for k in sorted(self.m)}
