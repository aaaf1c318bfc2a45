# logger_utils.py - log lines, metrics and timed blocks for the search index

import os
import time
from datetime import datetime
from typing import Optional

# Directory where log files go; created on first write
LOG_DIR = "logs"

# Default log file, can be overriden per instance or via EVENT_SEARCH_LOG
DEFAULT_LOG_PATH = os.environ.get(
    "EVENT_SEARCH_LOG", os.path.join(LOG_DIR, "event_search.log")
)


def _append(path: str, line: str) -> None:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")


class Log:
    """Lightweight logger writing timestamped lines to a file and the console."""

    COLORS = {
        "DEBUG": "\033[90m",   # gray
        "INFO": "\033[94m",    # blue
        "WARNING": "\033[93m", # yellow
        "ERROR": "\033[91m",   # red
        "RESET": "\033[0m",
    }

    def __init__(
        self, path: Optional[str] = None, use_color: bool = True, echo: bool = True
    ):
        self.path = path or DEFAULT_LOG_PATH
        self.use_color = use_color
        self.echo = echo

    def write(self, level: str, msg: str):
        """
        Append one entry to the log file.
        Format: [YYYY-MM-DD HH:MM:SS] LEVEL   | message
        """
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{ts}] {level:<7} | {msg}"
        _append(self.path, line)

        if not self.echo:
            return
        if self.use_color and level in self.COLORS:
            print(f"{self.COLORS[level]}{line}{self.COLORS['RESET']}")
        else:
            print(line)

    def info(self, msg: str):
        self.write("INFO", msg)

    def warning(self, msg: str):
        self.write("WARNING", msg)

    def error(self, msg: str):
        self.write("ERROR", msg)

    @staticmethod
    def metric(tag, value, unit="", path: Optional[str] = None):
        """
        Record a metric (index build time, node counts...).
        Example: [12:45:02] index build: 0.012s
        """
        ts = datetime.now().strftime("%H:%M:%S")
        line = f"[{ts}] {tag}: {value}{unit}"
        print(line)
        _append(path or DEFAULT_LOG_PATH, line)

    @staticmethod
    def time_block(label):
        """
        Time a block of code and log the duration as a metric:
            with Log.time_block("index build"):
                index.populate(events)
        """
        return _Timer(label)


class _Timer:
    """Context manager behind Log.time_block."""

    def __init__(self, label):
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        Log.metric(f"{self.label} done", round(self.elapsed, 3), "s")
