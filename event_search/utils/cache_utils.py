# cache_utils.py - timing helper for query latency

from functools import wraps
import time
from typing import Callable


def timed(func: Callable) -> Callable:
    """Decorator returns tuple: (result, elapsed_seconds)"""
    @wraps(func)
    def _wrap(*a, **kw):
        t0 = time.perf_counter()
        res = func(*a, **kw)
        return res, (time.perf_counter() - t0)
    return _wrap
