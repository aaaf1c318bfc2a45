# event_search/tools/profile_search.py
"""
Small profiling harness for Trie.find_words_with_prefix.
Usage:
  python -m event_search.tools.profile_search --events 20000 --iters 2000
  python -m event_search.tools.profile_search --file data/sample_events.json

Builds an index from synthetic (or given) events, then prints
median/p90/max latency per query and the index size.
"""
import argparse
import random
import statistics
import time

from event_search.core.event_index import EventSearchIndex
from event_search.utils.event_store import JsonFileSource

WORDS = [
    "jazz", "rock", "festival", "night", "market", "marathon", "gala",
    "expo", "summit", "opera", "film", "food", "craft", "tech", "art",
]
CITIES = ["Budapest", "Vienna", "Berlin", "Prague", "Warsaw", "Zürich", "Lisbon"]


def synthetic_events(n, seed=7):
    rnd = random.Random(seed)
    out = []
    for i in range(n):
        name = " ".join(rnd.choice(WORDS).title() for _ in range(rnd.randint(1, 3)))
        out.append({
            "id": i,
            "name": f"{name} {i}",
            "location": rnd.choice(CITIES),
            "description": " ".join(rnd.choice(WORDS) for _ in range(8)),
        })
    return out


def benchmark(search, queries, iterations=500, limit=10):
    rnd = random.Random(1)
    times = []
    for _ in range(iterations):
        q = rnd.choice(queries)
        t0 = time.perf_counter()
        search.suggest(q, limit)
        times.append((time.perf_counter() - t0) * 1000.0)  # ms
    return times


def summarize(times):
    times_sorted = sorted(times)
    return {
        "count": len(times_sorted),
        "median_ms": statistics.median(times_sorted),
        "p90_ms": times_sorted[max(int(0.9 * len(times_sorted)) - 1, 0)],
        "max_ms": times_sorted[-1],
    }


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--events", type=int, default=10000, help="synthetic events to index")
    parser.add_argument("--file", type=str, default=None, help="index this JSON file instead")
    parser.add_argument("--iters", type=int, default=1000, help="measured queries")
    parser.add_argument("--limit", type=int, default=10, help="results per query")
    args = parser.parse_args(argv)

    events = JsonFileSource(args.file).load() if args.file else synthetic_events(args.events)
    search = EventSearchIndex()

    t0 = time.perf_counter()
    search.populate(events)
    build_ms = (time.perf_counter() - t0) * 1000.0
    print(f"Indexed {len(events)} events in {build_ms:.1f} ms "
          f"({search.index.node_count()} nodes, {search.index.word_count()} words)")

    queries = [w[:k] for w in WORDS + [c.lower() for c in CITIES] for k in (2, 3, 5)]
    s = summarize(benchmark(search, queries, args.iters, args.limit))
    print("Stats (ms): median=%.4f p90=%.4f max=%.4f over %d queries" % (
        s["median_ms"], s["p90_ms"], s["max_ms"], s["count"]))
    return s


if __name__ == "__main__":
    main()
