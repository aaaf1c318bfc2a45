"""
cli.py - command line front end for the event search index
Features:
- One-shot search: load events, print matches for a prefix
- Interactive shell: type a prefix, see matches, with /stats /reload /clear /quit
- Query latency tracking
- Uses Rich for tables and formatting
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.prompt import Prompt
from rich import box

from event_search.core.event_index import EventSearchIndex
from event_search.core.trie import SearchResult
from event_search.utils.cache_utils import timed
from event_search.utils.config_manager import Config
from event_search.utils.event_store import source_from_config
from event_search.utils.logger_utils import Log
from event_search.utils.metrics_tracker import Metrics


def render_results(results: List[SearchResult], title: str = "Matches") -> Table:
    """Results as a Rich table, one row per (word, event)."""
    table = Table(title=title, box=box.SIMPLE, show_edge=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Word", style="bold")
    table.add_column("Name")
    table.add_column("Location", style="magenta")
    table.add_column("Id", justify="right", style="dim")

    for i, res in enumerate(results, 1):
        rec = res.value
        table.add_row(str(i), res.word, rec.name, rec.location, str(rec.id))
    return table


class SearchCLI:
    """Interactive search session over one EventSearchIndex."""

    def __init__(self, cfg: Config, source, console: Optional[Console] = None):
        self.cfg = cfg
        self.source = source
        self.console = console or Console()
        self.search = EventSearchIndex.from_config(cfg)
        self.metrics = Metrics()
        self.log = Log(echo=False)
        self.running = True

    def load(self, force: bool = False) -> bool:
        with Log.time_block("index build"):
            ok = self.search.load(self.source, force=force)
        if ok:
            self.log.info(f"indexed {self.search.event_count} events")
            self.console.print(
                f"[dim]Indexed {self.search.event_count} events "
                f"({self.search.index.node_count()} nodes).[/dim]"
            )
        else:
            self.log.error(f"load failed: {self.search.error}")
            self.console.print(f"[red]Could not load events:[/red] {self.search.error}")
        return ok

    def query(self, text: str, limit: Optional[int] = None) -> List[SearchResult]:
        results, elapsed = timed(self.search.suggest)(text, limit)
        self.metrics.record("query_time", elapsed)
        self.metrics.record("result_count", len(results))
        if not results:
            self.console.print("[dim](no matches)[/dim]")
        else:
            self.console.print(render_results(results))
        return results

    def run(self):
        self.console.rule("[bold magenta]Event Search[/bold magenta]")
        self.console.print("Type a name or place. Commands: /stats /reload /clear /quit\n")
        while self.running:
            try:
                text = Prompt.ask("[green]Search[/green]", default="", console=self.console)
            except (EOFError, KeyboardInterrupt):
                break
            if not text:
                continue
            if text.startswith("/"):
                self.handle_command(text.strip())
                continue
            self.query(text)
        self.console.rule("[red]Bye[/red]")

    # COMMAND HANDLING -----------------------------------------------------------
    def handle_command(self, cmd: str):
        if cmd == "/quit":
            self.running = False
            return
        if cmd == "/stats":
            self.console.print(self._stats_table())
            return
        if cmd == "/reload":
            self.load(force=True)
            return
        if cmd == "/clear":
            self.search.index.clear()
            self.search.is_initialized = False
            self.search.event_count = 0
            self.console.print("[yellow]Index cleared.[/yellow]")
            return
        self.log.warning(f"unknown command {cmd}")
        self.console.print(f"[red]Unknown command:[/red] {cmd}")

    def _stats_table(self) -> Table:
        t = Table(title="Index Stats", box=box.MINIMAL)
        t.add_column("Metric", style="cyan")
        t.add_column("Value")
        t.add_row("Events", str(self.search.event_count))
        t.add_row("Words", str(self.search.index.word_count()))
        t.add_row("Nodes", str(self.search.index.node_count()))
        t.add_row("Queries", str(self.metrics.count("query_time")))
        t.add_row("Avg latency", f"{self.metrics.avg('query_time') * 1000:.3f} ms")
        return t


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="event-search", description="Prefix search over events")
    parser.add_argument("--config", default="config.json", help="path to JSON config")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="run one query and exit")
    p_search.add_argument("events", nargs="?", help="events JSON file (default: configured source)")
    p_search.add_argument("query", help="prefix to look up")
    p_search.add_argument("--limit", type=int, default=None, help="max results")

    p_shell = sub.add_parser("shell", help="interactive search")
    p_shell.add_argument("events", nargs="?", help="events JSON file (default: configured source)")
    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = Config(args.config)
    cli = SearchCLI(cfg, source_from_config(cfg, args.events), console=console)
    if not cli.load():
        return 1

    if args.command == "search":
        cli.query(args.query, args.limit)
        return 0

    cli.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
