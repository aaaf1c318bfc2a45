# tui_app.py — Event Search TUI
# -------------------------------------------------------
# Search-as-you-type over the event index:
#  - results table refreshed on every keystroke
#  - latency + index size in the status line
#  - Enter on a row shows the chosen event id
# -------------------------------------------------------

from __future__ import annotations
import sys
import time

from textual.app import App, ComposeResult
from textual.widgets import Header, Footer, Input, Static, DataTable

from event_search.core.event_index import EventSearchIndex
from event_search.utils.config_manager import Config
from event_search.utils.event_store import source_from_config


class StatusLine(Static):
    """Bottom line: index size, last query latency, load errors."""

    def show(self, search: EventSearchIndex, latency_ms: float = 0.0, hits: int = 0):
        if search.error:
            self.update(f"[red]{search.error}[/red]")
            return
        self.update(
            f"[dim]{search.event_count} events • {hits} matches • {latency_ms:.2f} ms[/dim]"
        )


class SearchApp(App):
    CSS = """
    Input { dock: top; }
    StatusLine { dock: bottom; height: 1; }
    """
    BINDINGS = [("ctrl+q", "quit", "Quit"), ("ctrl+r", "reload", "Reload")]

    def __init__(self, search: EventSearchIndex, source=None, limit=None):
        super().__init__()
        self.search = search
        self.source = source
        self.limit = limit

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Input(placeholder="Search events by name or place…", id="query")
        yield DataTable(id="results", cursor_type="row")
        yield StatusLine(id="status")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#results", DataTable)
        table.add_columns("Word", "Name", "Location", "Id")
        if self.source is not None:
            self.search.load(self.source)
        self.query_one(StatusLine).show(self.search)
        self.query_one("#query", Input).focus()

    def on_input_changed(self, message: Input.Changed) -> None:
        t0 = time.perf_counter()
        results = self.search.suggest(message.value, self.limit)
        latency = (time.perf_counter() - t0) * 1000.0

        table = self.query_one("#results", DataTable)
        table.clear()
        for res in results:
            rec = res.value
            table.add_row(res.word, rec.name, rec.location, str(rec.id), key=str(rec.id))
        self.query_one(StatusLine).show(self.search, latency, len(results))

    def on_data_table_row_selected(self, message: DataTable.RowSelected) -> None:
        self.notify(f"Selected event {message.row_key.value}")

    def action_reload(self) -> None:
        if self.source is not None:
            self.search.load(self.source, force=True)
        self.query_one(StatusLine).show(self.search)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    cfg = Config()
    source = source_from_config(cfg, argv[0] if argv else None)
    SearchApp(EventSearchIndex.from_config(cfg), source).run()


if __name__ == "__main__":
    main()
