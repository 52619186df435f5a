"""Textual browser — pick a managed repository interactively."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header, Input, Label

from repohome.errors import RepohomeError
from repohome.layout import compose
from repohome.listing import RepoRow, collect
from repohome.theme import TAGLINE


class RepoTable(DataTable):
    """Managed repositories, one row each."""

    def update_rows(self, rows: list[RepoRow]) -> None:
        self.clear(columns=True)
        self.add_columns("Path", "Type", "Hostname")
        for i, r in enumerate(rows):
            self.add_row(r.path, r.kind, r.hostname, key=str(i))


class BrowseApp(App[Optional[Path]]):
    """repohome — browse managed repositories; Enter picks one."""

    CSS = """
    #filter {
        dock: top;
        margin: 0 1;
    }

    #status {
        dock: bottom;
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    #repos {
        height: 1fr;
        border: solid $secondary;
    }
    """

    TITLE = "repohome"
    SUB_TITLE = TAGLINE

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "rescan", "Rescan"),
        Binding("slash", "focus_filter", "Filter"),
        Binding("escape", "focus_table", "Table", show=False),
    ]

    def __init__(self, root: Path) -> None:
        super().__init__()
        self.root = root
        self.rows: list[RepoRow] = []
        self.shown_rows: list[RepoRow] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="filter by path, type or hostname", id="filter")
        yield RepoTable(id="repos", cursor_type="row")
        yield Label("  Scanning repos...", id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(RepoTable).focus()
        self.run_scan()

    @work(thread=True, exclusive=True)
    def run_scan(self) -> None:
        """Scan the layout in a background thread."""
        try:
            rows = collect(self.root)
        except RepohomeError as exc:
            self.call_from_thread(self._set_status, f"  {exc}")
            return
        self.call_from_thread(self._show_rows, rows)

    def _set_status(self, text: str) -> None:
        self.query_one("#status", Label).update(text)

    def _show_rows(self, rows: list[RepoRow]) -> None:
        self.rows = rows
        self._apply_filter(self.query_one("#filter", Input).value)

    def _apply_filter(self, needle: str) -> None:
        self.shown_rows = [
            r for r in self.rows
            if not needle or needle in r.path or needle in r.kind or needle in r.hostname
        ]
        self.query_one(RepoTable).update_rows(self.shown_rows)
        if not self.rows:
            self._set_status(f"  No repositories under {self.root}")
        else:
            self._set_status(f"  {len(self.shown_rows)}/{len(self.rows)} repositories")

    @on(Input.Changed, "#filter")
    def filter_changed(self, event: Input.Changed) -> None:
        self._apply_filter(event.value)

    @on(Input.Submitted, "#filter")
    def filter_submitted(self) -> None:
        self.action_focus_table()

    @on(DataTable.RowSelected, "#repos")
    def row_selected(self, event: DataTable.RowSelected) -> None:
        row = self.shown_rows[int(event.row_key.value)]
        self.exit(compose(self.root, row.kind, row.hostname, "", row.path))

    def action_rescan(self) -> None:
        self._set_status("  Scanning repos...")
        self.run_scan()

    def action_focus_filter(self) -> None:
        self.query_one("#filter", Input).focus()

    def action_focus_table(self) -> None:
        self.query_one(RepoTable).focus()


def run_tui(root: Path) -> Optional[Path]:
    """Launch the browser; returns the chosen repository path, if any."""
    app = BrowseApp(root)
    return app.run()
