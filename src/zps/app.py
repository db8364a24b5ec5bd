"""zps - Textual selector for reaping defunct processes."""

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Header

from zps.reaper import ReapOutcome, Reaper
from zps.registry import DefunctRegistry


class DefunctTable(Container):
    """Container for the table of defunct processes."""

    DEFAULT_CSS = """
    DefunctTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, registry: DefunctRegistry, *args, **kwargs) -> None:
        """Initialize DefunctTable."""
        super().__init__(*args, **kwargs)
        self._defunct_registry = registry

    def compose(self) -> ComposeResult:
        """Compose the defunct table."""
        yield DataTable(id="defunct-table")

    def on_mount(self) -> None:
        """Fill the data table from the registry when mounted."""
        table = self.query_one("#defunct-table", DataTable)
        table.cursor_type = "row"

        table.add_column("#", key="index", width=4)
        table.add_column("PID", key="pid", width=8)
        table.add_column("PPID", key="ppid", width=8)
        table.add_column("S", key="state", width=3)
        table.add_column("NAME", key="name", width=16)
        table.add_column("RESULT", key="result", width=12)
        table.add_column("COMMAND", key="command")

        for index, record in enumerate(self._defunct_registry):
            table.add_row(
                str(index + 1),
                str(record.pid),
                str(record.ppid),
                record.state,
                record.name,
                "-",
                record.cmd.rstrip()[:50],
                key=str(index),
            )

    @property
    def selected_index(self) -> int | None:
        """Get the registry index of the highlighted row."""
        table = self.query_one("#defunct-table", DataTable)
        if table.row_count == 0:
            return None
        return table.cursor_row

    def show_outcome(self, index: int, outcome: ReapOutcome) -> None:
        """Write the outcome of a reap attempt into the row."""
        table = self.query_one("#defunct-table", DataTable)
        result = f"sent {outcome.signal.name}" if outcome.signaled else "failed"
        table.update_cell(str(index), "result", result)


class ZpsApp(App):
    """Interactive zombie reaper."""

    TITLE = "zps"
    SUB_TITLE = "Defunct Process Reaper"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "reap", "Reap selected"),
        ("a", "reap_all", "Reap all"),
    ]

    def __init__(self, registry: DefunctRegistry, reaper: Reaper) -> None:
        """
        Initialize the ZpsApp.

        Args:
            registry: Zombies found by the completed scan.
            reaper: Reaper to signal with. It should not write to the console.
        """
        super().__init__()
        self._defunct_registry = registry
        self._reaper = reaper

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Header()
        yield DefunctTable(self._defunct_registry)
        yield Footer()

    def _reap_index(self, index: int) -> ReapOutcome | None:
        record = self._defunct_registry.at(index)
        if record is None:
            return None
        outcome = self._reaper.reap(record)
        self.query_one(DefunctTable).show_outcome(index, outcome)
        return outcome

    def action_reap(self) -> None:
        """Reap the highlighted zombie."""
        index = self.query_one(DefunctTable).selected_index
        if index is None:
            return
        outcome = self._reap_index(index)
        if outcome is not None:
            severity = "information" if outcome.signaled else "error"
            self.notify(outcome.message, severity=severity)

    def action_reap_all(self) -> None:
        """Reap every listed zombie."""
        outcomes = [self._reap_index(index) for index in range(self._defunct_registry.size())]
        signaled = sum(1 for outcome in outcomes if outcome and outcome.signaled)
        self.notify(f"Signaled {signaled} of {len(outcomes)} parent(s)")
