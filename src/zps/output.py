"""Console presentation for zps."""

import sys
from dataclasses import dataclass
from typing import TextIO

from rich.console import Console
from rich.style import Style as RichStyle
from rich.text import Text

from zps.models import ProcessRecord, RunStats, Settings


@dataclass(slots=True, frozen=True)
class Style:
    """Color and weight of a line of output."""

    color: str | None = None
    bold: bool = False

    def to_rich(self) -> RichStyle:
        """Convert to a rich Style."""
        return RichStyle(color=self.color, bold=self.bold)


PLAIN = Style()
HEADER = Style(bold=True)
ZOMBIE = Style("red", bold=True)
SUCCESS = Style("green")
WARNING = Style("yellow")
ERROR = Style("red")

ROW_FORMAT = "{index:>5} {pid:>8} {ppid:>8} {state:>5}  {name:<16} {cmd}"


def format_row(record: ProcessRecord, index: int | None = None) -> str:
    """Format one process as a table row. `index` is the 1-based prompt index."""
    return ROW_FORMAT.format(
        index=f"[{index}]" if index is not None else "",
        pid=record.pid,
        ppid=record.ppid,
        state=record.state,
        name=record.name,
        cmd=record.cmd.rstrip(),
    ).rstrip()


def format_header() -> str:
    """Format the table header."""
    return ROW_FORMAT.format(
        index="", pid="PID", ppid="PPID", state="STATE", name="NAME", cmd="COMMAND"
    )


class Printer:
    """
    Writes styled lines to the terminal.

    Regular output and per-entry diagnostics are suppressed in quiet mode;
    fatal errors are always shown.
    """

    def __init__(
        self,
        color: bool = True,
        quiet: bool = False,
        file: TextIO | None = None,
        err_file: TextIO | None = None,
    ) -> None:
        """
        Initialize the Printer.

        Args:
            color: Allow colored output (rich still disables it on non-terminals).
            quiet: Suppress everything except fatal errors.
            file: Stream for regular output. Default stdout.
            err_file: Stream for diagnostics. Default stderr.
        """
        self._color = color
        options = {"no_color": not color, "highlight": False, "soft_wrap": True}
        self._out = Console(file=file or sys.stdout, quiet=quiet, **options)
        self._err = Console(file=err_file or sys.stderr, quiet=quiet, **options)
        self._fatal = Console(file=err_file or sys.stderr, **options)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Printer":
        """Create a Printer configured by run settings."""
        return cls(color=settings.color, quiet=settings.quiet)

    @classmethod
    def silent(cls) -> "Printer":
        """Create a Printer that writes nothing but fatal errors."""
        return cls(quiet=True)

    def _text(self, message: str, style: Style) -> Text:
        return Text(message, style=style.to_rich() if self._color else "")

    def echo(self, message: str, style: Style = PLAIN) -> None:
        """Write a line of regular output."""
        self._out.print(self._text(message, style))

    def prompt(self, message: str) -> None:
        """Write a prompt without a trailing newline."""
        self._out.print(self._text(message, HEADER), end="")

    def warn(self, message: str) -> None:
        """Write a per-entry diagnostic line."""
        self._err.print(self._text(message, WARNING))

    def fatal(self, message: str) -> None:
        """Write a fatal error, even in quiet mode."""
        self._fatal.print(self._text(f"Error: {message}", ERROR))

    def summary(self, stats: RunStats, settings: Settings) -> None:
        """Write the end-of-run counters."""
        style = ZOMBIE if stats.defunct_count else SUCCESS
        self.echo(f"Defunct process(es) found: {stats.defunct_count}", style)
        if settings.reap or settings.prompt:
            self.echo(f"Processes signaled: {stats.signaled_count}", HEADER)
