"""Reaper: signals the parents of defunct processes."""

import logging
import signal
from dataclasses import dataclass
from signal import Signals

import psutil

from zps.models import INIT_PID, KTHREADD_PID, ProcessRecord, RunStats, Settings
from zps.output import ERROR, SUCCESS, WARNING, Printer
from zps.registry import DefunctRegistry

logger = logging.getLogger(__name__)

PROTECTED_PIDS = frozenset({INIT_PID, KTHREADD_PID})


def parse_signal(text: str) -> signal.Signals:
    """
    Resolve a signal given by name or number.

    Accepts 'TERM', 'SIGTERM', 'term' or '15'.

    Raises:
        ValueError: If the text names no signal of this platform.
    """
    value = text.strip()
    if value.isascii() and value.isdigit():
        return signal.Signals(int(value))
    name = value.upper()
    if not name.startswith("SIG"):
        name = "SIG" + name
    try:
        return signal.Signals[name]
    except KeyError:
        raise ValueError(f"unknown signal {text!r}") from None


def signal_names() -> list[str]:
    """Get 'number:NAME' entries for every signal, sorted by number."""
    return [f"{sig.value:>2}:{sig.name}" for sig in sorted(signal.Signals, key=int)]


@dataclass(slots=True, frozen=True)
class ReapOutcome:
    """Result of one attempt to signal a zombie's parent."""

    record: ProcessRecord
    signal: Signals
    signaled: bool
    message: str


class Reaper:
    """
    Sends the configured signal to the parent of a zombie process.

    Failures (target gone, permission denied, protected target) are reported
    per entry; nothing is retried and no exception escapes.
    """

    def __init__(self, settings: Settings, stats: RunStats, printer: Printer) -> None:
        self._settings = settings
        self._stats = stats
        self._printer = printer

    def reap(self, record: ProcessRecord) -> ReapOutcome:
        """Signal the parent of `record` and report the outcome."""
        sig = self._settings.signal
        ppid = record.ppid

        if ppid <= 0 or ppid in PROTECTED_PIDS:
            outcome = ReapOutcome(
                record, sig, False, f"Refusing to send {sig.name} to protected PID {ppid}"
            )
            self._printer.echo(outcome.message, WARNING)
            return outcome

        try:
            psutil.Process(ppid).send_signal(sig)
        except psutil.NoSuchProcess:
            outcome = ReapOutcome(
                record, sig, False, f"Failed to send {sig.name} to {ppid}: no such process"
            )
        except psutil.AccessDenied:
            outcome = ReapOutcome(
                record, sig, False, f"Failed to send {sig.name} to {ppid}: permission denied"
            )
        else:
            self._stats.signaled_count += 1
            outcome = ReapOutcome(
                record, sig, True, f"Sent {sig.name} to {ppid} (parent of {record.pid})"
            )
            logger.debug("Sent %s to %d for zombie %d", sig.name, ppid, record.pid)
            if self._settings.verbose:
                self._printer.echo(outcome.message, SUCCESS)
            return outcome

        logger.debug(outcome.message)
        self._printer.echo(outcome.message, ERROR)
        return outcome

    def reap_all(self, registry: DefunctRegistry) -> int:
        """Reap every registered zombie in registry order. Returns the number signaled."""
        return sum(1 for record in registry if self.reap(record).signaled)
