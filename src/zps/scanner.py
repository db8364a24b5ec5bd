"""Process scanner: walks the proc filesystem and collects zombies."""

import logging
import os
from dataclasses import replace

from zps.models import STATE_UNPARSED, ProcessRecord, RunStats, Settings
from zps.output import HEADER, PLAIN, ZOMBIE, Printer, format_header, format_row
from zps.procfs import StatusParseError, parse_status, read_cmdline, read_status
from zps.registry import DefunctRegistry

logger = logging.getLogger(__name__)


class ScanError(OSError):
    """Raised when the process filesystem root cannot be listed."""


class ProcessScanner:
    """
    Scanner that builds a ProcessRecord for every PID directory of the proc root.

    Entries are visited in directory enumeration order. Processes may appear,
    exit or change state while the walk is in progress; an entry that can't
    be read or parsed is reported and skipped. The scanner never signals.
    """

    def __init__(self, settings: Settings, stats: RunStats, printer: Printer) -> None:
        """
        Initialize the ProcessScanner.

        Args:
            settings: Run configuration (proc root, listing and prompt modes).
            stats: Counters to update with found zombies.
            printer: Output for rows and diagnostics.
        """
        self._settings = settings
        self._stats = stats
        self._printer = printer

    def scan(self) -> DefunctRegistry:
        """
        Walk the proc root once and return the registry of zombies.

        Raises:
            ScanError: If the proc root can't be opened.
        """
        registry = DefunctRegistry()
        proc_root = self._settings.proc_root

        try:
            entries = os.scandir(proc_root)
        except OSError as e:
            raise ScanError(f"Failed to open '{proc_root}': {e.strerror or e}") from e

        self._printer.echo(format_header(), HEADER)

        with entries:
            for entry in entries:
                if not (entry.name.isascii() and entry.name.isdigit()):
                    continue
                try:
                    if not entry.is_dir(follow_symlinks=False):
                        continue
                except OSError:
                    continue
                self._process_entry(int(entry.name), registry)

        return registry

    def _process_entry(self, pid: int, registry: DefunctRegistry) -> None:
        """Parse, classify and print a single PID directory."""
        record = self._read_record(pid)
        if record is None or record.is_kernel_thread:
            return

        if record.state == STATE_UNPARSED:
            self._printer.warn(f"Failed to parse state of process {pid}")
            return

        if record.is_zombie:
            index = registry.add(record)
            self._stats.defunct_count += 1
            prompt_index = index + 1 if self._settings.prompt else None
            self._printer.echo(format_row(record, prompt_index), ZOMBIE)
        elif self._settings.show_all:
            self._printer.echo(format_row(record), PLAIN)

    def _read_record(self, pid: int) -> ProcessRecord | None:
        """Build the record for a PID, or None if it vanished or is malformed."""
        proc_root = self._settings.proc_root
        try:
            record = parse_status(read_status(pid, proc_root))
        except OSError as e:
            logger.debug("Failed to read stat for %d: %s", pid, e)
            self._printer.warn(f"Failed to read status of process {pid}")
            return None
        except StatusParseError as e:
            logger.debug("Failed to parse stat for %d: %s", pid, e)
            self._printer.warn(f"Failed to parse status of process {pid}: {e}")
            return None

        if record.is_kernel_thread:
            return record
        return replace(record, cmd=read_cmdline(pid, proc_root))
