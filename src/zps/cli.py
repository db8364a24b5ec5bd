"""zps - command line entry point."""

import argparse
import logging
import signal
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import TextIO

from zps.models import RunStats, Settings
from zps.output import Printer
from zps.reaper import Reaper, parse_signal, signal_names
from zps.scanner import ProcessScanner, ScanError
from zps.selector import select_and_reap

try:
    __version__ = version("zps")
except PackageNotFoundError:
    # running from a source checkout
    __version__ = "unknown"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _signal_type(text: str) -> signal.Signals:
    try:
        return parse_signal(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="zps",
        description="List zombie (defunct) processes and signal their parents.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-a", "--all", dest="show_all", action="store_true",
                        help="List all processes, not only zombies.")
    parser.add_argument("-r", "--reap", action="store_true",
                        help="Signal the parents of all zombies after the scan.")
    parser.add_argument("-s", "--signal", type=_signal_type, default="TERM",
                        help="Signal to send, by name or number (default: TERM).")
    parser.add_argument("-p", "--prompt", action="store_true",
                        help="Select the zombies to reap interactively.")
    parser.add_argument("--tui", action="store_true",
                        help="Use the full-screen selector (implies --prompt).")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Suppress output except fatal errors.")
    parser.add_argument("-n", "--no-color", dest="color", action="store_false",
                        help="Disable colored output.")
    parser.add_argument("--verbose", action="store_true",
                        help="Report every signal delivered.")
    parser.add_argument("-l", "--list-signals", action="store_true",
                        help="List available signals and exit.")
    parser.add_argument("--proc-root", type=Path, default=Path("/proc"),
                        help="Process filesystem root (default: /proc).")
    parser.add_argument("--log-level", default="WARNING", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING).")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Create run settings from parsed arguments."""
    return Settings(
        show_all=args.show_all,
        reap=args.reap,
        signal=args.signal,
        prompt=args.prompt or args.tui,
        quiet=args.quiet,
        color=args.color,
        verbose=args.verbose,
        tui=args.tui,
        proc_root=args.proc_root,
    )


def run(settings: Settings, printer: Printer | None = None, stdin: TextIO | None = None) -> int:
    """
    Scan the proc filesystem, then reap according to settings.

    Signals are only sent once the scan has finished.

    Returns:
        Exit status: success unless the proc root could not be opened.
    """
    printer = printer or Printer.from_settings(settings)
    stats = RunStats()

    try:
        registry = ProcessScanner(settings, stats, printer).scan()
    except ScanError as e:
        printer.fatal(str(e))
        return EXIT_FAILURE

    if settings.prompt and len(registry):
        if settings.tui:
            from zps.app import ZpsApp

            ZpsApp(registry, Reaper(settings, stats, Printer.silent())).run()
        else:
            reaper = Reaper(settings, stats, printer)
            select_and_reap(registry, reaper, printer, stdin or sys.stdin)
    elif settings.reap:
        Reaper(settings, stats, printer).reap_all(registry)

    printer.summary(stats, settings)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry point for the zps command."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.list_signals:
        print("\n".join(signal_names()))
        return EXIT_SUCCESS

    return run(settings_from_args(args))


if __name__ == "__main__":
    sys.exit(main())
