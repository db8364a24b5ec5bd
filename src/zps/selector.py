"""Interactive selection of zombies to reap."""

import re
from typing import TextIO

from zps.output import HEADER, Printer
from zps.reaper import Reaper
from zps.registry import DefunctRegistry

DELIMITERS = re.compile(r"[,\s]+")


class SelectionError(ValueError):
    """Base class for rejected selection tokens."""


class InvalidInput(SelectionError):
    """Raised when a token is not a non-negative integer."""


class IndexOutOfRange(SelectionError):
    """Raised when a token does not address a registry entry."""


def parse_index(token: str, size: int) -> int:
    """
    Convert a 1-based selection token into a registry index.

    Raises:
        InvalidInput: If the token is not a non-negative decimal integer.
        IndexOutOfRange: If the index is outside [0, size).
    """
    if not (token.isascii() and token.isdigit()):
        raise InvalidInput(f"Invalid input: {token!r}")
    try:
        index = int(token) - 1
    except ValueError:
        raise IndexOutOfRange(f"Index out of range: {token[:20]}...") from None
    if not 0 <= index < size:
        raise IndexOutOfRange(f"Index out of range: {token}")
    return index


def select_and_reap(
    registry: DefunctRegistry,
    reaper: Reaper,
    printer: Printer,
    stream: TextIO,
) -> int:
    """
    Read one line of indices from `stream` and reap the selected zombies.

    Every token is handled on its own; bad tokens are reported and skipped.
    End of input or an unreadable line selects nothing.

    Returns:
        Number of zombies whose parent was signaled.
    """
    if not len(registry):
        return 0

    printer.prompt(f"Select process(es) to signal [1-{registry.size()}]: ")
    try:
        line = stream.readline()
    except (OSError, UnicodeDecodeError) as e:
        printer.warn(f"Failed to read selection: {e}")
        return 0
    if not line:
        return 0

    signaled = 0
    for token in DELIMITERS.split(line):
        if not token:
            continue
        try:
            index = parse_index(token, registry.size())
        except SelectionError as e:
            printer.warn(str(e))
            continue

        record = registry.at(index)
        outcome = reaper.reap(record)
        if outcome.signaled:
            signaled += 1
        status = "signaled" if outcome.signaled else "not signaled"
        printer.echo(
            f"[{index + 1}] {record.name} (PID {record.pid}, PPID {record.ppid}): {status}",
            HEADER,
        )
    return signaled
