"""Readers and parsers for the per-process files under /proc."""

import logging
import re
from pathlib import Path

from zps.models import (
    CMD_CAPACITY,
    NAME_CAPACITY,
    PROCESS_STATES,
    STATE_UNPARSED,
    ProcessRecord,
)

logger = logging.getLogger(__name__)

PID_FIELD = re.compile(rb"\d{1,10}")
PPID_FIELD = re.compile(rb"-?\d{1,10}")


class StatusParseError(ValueError):
    """Raised when a stat record does not have the `pid (name) state ppid` shape."""


def truncate(raw: bytes, capacity: int) -> bytes:
    """Cut a buffer so it fits into `capacity` bytes including a terminator."""
    return raw[: max(capacity - 1, 0)]


def sanitize(raw: bytes) -> str:
    """
    Decode bytes for display, replacing NULs and non-printable characters.

    Undecodable bytes become a single '?', so the text never encodes to more
    bytes than `raw`.
    """
    text = raw.replace(b"\0", b" ").decode("utf-8", errors="replace").replace("\ufffd", "?")
    return "".join(char if char.isprintable() else "?" for char in text)


def parse_status(buffer: bytes, name_capacity: int = NAME_CAPACITY) -> ProcessRecord:
    """
    Parse the contents of a /proc/<pid>/stat file.

    The name field is delimited by the first '(' and the last ')' of the
    record, so names containing spaces or parentheses survive intact.

    Args:
        buffer: Raw file contents. Anything after the first NUL is ignored.
        name_capacity: Storage bound for the name, terminator included.

    Returns:
        A ProcessRecord with an empty command line.

    Raises:
        StatusParseError: If pid, name brackets, state or ppid are missing.
    """
    content = buffer.split(b"\0", 1)[0]

    fields = content.split(None, 1)
    if not fields:
        raise StatusParseError("empty status record")
    if not PID_FIELD.fullmatch(fields[0]):
        raise StatusParseError(f"invalid pid field {fields[0]!r}")
    pid = int(fields[0])
    if pid <= 0:
        raise StatusParseError(f"invalid pid {pid}")

    name_start = content.find(b"(")
    name_end = content.rfind(b")")
    if name_start == -1 or name_end == -1 or name_end < name_start:
        raise StatusParseError("unbalanced name brackets")
    if name_end + 1 >= len(content):
        raise StatusParseError("record ends after the name field")

    name = sanitize(truncate(content[name_start + 1 : name_end], name_capacity))

    tokens = content[name_end + 2 :].split()
    if len(tokens) < 2:
        raise StatusParseError("missing state or ppid field")
    if not PPID_FIELD.fullmatch(tokens[1]):
        raise StatusParseError(f"invalid ppid field {tokens[1]!r}")
    ppid = int(tokens[1])

    state = tokens[0].decode("ascii", errors="replace")
    if len(state) != 1 or state not in PROCESS_STATES:
        state = STATE_UNPARSED

    return ProcessRecord(pid=pid, ppid=ppid, name=name, state=state)


def read_status(pid: int, proc_root: Path) -> bytes:
    """Read the raw stat record of a process. OSError propagates."""
    with open(proc_root / str(pid) / "stat", "rb") as stat_file:
        return stat_file.read()


def read_cmdline(pid: int, proc_root: Path, capacity: int = CMD_CAPACITY) -> str:
    """
    Read the argument list of a process as a single printable line.

    Argument separators (NUL bytes, the trailing one included) become spaces.
    Returns an empty string for kernel threads or when the file can't be read.
    """
    try:
        with open(proc_root / str(pid) / "cmdline", "rb") as cmdline_file:
            raw = cmdline_file.read(max(capacity - 1, 0))
    except OSError as e:
        logger.debug("Failed to read cmdline for %d: %s", pid, e)
        return ""
    return sanitize(raw)
