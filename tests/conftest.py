"""Shared fixtures: a fake proc filesystem under tmp_path."""

import io
from pathlib import Path

import pytest

from zps.output import Printer


def write_process(root: Path, pid: int, stat: bytes | None, cmdline: bytes | None = b"") -> Path:
    """Create a PID directory with optional stat and cmdline files."""
    proc_dir = root / str(pid)
    proc_dir.mkdir()
    if stat is not None:
        (proc_dir / "stat").write_bytes(stat)
    if cmdline is not None:
        (proc_dir / "cmdline").write_bytes(cmdline)
    return proc_dir


class CapturedPrinter(Printer):
    """Printer writing to in-memory streams."""

    def __init__(self, quiet: bool = False) -> None:
        self.out = io.StringIO()
        self.err = io.StringIO()
        super().__init__(color=False, quiet=quiet, file=self.out, err_file=self.err)

    @property
    def out_lines(self) -> list[str]:
        return self.out.getvalue().splitlines()

    @property
    def err_lines(self) -> list[str]:
        return self.err.getvalue().splitlines()


@pytest.fixture
def printer() -> CapturedPrinter:
    return CapturedPrinter()


@pytest.fixture
def proc_root(tmp_path: Path) -> Path:
    """
    A proc tree with a mix of regular, zombie, kernel and broken entries.

    1    systemd       S  ppid 0
    2    kthreadd      S  ppid 0
    40   kworker/0:1   I  ppid 2   (kernel thread)
    100  bash          S  ppid 1
    101  my proc (1)   Z  ppid 100 (zombie)
    102  worker        Z  ppid 100 (zombie)
    103  ghost         Z  ppid 2   (zombie under kthreadd)
    104  broken        malformed stat
    105  -             stat missing (vanished)
    106  odd           unknown state code
    """
    root = tmp_path / "proc"
    root.mkdir()
    write_process(root, 1, b"1 (systemd) S 0 1 1 0 -1\n", b"/sbin/init\0splash\0")
    write_process(root, 2, b"2 (kthreadd) S 0 0 0 0 -1\n")
    write_process(root, 40, b"40 (kworker/0:1) I 2 0 0 0 -1\n")
    write_process(root, 100, b"100 (bash) S 1 100 100 0 -1\n", b"-bash\0")
    write_process(root, 101, b"101 (my proc (1)) Z 100 100 100 0 -1\n")
    write_process(root, 102, b"102 (worker) Z 100 100 100 0 -1\n")
    write_process(root, 103, b"103 (ghost) Z 2 0 0 0 -1\n")
    write_process(root, 104, b"104 broken S 1\n")
    write_process(root, 105, None, None)
    write_process(root, 106, b"106 (odd) Q 1 0 0 0 -1\n")
    (root / "self").symlink_to(root / "100")
    (root / "sys").mkdir()
    (root / "uptime").write_bytes(b"1.0 1.0\n")
    (root / "999").write_bytes(b"not a directory")
    return root
