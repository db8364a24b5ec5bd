"""Data models for zps."""

from dataclasses import dataclass
from pathlib import Path
from signal import SIGTERM, Signals

INIT_PID = 1
KTHREADD_PID = 2

NAME_CAPACITY = 64
CMD_CAPACITY = 4096

STATE_ZOMBIE = "Z"
STATE_UNPARSED = "?"
PROCESS_STATES = frozenset("RSDZTtWXxKPI")


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """Immutable snapshot of a single process read from the proc filesystem."""

    pid: int
    ppid: int
    name: str
    state: str  # 'R', 'S', 'Z', 'D', etc. or STATE_UNPARSED
    cmd: str = ""

    @property
    def is_zombie(self) -> bool:
        """Check if the process is defunct."""
        return self.state == STATE_ZOMBIE

    @property
    def is_kernel_thread(self) -> bool:
        """Check if the process is kthreadd or one of its children."""
        return self.pid == KTHREADD_PID or self.ppid == KTHREADD_PID


@dataclass(slots=True, frozen=True)
class Settings:
    """Run configuration, built once from the command line."""

    show_all: bool = False
    reap: bool = False
    signal: Signals = SIGTERM
    prompt: bool = False
    quiet: bool = False
    color: bool = True
    verbose: bool = False
    tui: bool = False
    proc_root: Path = Path("/proc")


@dataclass(slots=True)
class RunStats:
    """Counters collected during one scan/reap run."""

    defunct_count: int = 0
    signaled_count: int = 0
