"""Tests for zps data models."""

import signal
from pathlib import Path

import pytest

from zps.models import KTHREADD_PID, ProcessRecord, RunStats, Settings


def test_process_record_creation():
    """Test ProcessRecord dataclass creation."""
    record = ProcessRecord(pid=123, ppid=1, name="test_process", state="R", cmd="/usr/bin/test")

    assert record.pid == 123
    assert record.ppid == 1
    assert record.name == "test_process"
    assert record.state == "R"
    assert record.cmd == "/usr/bin/test"
    assert not record.is_zombie


def test_process_record_is_frozen():
    """Test that ProcessRecord is immutable (frozen)."""
    record = ProcessRecord(pid=1, ppid=0, name="init", state="S")

    with pytest.raises(AttributeError):
        record.pid = 999


def test_process_record_uses_slots():
    """Test that ProcessRecord uses __slots__."""
    record = ProcessRecord(pid=1, ppid=0, name="init", state="S")
    assert not hasattr(record, "__dict__")


def test_zombie_and_kernel_thread_flags():
    """Test classification helpers."""
    assert ProcessRecord(pid=10, ppid=5, name="z", state="Z").is_zombie
    assert ProcessRecord(pid=KTHREADD_PID, ppid=0, name="kthreadd", state="S").is_kernel_thread
    assert ProcessRecord(pid=30, ppid=KTHREADD_PID, name="kworker", state="Z").is_kernel_thread
    assert not ProcessRecord(pid=30, ppid=1, name="sshd", state="S").is_kernel_thread


def test_settings_defaults():
    """Test Settings defaults: list zombies only, SIGTERM, /proc."""
    settings = Settings()

    assert not settings.show_all
    assert not settings.reap
    assert not settings.prompt
    assert settings.signal is signal.SIGTERM
    assert settings.color
    assert settings.proc_root == Path("/proc")


def test_settings_is_frozen():
    """Test Settings can't change after creation."""
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.reap = True


def test_run_stats_start_zeroed():
    """Test RunStats counters start at zero and are mutable."""
    stats = RunStats()
    assert stats.defunct_count == 0
    assert stats.signaled_count == 0

    stats.defunct_count += 1
    assert stats.defunct_count == 1
