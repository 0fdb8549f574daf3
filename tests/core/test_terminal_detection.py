"""
Terminal Detection Tests

To run:
    pytest tests/core/test_terminal_detection.py -v
"""

import errno
import io

import pytest

from core import terminal
from core.terminal import (
    TerminalState,
    detect_terminal_state,
    get_tty_name,
    is_detach_transition,
)


@pytest.mark.unit
def test_attached_when_tty_opens(monkeypatch):
    """Test /dev/tty opening means a controlling terminal exists."""
    closed = []
    monkeypatch.setattr(terminal.os, "open", lambda path, flags: 42)
    monkeypatch.setattr(terminal.os, "close", closed.append)

    assert detect_terminal_state() is TerminalState.ATTACHED
    assert closed == [42]


@pytest.mark.unit
def test_detached_when_tty_cannot_open(monkeypatch):
    """Test ENXIO from /dev/tty means no controlling terminal."""

    def no_tty(path, flags):
        raise OSError(errno.ENXIO, "Device not configured")

    monkeypatch.setattr(terminal.os, "open", no_tty)

    assert detect_terminal_state() is TerminalState.DETACHED


@pytest.mark.unit
def test_detect_opens_given_path(monkeypatch):
    """Test the probed path and flags."""
    opened = []

    def record(path, flags):
        opened.append((path, flags))
        return 3

    monkeypatch.setattr(terminal.os, "open", record)
    monkeypatch.setattr(terminal.os, "close", lambda fd: None)

    detect_terminal_state("/dev/fake-tty")

    assert opened == [("/dev/fake-tty", terminal.os.O_RDWR | terminal.os.O_NOCTTY)]


@pytest.mark.unit
def test_missing_path_is_detached(tmp_path):
    """Test a nonexistent tty path reads as detached."""
    assert detect_terminal_state(str(tmp_path / "nope")) is TerminalState.DETACHED


@pytest.mark.unit
def test_tty_name_none_without_terminals(monkeypatch):
    """Test in-memory streams (no fileno) give no TTY name."""
    monkeypatch.setattr(terminal.sys, "stdin", io.StringIO())
    monkeypatch.setattr(terminal.sys, "stdout", io.StringIO())
    monkeypatch.setattr(terminal.sys, "stderr", io.StringIO())

    assert get_tty_name() is None


@pytest.mark.unit
def test_tty_name_from_first_terminal_stream(monkeypatch):
    """Test the first stream that is a TTY names the terminal."""

    class FakeStream:
        def __init__(self, fd):
            self._fd = fd

        def fileno(self):
            return self._fd

    def fake_ttyname(fd):
        if fd == 1:
            return "/dev/pts/3"
        raise OSError(errno.ENOTTY, "Inappropriate ioctl for device")

    monkeypatch.setattr(terminal.sys, "stdin", FakeStream(0))
    monkeypatch.setattr(terminal.sys, "stdout", FakeStream(1))
    monkeypatch.setattr(terminal.sys, "stderr", FakeStream(2))
    monkeypatch.setattr(terminal.os, "ttyname", fake_ttyname)

    assert get_tty_name() == "/dev/pts/3"


@pytest.mark.unit
@pytest.mark.parametrize(
    "previous,current,expected",
    [
        (TerminalState.ATTACHED, TerminalState.DETACHED, True),
        (TerminalState.ATTACHED, TerminalState.ATTACHED, False),
        (TerminalState.DETACHED, TerminalState.DETACHED, False),
        (TerminalState.DETACHED, TerminalState.ATTACHED, False),
        (TerminalState.UNKNOWN, TerminalState.DETACHED, False),
        (TerminalState.UNKNOWN, TerminalState.ATTACHED, False),
    ],
)
def test_detach_transition_rule(previous, current, expected):
    """Test only attached -> detached counts as a detach."""
    assert is_detach_transition(previous, current) is expected
