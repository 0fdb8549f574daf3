"""
Controlling Terminal Detection

Tells whether the process still has a controlling terminal.

Checking isatty(stdin) is not enough: a process started with nohup has
stdin redirected while the SSH session is still alive. Opening /dev/tty
only succeeds while a controlling terminal exists, so that is the test.
"""

import logging
import os
import sys
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

CONTROLLING_TTY_PATH = "/dev/tty"


class TerminalState(Enum):
    UNKNOWN = "unknown"
    ATTACHED = "attached"
    DETACHED = "detached"


def detect_terminal_state(tty_path: str = CONTROLLING_TTY_PATH) -> TerminalState:
    """
    Observe whether a controlling terminal is attached right now.

    Returns:
        ATTACHED or DETACHED (never UNKNOWN)
    """
    try:
        fd = os.open(tty_path, os.O_RDWR | os.O_NOCTTY)
    except OSError as e:
        logger.debug(f"Cannot open {tty_path}: {e}")
        return TerminalState.DETACHED

    os.close(fd)
    return TerminalState.ATTACHED


def get_tty_name() -> Optional[str]:
    """Name of the terminal behind stdin/stdout/stderr, None if none is a TTY"""
    for stream in (sys.stdin, sys.stdout, sys.stderr):
        try:
            return os.ttyname(stream.fileno())
        except (AttributeError, OSError, ValueError):
            # Not a TTY, closed, or replaced by an object without a real fd
            continue
    return None


def is_detach_transition(previous: TerminalState, current: TerminalState) -> bool:
    """True only when the terminal was attached last cycle and is gone now"""
    return previous is TerminalState.ATTACHED and current is TerminalState.DETACHED
