"""
Core probe modules.

Public API:
    - attempt_connection: One bounded TCP connect, tagged outcome
    - Target, ProbeOutcome, ProbeResult: Connection attempt types
    - LOCAL_TARGET, INTERNET_TARGET: Configured probe targets
    - detect_terminal_state, is_detach_transition: Terminal attachment
    - SessionState: State carried between probe cycles
    - ConsoleReporter: Human-readable report output

Usage:
    from core import LOCAL_TARGET, attempt_connection

    result = attempt_connection(LOCAL_TARGET)
    if result.failed:
        print(result.error_message)
"""

from core.console import ConsoleReporter
from core.network import (
    INTERNET_TARGET,
    LOCAL_TARGET,
    ProbeOutcome,
    ProbeResult,
    Target,
    attempt_connection,
)
from core.session import SessionState
from core.terminal import TerminalState, detect_terminal_state, is_detach_transition

__all__ = [
    "INTERNET_TARGET",
    "LOCAL_TARGET",
    "ConsoleReporter",
    "ProbeOutcome",
    "ProbeResult",
    "SessionState",
    "Target",
    "TerminalState",
    "attempt_connection",
    "detect_terminal_state",
    "is_detach_transition",
]
