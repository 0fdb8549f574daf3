"""
Probe Session State

Everything the loop remembers between cycles. Immutable: each cycle
receives the previous state and hands back a new one, so a cycle can be
driven and checked in isolation.
"""

from dataclasses import dataclass, replace

from core.terminal import TerminalState


@dataclass(frozen=True)
class SessionState:
    """
    cycle: number of the most recent cycle (0 before the first one)
    terminal: terminal state seen in that cycle (UNKNOWN before the first)
    """

    cycle: int = 0
    terminal: TerminalState = TerminalState.UNKNOWN

    @property
    def is_baseline(self) -> bool:
        """No terminal observation recorded yet"""
        return self.terminal is TerminalState.UNKNOWN

    def next_cycle(self) -> "SessionState":
        return replace(self, cycle=self.cycle + 1)

    def with_terminal(self, terminal: TerminalState) -> "SessionState":
        return replace(self, terminal=terminal)
