"""
Test Configuration and Fixtures

Shared fixtures for probe tests. Nothing here opens sockets, starts
processes or really sleeps; ProbeService gets fakes for all of that.

To run:
    pytest tests/
"""

import io
from datetime import datetime

import pytest

from core.console import ConsoleReporter
from core.network import ProbeOutcome, ProbeResult, Target
from core.terminal import TerminalState
from pinger.implementations.mock_ping import MockPing
from probe_service import ProbeService

LOCAL = Target("LOCAL", "10.8.100.100", 6379)
INTERNET = Target("INTERNET", "8.8.8.8", 53)

# =============================================================================
# FAKE COLLABORATORS
# =============================================================================


class FakeConnector:
    """
    Stand-in for attempt_connection().

    Returns a scripted outcome per target label and records every call.
    """

    def __init__(self):
        self.outcomes = {}
        self.calls = []

    def set_outcome(self, label: str, outcome: ProbeOutcome, error_code=None):
        self.outcomes[label] = (outcome, error_code)

    def __call__(self, target: Target, timeout: float) -> ProbeResult:
        self.calls.append((target, timeout))
        outcome, code = self.outcomes.get(
            target.label,
            (ProbeOutcome.CONNECTED_AFTER_WAIT, None),
        )
        message = "No route to host" if code is not None else None
        return ProbeResult(
            target=target,
            outcome=outcome,
            elapsed=0.002,
            error_code=code,
            error_message=message,
        )

    def labels(self):
        return [target.label for target, _ in self.calls]


class TerminalScript:
    """Terminal probe returning a scripted sequence of states, last one repeats"""

    def __init__(self, *states: TerminalState):
        self.states = list(states) or [TerminalState.ATTACHED]
        self.calls = 0

    def __call__(self) -> TerminalState:
        index = min(self.calls, len(self.states) - 1)
        self.calls += 1
        return self.states[index]


class EventLog:
    """
    Ordered record of connects and sleeps, to check what follows what.
    """

    def __init__(self, connector: FakeConnector):
        self.events = []
        self._connector = connector

    def connect(self, target, timeout):
        self.events.append(("connect", target.label))
        return self._connector(target, timeout)

    def sleep(self, seconds: float):
        self.events.append(("sleep", seconds))

    def sleeps(self):
        return [seconds for kind, seconds in self.events if kind == "sleep"]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def output():
    """In-memory stream capturing everything the reporter prints"""
    return io.StringIO()


@pytest.fixture
def reporter(output):
    return ConsoleReporter(stream=output)


@pytest.fixture
def mock_ping():
    pinger = MockPing(reachable=True)
    yield pinger
    pinger.clear_history()


@pytest.fixture
def connector():
    return FakeConnector()


@pytest.fixture
def event_log(connector):
    return EventLog(connector)


@pytest.fixture
def terminal_script():
    """
    Provide the TerminalScript class.

    Usage:
        def test_x(make_service, terminal_script):
            probe = terminal_script(TerminalState.ATTACHED, TerminalState.DETACHED)
    """
    return TerminalScript


@pytest.fixture
def make_service(reporter, mock_ping, event_log):
    """
    Build a ProbeService wired to fakes.

    Usage:
        def test_x(make_service):
            service = make_service(TerminalScript(TerminalState.ATTACHED))
    """

    def _make(terminal_probe=None) -> ProbeService:
        return ProbeService(
            local_target=LOCAL,
            internet_target=INTERNET,
            pinger=mock_ping,
            reporter=reporter,
            connector=event_log.connect,
            terminal_probe=terminal_probe or TerminalScript(TerminalState.ATTACHED),
            tty_name_probe=lambda: "/dev/ttys001",
            sleep=event_log.sleep,
            clock=lambda: datetime(2025, 1, 15, 12, 0, 0),
            interval=10,
            connect_timeout=5,
            local_failure_delay=30,
        )

    return _make
