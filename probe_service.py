"""
Probe Service

Repeating diagnostic loop that reproduces "local network breaks after the
SSH session ends" bugs.

Every cycle:
    1. header with cycle number and time
    2. controlling terminal status (loud notice on attached -> detached)
    3. [TEST 1] TCP connect to the LOCAL target
    4. [TEST 2] TCP connect to the INTERNET target
    5. [TEST 3] system ping to the LOCAL address
    6. footer, then sleep PROBE_INTERVAL

A failed LOCAL connect is followed by a LOCAL_FAILURE_DELAY pause: macOS
raises its Local Network permission prompt a while after the blocked
connect, and the process should still be around when it does. INTERNET
failures never pause.

Typical run on the machine under test:
    nohup local-network-probe > /tmp/probe.log 2>&1 &
    disown
    exit   # the SSH disconnect is the trigger
"""

import logging
import logging.handlers
import sys
import time
from datetime import datetime
from typing import Callable, Optional

from config.settings import (
    CONNECT_TIMEOUT,
    LOCAL_FAILURE_DELAY,
    LOG_BACKUP_COUNT,
    LOG_FILE,
    LOG_FORMAT,
    LOG_LEVEL,
    PROBE_INTERVAL,
)
from core.console import ConsoleReporter
from core.network import (
    INTERNET_TARGET,
    LOCAL_TARGET,
    ProbeResult,
    Target,
    attempt_connection,
)
from core.session import SessionState
from core.terminal import (
    TerminalState,
    detect_terminal_state,
    get_tty_name,
    is_detach_transition,
)
from pinger import PingInterface, create_ping

Connector = Callable[[Target, float], ProbeResult]


class ProbeService:
    """
    The probe loop.

    All collaborators are injectable so a cycle can run without sockets,
    processes, terminals or real sleeping.

    Usage:
        service = ProbeService()
        service.run()  # Blocks until Ctrl-C or kill
    """

    def __init__(
        self,
        local_target: Target = LOCAL_TARGET,
        internet_target: Target = INTERNET_TARGET,
        pinger: Optional[PingInterface] = None,
        reporter: Optional[ConsoleReporter] = None,
        connector: Connector = attempt_connection,
        terminal_probe: Callable[[], TerminalState] = detect_terminal_state,
        tty_name_probe: Callable[[], Optional[str]] = get_tty_name,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = datetime.now,
        interval: float = PROBE_INTERVAL,
        connect_timeout: float = CONNECT_TIMEOUT,
        local_failure_delay: float = LOCAL_FAILURE_DELAY,
    ):
        self.logger = logging.getLogger(__name__)

        self.local_target = local_target
        self.internet_target = internet_target
        self.pinger = pinger if pinger is not None else create_ping()
        self.reporter = reporter if reporter is not None else ConsoleReporter()

        self._connect = connector
        self._terminal_probe = terminal_probe
        self._tty_name_probe = tty_name_probe
        self._sleep = sleep
        self._clock = clock

        self.interval = interval
        self.connect_timeout = connect_timeout
        self.local_failure_delay = local_failure_delay

        self.logger.debug(
            f"Probe service initialized (local: {local_target}, "
            f"internet: {internet_target}, interval: {interval}s)",
        )

    def run(self, max_cycles: Optional[int] = None) -> SessionState:
        """
        Main loop.

        Args:
            max_cycles: Stop after this many cycles (None = run forever)

        Returns:
            Session state after the last completed cycle
        """
        state = SessionState()
        self.reporter.banner(
            self.local_target,
            self.internet_target,
            self.interval,
            ping_available=self.pinger.is_available(),
        )
        self.logger.info("Starting probe loop...")

        try:
            while max_cycles is None or state.cycle < max_cycles:
                state = self.run_cycle(state)
                if max_cycles is not None and state.cycle >= max_cycles:
                    break
                self._sleep(self.interval)
        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received, stopping probe loop")

        self.logger.info(f"Probe loop stopped after {state.cycle} cycle(s)")
        return state

    def run_cycle(self, state: SessionState) -> SessionState:
        """
        Run one full test cycle.

        Args:
            state: State left by the previous cycle

        Returns:
            New state: cycle advanced by one, terminal state as observed now
        """
        state = state.next_cycle()
        self.reporter.cycle_header(state.cycle, self._clock())

        state = self._check_terminal(state)

        self.reporter.test_header(
            1,
            f"TCP connect to {self.local_target.label} network ({self.local_target})",
        )
        self.probe_target(self.local_target, is_local=True)

        self.reporter.test_header(
            2,
            f"TCP connect to {self.internet_target.label} ({self.internet_target})",
        )
        self.probe_target(self.internet_target, is_local=False)

        self.reporter.test_header(
            3,
            f"System ping to {self.local_target.label} ({self.local_target.address})",
        )
        self.reporter.ping_result(self.pinger.ping(self.local_target.address))

        self.reporter.cycle_footer(state.cycle)
        return state

    def probe_target(self, target: Target, is_local: bool) -> ProbeResult:
        """
        Connect to target once and report the outcome.

        Any failure against the local target is followed by the
        permission-prompt pause before returning.
        """
        result = self._connect(target, self.connect_timeout)
        self.reporter.connection_result(result)

        if is_local and result.failed:
            self.reporter.failure_pause(target.label, self.local_failure_delay)
            self.logger.debug(
                f"Sleeping {self.local_failure_delay}s after {target.label} failure",
            )
            self._sleep(self.local_failure_delay)

        return result

    def _check_terminal(self, state: SessionState) -> SessionState:
        observed = self._terminal_probe()
        tty_name = self._tty_name_probe()

        if is_detach_transition(state.terminal, observed):
            self.logger.warning(f"Controlling terminal lost before cycle {state.cycle}")
            self.reporter.terminal_detached(tty_name)
        else:
            self.reporter.terminal_status(observed, tty_name, baseline=state.is_baseline)

        return state.with_terminal(observed)


def setup_logging(level: str = LOG_LEVEL, log_file: str = LOG_FILE):
    """
    Setup logging.

    Console (stdout) always; a daily rotated file only when LOG_FILE is set.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if not log_file:
        return

    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        logger.warning(f"Cannot write to {log_file} ({e}), logging to console only")
        return

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)


def main() -> int:
    """
    Main entry point.

    Sets up logging and runs the probe loop until interrupted.
    """
    setup_logging()

    logger = logging.getLogger(__name__)

    try:
        service = ProbeService()
        service.run()
    except Exception as e:
        logger.critical(f"Fatal error in main: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
