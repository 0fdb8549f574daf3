"""
Console Reporter

All human-readable output of the probe. Every line is flushed as soon as
it is written so `nohup probe > log` shows progress immediately.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional, TextIO

from core.network import ProbeOutcome, ProbeResult, Target
from core.terminal import TerminalState
from pinger.interfaces.ping_interface import PingResult

BOX_WIDTH = 60
OK = "✅"
FAIL = "❌"


class ConsoleReporter:
    """
    Writes the probe report.

    Usage:
        reporter = ConsoleReporter()  # stdout
        reporter = ConsoleReporter(stream=io.StringIO())  # tests
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.logger = logging.getLogger(__name__)
        self.stream = stream if stream is not None else sys.stdout
        self._write_failed = False

    def line(self, text: str = "") -> None:
        """
        Print one line and flush it.

        A stream that stops accepting writes (EIO once the SSH terminal is
        revoked) loses the line; the loop keeps running either way.
        """
        try:
            print(text, file=self.stream, flush=True)
        except OSError as e:
            if not self._write_failed:
                self._write_failed = True
                self.logger.debug(f"Report output unavailable, dropping lines: {e}")

    # =========================================================================
    # BANNER / CYCLE FRAME
    # =========================================================================

    def banner(
        self,
        local: Target,
        internet: Target,
        interval: float,
        ping_available: bool = True,
    ) -> None:
        self.line("═" * BOX_WIDTH)
        self.line("Local Network Probe")
        self.line("═" * BOX_WIDTH)
        self.line(f"PID: {os.getpid()}, PPID: {os.getppid()}")
        self.line(f"Platform: {sys.platform}")
        self.line(f"Local target: {local}")
        self.line(f"Internet target: {internet}")
        self.line(f"Ping utility: {'available' if ping_available else 'missing'}")
        self.line("═" * BOX_WIDTH)
        self.line()
        self.line(f"Running tests every {interval:g} seconds.")
        self.line("Start via SSH, then disconnect.")
        self.line()

    def cycle_header(self, cycle: int, timestamp: datetime) -> None:
        title = f" Cycle {cycle} · {timestamp.isoformat(timespec='seconds')}"
        self.line("┌" + "─" * BOX_WIDTH + "┐")
        self.line("│" + title.ljust(BOX_WIDTH) + "│")
        self.line("└" + "─" * BOX_WIDTH + "┘")

    def cycle_footer(self, cycle: int) -> None:
        self.line()
        self.line(f"─── end of cycle {cycle} ".ljust(BOX_WIDTH + 2, "─"))
        self.line()

    # =========================================================================
    # TERMINAL STATUS
    # =========================================================================

    def terminal_status(
        self,
        state: TerminalState,
        tty_name: Optional[str] = None,
        baseline: bool = False,
    ) -> None:
        suffix = " (baseline)" if baseline else ""
        tty = tty_name or "not a tty"
        self.line(f"Terminal: {state.value}{suffix} | TTY: {tty}")
        self.line(f"PID: {os.getpid()}, PPID: {os.getppid()}")

    def terminal_detached(self, tty_name: Optional[str] = None) -> None:
        self.line("!" * BOX_WIDTH)
        self.line("⚠️  TERMINAL DETACHED since the previous cycle")
        self.line("   The controlling terminal is gone (SSH disconnect?).")
        self.line("   Watch the LOCAL result from here on.")
        self.line("!" * BOX_WIDTH)
        self.terminal_status(TerminalState.DETACHED, tty_name)

    # =========================================================================
    # TEST STEPS
    # =========================================================================

    def test_header(self, number: int, description: str) -> None:
        self.line()
        self.line(f"[TEST {number}] {description}...")

    def connection_result(self, result: ProbeResult) -> None:
        label = result.target.label
        took = f"{result.elapsed_ms:.1f} ms"

        if result.outcome is ProbeOutcome.CONNECTED_IMMEDIATE:
            self.line(f"  {OK} {label}: connected immediately ({took})")
        elif result.outcome is ProbeOutcome.CONNECTED_AFTER_WAIT:
            self.line(f"  {OK} {label}: connected ({took})")
        elif result.outcome is ProbeOutcome.TIMED_OUT:
            self.line(f"  {FAIL} {label}: connect timeout ({took})")
        elif result.socket_error:
            self.line(
                f"  {FAIL} {label}: socket() failed: {result.error_message} "
                f"(errno {result.error_code})",
            )
        else:
            self.line(
                f"  {FAIL} {label}: connect to {result.target} failed: "
                f"{result.error_message} (errno {result.error_code}, {took})",
            )

    def failure_pause(self, label: str, delay: float) -> None:
        self.line(
            f"  ⏳ {label} failed - pausing {delay:g}s on purpose so the OS "
            "can show its Local Network permission prompt",
        )

    def ping_result(self, result: PingResult) -> None:
        if result.success:
            self.line(f"  {OK} ping {result.address} succeeded")
        elif result.error_message:
            self.line(f"  {FAIL} ping {result.address} failed: {result.error_message}")
        else:
            self.line(
                f"  {FAIL} ping {result.address} failed (exit status {result.return_code})",
            )
