"""
System Ping Implementation

Runs the OS ping utility as a child process. Being a separate process, it
does not share any network state with the probing process, which is the
point: when our own connect() fails but ping works, the problem is in
how the OS treats this process, not in the network.
"""

import logging
import shutil
import subprocess
import sys
from typing import List, Optional

from config.settings import PING_COUNT, PING_PROCESS_GRACE, PING_TIMEOUT
from pinger.interfaces.ping_interface import PingError, PingInterface, PingResult


class SystemPing(PingInterface):
    """
    Ping via the system utility, judged by exit status only.

    Usage:
        pinger = SystemPing()
        result = pinger.ping("10.8.100.100")
        if result.success:
            print("reachable")
    """

    def __init__(
        self,
        count: int = PING_COUNT,
        timeout: int = PING_TIMEOUT,
        platform: Optional[str] = None,
    ):
        """
        Initialize system ping.

        Args:
            count: Packets per invocation
            timeout: Per-packet timeout in seconds
            platform: sys.platform value used to pick the timeout flag
                      (defaults to the running platform)
        """
        self.logger = logging.getLogger(__name__)
        self.count = count
        self.timeout = timeout
        self.platform = platform or sys.platform
        self.executable = shutil.which("ping")

        if self.executable is None:
            self.logger.warning("ping utility not found in PATH, pings will fail")

    def build_command(self, address: str) -> List[str]:
        """
        Build the ping command line for this platform.

        macOS and the BSDs take the overall timeout as -t; on Linux -t is
        the TTL and the reply timeout is -W.

        Raises:
            PingError: If the ping utility is not installed
        """
        if self.executable is None:
            raise PingError("ping utility not found")

        if self.platform == "darwin" or "bsd" in self.platform:
            timeout_flag = "-t"
        else:
            timeout_flag = "-W"

        return [
            self.executable,
            "-c",
            str(self.count),
            timeout_flag,
            str(self.timeout),
            address,
        ]

    def ping(self, address: str) -> PingResult:
        try:
            return_code = self._run(self.build_command(address))
        except PingError as e:
            self.logger.debug(f"Ping to {address} not completed: {e}")
            return PingResult(address=address, success=False, error_message=str(e))

        return PingResult(
            address=address,
            success=return_code == 0,
            return_code=return_code,
        )

    def is_available(self) -> bool:
        return self.executable is not None

    def _run(self, command: List[str]) -> int:
        """
        Run ping and return its exit status.

        Output is discarded; only the exit status matters.

        Raises:
            PingError: If the process cannot be started or overruns its deadline
        """
        deadline = self.count * self.timeout + PING_PROCESS_GRACE
        self.logger.debug(f"Running: {' '.join(command)}")

        try:
            completed = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=deadline,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise PingError(f"ping did not exit within {deadline}s") from e
        except OSError as e:
            raise PingError(f"cannot run ping: {e}") from e

        return completed.returncode
