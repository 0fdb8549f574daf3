"""
Network Connectivity Probe

Single TCP connection attempt with a bounded wait, reported as a tagged
outcome instead of a bare success flag.

Uses a non-blocking connect plus select() so the three interesting cases
stay distinguishable:
- connected right away
- connect pending, then completed or refused (SO_ERROR tells which)
- connect pending, nothing happened before the timeout
"""

import errno
import logging
import os
import select
import socket
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config.settings import (
    CONNECT_TIMEOUT,
    INTERNET_PROBE_HOST,
    INTERNET_PROBE_LABEL,
    INTERNET_PROBE_PORT,
    LOCAL_PROBE_HOST,
    LOCAL_PROBE_LABEL,
    LOCAL_PROBE_PORT,
)

logger = logging.getLogger(__name__)

# connect_ex() return codes meaning "handshake started, not finished yet"
_CONNECT_PENDING = frozenset({errno.EINPROGRESS, errno.EWOULDBLOCK, errno.EAGAIN})


class ProbeOutcome(Enum):
    CONNECTED_IMMEDIATE = "connected_immediate"
    CONNECTED_AFTER_WAIT = "connected_after_wait"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class Target:
    """A host:port to probe. Address is an IP literal, no DNS involved."""

    label: str
    address: str
    port: int

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


LOCAL_TARGET = Target(LOCAL_PROBE_LABEL, LOCAL_PROBE_HOST, LOCAL_PROBE_PORT)
INTERNET_TARGET = Target(INTERNET_PROBE_LABEL, INTERNET_PROBE_HOST, INTERNET_PROBE_PORT)


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of one connection attempt.

    error_code/error_message are only set for FAILED results.
    socket_error marks a failure to create the socket at all (as opposed
    to a connect that was attempted and refused).
    """

    target: Target
    outcome: ProbeOutcome
    elapsed: float  # seconds
    error_code: Optional[int] = None
    error_message: Optional[str] = None
    socket_error: bool = False

    @property
    def succeeded(self) -> bool:
        return self.outcome in (
            ProbeOutcome.CONNECTED_IMMEDIATE,
            ProbeOutcome.CONNECTED_AFTER_WAIT,
        )

    @property
    def failed(self) -> bool:
        """True for every non-success outcome, timeouts included"""
        return not self.succeeded

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000.0


def attempt_connection(
    target: Target,
    timeout: float = CONNECT_TIMEOUT,
) -> ProbeResult:
    """
    Attempt one TCP connection to target.

    Args:
        target: Host and port to connect to
        timeout: Maximum seconds to wait for a pending connect

    Returns:
        ProbeResult tagged with the outcome. Never raises: every OSError,
        and any address/port the socket layer rejects, becomes a FAILED
        result.

    Note:
        The socket is closed before returning on every path.
    """
    start = time.monotonic()

    def result(
        outcome: ProbeOutcome,
        code: Optional[int] = None,
        message: Optional[str] = None,
        socket_error: bool = False,
    ) -> ProbeResult:
        if code is not None and message is None:
            message = os.strerror(code)
        probe = ProbeResult(
            target=target,
            outcome=outcome,
            elapsed=time.monotonic() - start,
            error_code=code,
            error_message=message,
            socket_error=socket_error,
        )
        logger.debug(
            f"{target.label} {target}: {outcome.value} "
            f"({probe.elapsed_ms:.1f} ms, errno={code})",
        )
        return probe

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as e:
        return result(
            ProbeOutcome.FAILED,
            e.errno,
            message=e.strerror or str(e),
            socket_error=True,
        )

    with sock:
        try:
            sock.setblocking(False)
            code = sock.connect_ex((target.address, target.port))

            if code == 0:
                return result(ProbeOutcome.CONNECTED_IMMEDIATE)

            if code not in _CONNECT_PENDING:
                return result(ProbeOutcome.FAILED, code)

            _, writable, _ = select.select([], [sock], [], timeout)
            if not writable:
                return result(ProbeOutcome.TIMED_OUT)

            so_error = sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)
            if so_error == 0:
                return result(ProbeOutcome.CONNECTED_AFTER_WAIT)
            return result(ProbeOutcome.FAILED, so_error)

        except OSError as e:
            return result(ProbeOutcome.FAILED, e.errno, message=e.strerror or str(e))
        except (OverflowError, ValueError) as e:
            # Address or port the socket layer refuses outright (port 70000, "10.0.0")
            return result(ProbeOutcome.FAILED, message=str(e))
