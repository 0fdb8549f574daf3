"""
Ping Interface

Abstract interface for the secondary connectivity check. Lets the probe
loop use the real OS ping utility in production and a mock in tests,
without the loop knowing which one it has.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PingResult:
    """
    Result of one ping invocation.

    return_code is the child process exit status when one ran.
    error_message explains why no exit status is available (utility
    missing, hung past its deadline, ...).
    """

    address: str
    success: bool
    return_code: Optional[int] = None
    error_message: Optional[str] = None


class PingInterface(ABC):
    """
    Abstract base class for ping runners.

    Any implementation must provide these methods to work with ProbeService.
    """

    @abstractmethod
    def ping(self, address: str) -> PingResult:
        """
        Ping an address once.

        This is a BLOCKING call, bounded by the implementation's own timeout.

        Args:
            address: IP literal to ping

        Returns:
            PingResult. Implementations report failures in the result
            instead of raising.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this ping runner can actually run on this system.

        Returns:
            True if pings can be sent, False otherwise
        """


class PingError(Exception):
    """
    Exception raised for ping-related errors.

    Examples:
    - ping utility not installed
    - ping process did not exit before its deadline
    """
