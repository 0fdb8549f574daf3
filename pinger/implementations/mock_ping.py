"""
Mock Ping Implementation

Simulated ping for tests. Answers with a configured outcome instead of
starting a process, and remembers what it was asked to ping.
"""

import logging
from typing import List, Optional

from pinger.interfaces.ping_interface import PingInterface, PingResult


class MockPing(PingInterface):
    """
    Mock ping runner that never touches the network.

    Flip `reachable` between calls to simulate a host going away.
    """

    def __init__(self, reachable: bool = True):
        self.logger = logging.getLogger(__name__)
        self.reachable = reachable

        # Track what was pinged (useful for testing)
        self.ping_history: List[str] = []

        self.logger.debug(f"Mock ping initialized (reachable: {reachable})")

    def ping(self, address: str) -> PingResult:
        self.ping_history.append(address)
        self.logger.debug(f"[MOCK PING] {address} -> {self.reachable}")
        return PingResult(
            address=address,
            success=self.reachable,
            return_code=0 if self.reachable else 1,
        )

    def is_available(self) -> bool:
        """Mock ping is always available"""
        return True

    # =========================================================================
    # TESTING HELPER METHODS (not part of PingInterface)
    # =========================================================================

    def get_ping_count(self) -> int:
        return len(self.ping_history)

    def get_last_address(self) -> Optional[str]:
        return self.ping_history[-1] if self.ping_history else None

    def clear_history(self) -> None:
        self.ping_history.clear()
