"""
Ping Factory

Single place to decide between the real system ping and the mock.
"""

import logging
from typing import Literal

from pinger.implementations.mock_ping import MockPing
from pinger.implementations.system_ping import SystemPing
from pinger.interfaces.ping_interface import PingInterface

PingMode = Literal["real", "mock"]


class PingFactory:
    """
    Factory for creating ping runners.

    Usage:
        pinger = PingFactory.create_ping()  # system ping
        pinger = PingFactory.create_ping(mode="mock")  # tests

    No automatic fallback to the mock: a missing ping utility shows up
    as failed pings in the report.
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_ping(
        cls,
        mode: PingMode = "real",
        reachable: bool = True,
    ) -> PingInterface:
        """
        Create a ping runner.

        Args:
            mode: "real" (system ping utility) or "mock" (simulation)
            reachable: For mock ping, the outcome every ping reports

        Returns:
            PingInterface implementation (SystemPing or MockPing)

        Raises:
            ValueError: If mode is not recognised
        """
        if mode == "mock":
            cls._logger.info(f"Creating Mock ping (reachable: {reachable})")
            return MockPing(reachable=reachable)

        if mode == "real":
            pinger = SystemPing()
            cls._logger.debug(f"Creating system ping ({pinger.executable})")
            return pinger

        raise ValueError(f"Unknown ping mode: {mode}")


def create_ping(force_mock: bool = False) -> PingInterface:
    """
    Quick ping creation with simple mock override.

    Args:
        force_mock: If True, always use mock (good for testing)
    """
    mode = "mock" if force_mock else "real"
    return PingFactory.create_ping(mode=mode)
