"""
Ping Module

Secondary connectivity check through the OS ping utility.

Public API:
    - PingFactory: Factory for creating ping runners
    - create_ping: Quick ping creation
    - PingInterface: Ping contract
    - PingResult: Outcome of one ping
    - PingError: Ping failures (handled inside SystemPing)

Usage:
    from pinger import create_ping

    pinger = create_ping()
    if pinger.ping("10.8.100.100").success:
        print("host answers ICMP")
"""

from pinger.factory import PingFactory, create_ping
from pinger.interfaces.ping_interface import PingError, PingInterface, PingResult

__all__ = [
    "PingError",
    "PingFactory",
    "PingInterface",
    "PingResult",
    "create_ping",
]
