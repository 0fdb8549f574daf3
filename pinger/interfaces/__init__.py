"""
Ping Interfaces Package

Exposes the abstract ping contract and its result/exception types.
"""

from pinger.interfaces.ping_interface import PingError, PingInterface, PingResult

__all__ = [
    "PingError",
    "PingInterface",
    "PingResult",
]
