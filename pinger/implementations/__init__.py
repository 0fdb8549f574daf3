"""
Ping Implementations Package

Exposes concrete implementations of the ping interface.
"""

from pinger.implementations.mock_ping import MockPing
from pinger.implementations.system_ping import SystemPing

# Public API (sorted alphabetically)
__all__ = [
    "MockPing",
    "SystemPing",
]
