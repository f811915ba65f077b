"""
Core package initialisation for the KDE Connect client.

Kept free of D-Bus imports so that configuration, logging, errors and guards
can be used (and tested) without a session bus.
"""

from kdeconnect.core.errors import (
    KDEConnectError,
    DeviceNotSetUpError,
    DeviceNotReachableError,
    DeviceNotTrustedError,
)
from kdeconnect.core.events import EventEmitter

__all__ = [
    "KDEConnectError",
    "DeviceNotSetUpError",
    "DeviceNotReachableError",
    "DeviceNotTrustedError",
    "EventEmitter",
]
