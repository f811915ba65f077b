"""
kdeconnect - Python client for the KDE Connect daemon's D-Bus object tree
"""

__version__ = "1.0.0"

# ---------------------------------------------------------------------------
# Initialise logging on *package import* so every code path (even when the
# CLI is not used) writes to the per-user log files.
# ---------------------------------------------------------------------------
import importlib as _importlib

_importlib.import_module("kdeconnect.core.log")  # noqa: F401 – side-effect import

from kdeconnect.core.errors import (
    KDEConnectError,
    DeviceNotSetUpError,
    DeviceNotReachableError,
    DeviceNotTrustedError,
)
from kdeconnect.dbuslayer import (
    Battery,
    Connectivity,
    Device,
    MediaHandler,
    Notification,
    PairingRequest,
    find_device,
    get_device,
    list_devices,
)

__all__ = [
    "KDEConnectError",
    "DeviceNotSetUpError",
    "DeviceNotReachableError",
    "DeviceNotTrustedError",
    "Battery",
    "Connectivity",
    "Device",
    "MediaHandler",
    "Notification",
    "PairingRequest",
    "find_device",
    "get_device",
    "list_devices",
]
