"""
D-Bus layer for the KDE Connect client.
Mirrors the daemon's device objects (devices, battery, connectivity,
notifications, media remote control, pairing) as Python objects.
"""

from .device import Device
from .media import MediaHandler
from .notification import Notification
from .pairing import PairingRequest
from .capabilities import Battery, Connectivity
from .manager import device_ids, find_device, get_device, list_devices

__all__ = [
    "Device",
    "MediaHandler",
    "Notification",
    "PairingRequest",
    "Battery",
    "Connectivity",
    "KDEConnectBus",
    "device_ids",
    "find_device",
    "get_device",
    "list_devices",
]


# The bus module needs dbus-python; load it only when asked for
def __getattr__(name):
    if name == "KDEConnectBus":
        from .bus import KDEConnectBus
        return KDEConnectBus
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
