"""Core error classes for the KDE Connect client.

All three device errors are precondition failures raised by the guards before
any D-Bus call is made.  Failures of the remote call itself are *not* wrapped:
``dbus.exceptions.DBusException`` reaches the caller unchanged.
"""

from __future__ import annotations

from typing import Optional


class KDEConnectError(Exception):
    """Base exception for errors raised by this package."""

    def __init__(self, message: str, device_id: Optional[str] = None):
        super().__init__(message)
        self.device_id = device_id


class DeviceNotSetUpError(KDEConnectError):
    """Raised when a device is used before ``setup()`` finished."""

    def __init__(self, device_id: Optional[str] = None):
        super().__init__("KDEDevice was not setup. Please call .setup()", device_id)


class DeviceNotReachableError(KDEConnectError):
    """Raised when the device has no active connection to the daemon."""

    def __init__(self, device_id: Optional[str] = None):
        msg = "Cannot connect to KDEDevice"
        if device_id:
            msg += f" {device_id}"
        super().__init__(msg, device_id)


class DeviceNotTrustedError(KDEConnectError):
    """Raised when a privileged action is called on an unpaired device."""

    def __init__(self, device_id: Optional[str] = None):
        msg = "KDEDevice not trusted"
        if device_id:
            msg += f": {device_id}"
        super().__init__(msg, device_id)


__all__ = [
    "KDEConnectError",
    "DeviceNotSetUpError",
    "DeviceNotReachableError",
    "DeviceNotTrustedError",
]
