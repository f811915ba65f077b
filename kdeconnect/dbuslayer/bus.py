"""Session-bus transport for the KDE Connect daemon.

Everything that actually talks D-Bus lives here.  The object model
(devices, media, notifications, pairing requests) only sees the small surface
of :class:`KDEConnectBus`: property bulk-read, interface proxies for method
calls, signal subscription and child-node enumeration.
"""

#!/usr/bin/python3

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import dbus

# Ensure the GLib main-loop helper is loaded so that signals are dispatched
# once a GLib.MainLoop runs.
try:
    import dbus.mainloop.glib  # noqa: F401 – side-effect import
except ImportError as _err:  # pragma: no cover – environment specific
    import warnings

    warnings.warn(
        f"GLib main-loop bindings not available: {_err}. "
        "Signals from the KDE Connect daemon will not be delivered.",
        RuntimeWarning,
        stacklevel=2,
    )

if hasattr(dbus, "mainloop") and hasattr(dbus.mainloop, "glib"):
    dbus.mainloop.glib.DBusGMainLoop(set_as_default=True)

from kdeconnect.core import config
from kdeconnect.core.log import print_and_log, LOG__DEBUG
from kdeconnect.dbuslayer.utils import join_object_path, parse_child_nodes

__all__ = [
    "KDEConnectBus",
    "dbus_to_python",
]


def dbus_to_python(data):
    """Convert dbus-python wrapper types into plain Python values (recursively)."""
    if isinstance(data, (dbus.String, dbus.ObjectPath, dbus.Signature)):
        data = str(data)
    elif isinstance(data, dbus.Boolean):
        data = bool(data)
    elif isinstance(data, (dbus.Int64, dbus.Int32, dbus.Int16, dbus.UInt64, dbus.UInt32, dbus.UInt16, dbus.Byte)):
        data = int(data)
    elif isinstance(data, dbus.Double):
        data = float(data)
    elif isinstance(data, (dbus.Array, dbus.Struct)):
        data = [dbus_to_python(value) for value in data]
    elif isinstance(data, dbus.Dictionary):
        new_data = dict()
        for key in data.keys():
            new_data[dbus_to_python(key)] = dbus_to_python(data[key])
        data = new_data
    return data


class KDEConnectBus:
    """Addressing and raw D-Bus access for one KDE Connect daemon.

    Parameters
    ----------
    bus
        An existing ``dbus.Bus``; defaults to the shared session bus.
    service
        Well-known name of the daemon.
    root
        Object path under which the daemon publishes ``devices``.
    """

    def __init__(
        self,
        bus: Optional[dbus.Bus] = None,
        service: Optional[str] = None,
        root: Optional[str] = None,
    ):
        if service is None or root is None:
            settings = config.load_settings()
            service = service or settings.service
            root = root or settings.root
        self.service = service
        self.root = root.rstrip("/")
        self._bus = bus if bus is not None else dbus.SessionBus()

    # ------------------------------------------------------------------
    # Addressing
    # ------------------------------------------------------------------
    @property
    def devices_path(self) -> str:
        return join_object_path(self.root, "devices")

    def device_path(self, device_id: str, sub: str = "") -> str:
        return join_object_path(self.devices_path, device_id, sub)

    # ------------------------------------------------------------------
    # Remote access
    # ------------------------------------------------------------------
    def get_object(self, path: str):
        return self._bus.get_object(self.service, path)

    def get_interface(self, path: str, interface: str) -> dbus.Interface:
        """Return a proxy on which remote methods of *interface* can be called."""
        return dbus.Interface(self.get_object(path), interface)

    def get_properties(self, path: str, interface: str) -> Dict[str, Any]:
        """Bulk-read every property of *interface* at *path*."""
        props_iface = dbus.Interface(self.get_object(path), config.DBUS_PROPERTIES)
        return dbus_to_python(props_iface.GetAll(interface))

    def connect_signal(self, path: str, interface: str, signal_name: str, handler: Callable):
        """Subscribe *handler* to *signal_name*; returns a handle with ``remove()``.

        Signal arguments are converted to plain Python values before the
        handler sees them.
        """

        def _deliver(*args):
            handler(*[dbus_to_python(a) for a in args])

        print_and_log(f"[DEBUG] Subscribing {interface}.{signal_name} at {path}", LOG__DEBUG)
        return self._bus.add_signal_receiver(
            _deliver,
            signal_name=signal_name,
            dbus_interface=interface,
            bus_name=self.service,
            path=path,
        )

    def child_nodes(self, path: str) -> List[str]:
        """Return the names of the child objects of *path*."""
        introspect_iface = dbus.Interface(self.get_object(path), config.INTROSPECT_INTERFACE)
        return parse_child_nodes(str(introspect_iface.Introspect()))
