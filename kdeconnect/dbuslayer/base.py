"""Shared addressing helpers for objects living under a device path."""

from __future__ import annotations

from typing import Any, Callable, Dict


def default_bus():
    """Return a :class:`KDEConnectBus` on the session bus."""
    # Lazy import keeps the object model importable without dbus-python
    from kdeconnect.dbuslayer.bus import KDEConnectBus

    return KDEConnectBus()


class KDEConnectObject:
    """One remote object at ``<root>/devices/<device_id>/<sub_path>``."""

    def __init__(self, device_id: str, sub_path: str = "", bus=None):
        self._device_id = device_id
        self._sub_path = sub_path
        self._bus = bus if bus is not None else default_bus()

    @property
    def object_path(self) -> str:
        return self._bus.device_path(self._device_id, self._sub_path)

    def _path(self, sub: str = "") -> str:
        if not sub:
            return self.object_path
        return self._bus.device_path(self._device_id, f"{self._sub_path}/{sub}" if self._sub_path else sub)

    def _get_interface(self, interface: str, sub: str = ""):
        return self._bus.get_interface(self._path(sub), interface)

    def _get_properties(self, interface: str, sub: str = "") -> Dict[str, Any]:
        return self._bus.get_properties(self._path(sub), interface)

    def _connect_signal(self, interface: str, signal_name: str, handler: Callable, sub: str = ""):
        return self._bus.connect_signal(self._path(sub), interface, signal_name, handler)
