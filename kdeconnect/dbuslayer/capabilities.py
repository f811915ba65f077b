"""Passive property mirrors for the battery and connectivity-report plugins.

Each mirror reads its remote properties once, then follows the plugin's
``refreshed`` signal.  Neither has actions of its own; the owning device
loads them when it becomes reachable and trusted and clears them when it
stops being either.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from kdeconnect.core import config
from kdeconnect.core.log import print_and_log, LOG__DEBUG
from kdeconnect.dbuslayer.base import KDEConnectObject

__all__ = [
    "Battery",
    "Connectivity",
    "BatteryMirror",
    "ConnectivityMirror",
]


@dataclass(frozen=True)
class Battery:
    charge: int
    charging: bool


@dataclass(frozen=True)
class Connectivity:
    type: str
    strength: int


class _PropertyMirror(KDEConnectObject, ABC):
    """Snapshot of one plugin object plus its ``refreshed`` subscription."""

    INTERFACE = ""
    PATH = ""

    def __init__(self, device_id: str, bus=None, on_change: Optional[Callable[[Any], None]] = None):
        super().__init__(device_id, self.PATH, bus)
        self._on_change = on_change
        self._value = None
        self._match = None

    @property
    def value(self):
        return self._value

    def load(self):
        """Read the remote properties and (re)attach the ``refreshed`` handler.

        A previous subscription is removed first so a device that reconnects
        several times still receives each refresh exactly once.
        """
        value = self._from_properties(self._get_properties(self.INTERFACE))
        self._detach()
        self._match = self._connect_signal(self.INTERFACE, "refreshed", self._on_refreshed)
        self._value = value
        return value

    def clear(self) -> None:
        self._detach()
        self._value = None

    def _detach(self) -> None:
        if self._match is not None:
            self._match.remove()
            self._match = None

    def _on_refreshed(self, *args) -> None:
        if self._match is None:
            return
        self._value = self._from_signal(*args)
        print_and_log(f"[*] {self.object_path} refreshed: {self._value}", LOG__DEBUG)
        if self._on_change is not None:
            self._on_change(self._value)

    @abstractmethod
    def _from_properties(self, props: Dict[str, Any]):
        """Build the value from a GetAll result."""

    @abstractmethod
    def _from_signal(self, *args):
        """Build the value from the arguments of ``refreshed``."""


class BatteryMirror(_PropertyMirror):
    INTERFACE = config.BATTERY_INTERFACE
    PATH = config.BATTERY_PATH

    def _from_properties(self, props):
        return Battery(charge=props["charge"], charging=props["isCharging"])

    def _from_signal(self, charging, charge):
        return Battery(charge=charge, charging=charging)


class ConnectivityMirror(_PropertyMirror):
    INTERFACE = config.CONNECTIVITY_INTERFACE
    PATH = config.CONNECTIVITY_PATH

    def _from_properties(self, props):
        return Connectivity(
            type=props["cellularNetworkType"],
            strength=props["cellularNetworkStrength"],
        )

    def _from_signal(self, network_type, strength):
        return Connectivity(type=network_type, strength=strength)
