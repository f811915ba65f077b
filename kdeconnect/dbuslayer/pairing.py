"""Incoming pairing offers."""

from __future__ import annotations

from typing import Callable

from kdeconnect.core import config
from kdeconnect.core.guards import basic_wrap_check
from kdeconnect.dbuslayer.base import KDEConnectObject

__all__ = ["PairingRequest"]


class PairingRequest(KDEConnectObject):
    """A pending pair request from a device.

    ``accept`` and ``reject`` only need the device to be set up and reachable;
    trust cannot exist yet.  Both are guard-only placeholders until
    :meth:`setup` has bound them.
    """

    def __init__(self, device, bus=None):
        super().__init__(device.id, "", bus)
        self.device = device
        self.setup_done = False
        self.accept: Callable[[], None] = basic_wrap_check(device)
        self.reject: Callable[[], None] = basic_wrap_check(device)

    def setup(self) -> None:
        if self.setup_done:
            return
        interface = self._get_interface(config.DEVICE_INTERFACE)
        self.accept = basic_wrap_check(self.device, interface.acceptPairing)
        self.reject = basic_wrap_check(self.device, interface.rejectPairing)
        self.setup_done = True

    def __repr__(self) -> str:
        return f"<PairingRequest from {self.device.id}>"
