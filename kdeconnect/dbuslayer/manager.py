"""Device directory: enumerates the daemon's devices and sets them up."""

from __future__ import annotations

from typing import List, Optional

from kdeconnect.core.log import print_and_log, LOG__DEBUG
from kdeconnect.dbuslayer.base import default_bus
from kdeconnect.dbuslayer.device import Device

__all__ = [
    "device_ids",
    "find_device",
    "get_device",
    "list_devices",
]


def device_ids(bus=None) -> List[str]:
    """Return the ids of every device object published by the daemon."""
    bus = bus if bus is not None else default_bus()
    ids = bus.child_nodes(bus.devices_path)
    print_and_log(f"[*] Found {len(ids)} device object(s) under {bus.devices_path}", LOG__DEBUG)
    return ids


def get_device(device_id: str, bus=None) -> Device:
    """Return the set-up :class:`Device` for *device_id*."""
    bus = bus if bus is not None else default_bus()
    device = Device(device_id, bus)
    device.setup()
    return device


def list_devices(bus=None, only_reachable: bool = False, only_trusted: bool = False) -> List[Device]:
    """Return every known device, each already set up.

    Parameters
    ----------
    only_reachable, only_trusted
        Drop devices that are not currently reachable / trusted.
    """
    bus = bus if bus is not None else default_bus()
    devices = []
    for device_id in device_ids(bus):
        device = get_device(device_id, bus)
        if only_reachable and not device.is_reachable:
            device.close()
            continue
        if only_trusted and not device.is_trusted:
            device.close()
            continue
        devices.append(device)
    return devices


def find_device(name_or_id: str, bus=None) -> Optional[Device]:
    """Return the device whose id or name matches *name_or_id*, or None."""
    found = None
    for device in list_devices(bus):
        if found is None and name_or_id in (device.id, device.name):
            found = device
        else:
            device.close()
    return found
