"""KDE Connect device abstraction.

A :class:`Device` mirrors one ``<root>/devices/<id>`` object of the daemon:
its reachable / trusted / name / type state, the battery and
connectivity-report plugins, and a :class:`MediaHandler`.  Actions are plain
attributes that get rebound once the backing plugin objects are known; every
one of them re-checks the device state on each call.

Typical use::

    device = Device("abc123")
    device.setup()
    device.events.on("onBatteryChanged", print)
    device.ping("hello")
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Union

from kdeconnect.core import config
from kdeconnect.core.events import EventEmitter
from kdeconnect.core.guards import basic_wrap_check, check_setup, wrap_check
from kdeconnect.core.log import print_and_log, LOG__DEBUG
from kdeconnect.dbuslayer.base import KDEConnectObject
from kdeconnect.dbuslayer.capabilities import (
    Battery,
    BatteryMirror,
    Connectivity,
    ConnectivityMirror,
)
from kdeconnect.dbuslayer.media import MediaHandler
from kdeconnect.dbuslayer.notification import Notification
from kdeconnect.dbuslayer.pairing import PairingRequest

__all__ = ["Device"]


class Device(KDEConnectObject):
    """One device known to the KDE Connect daemon.

    Nothing but :attr:`id` and :meth:`setup` may be used before ``setup()``
    returned.  Actions called too early raise
    :class:`~kdeconnect.core.errors.DeviceNotSetUpError`.

    Events (``device.events.on(name, handler)``)
    ---------------------------------------------
    onReachableChanged(bool), onTrustedChanged(bool), onNameChanged(str),
    onTypeChanged(str), onBatteryChanged(Battery),
    onConnectivityChanged(Connectivity), onPairingRequest(PairingRequest)
    """

    def __init__(self, device_id: str, bus=None):
        super().__init__(device_id, "", bus)
        self.events = EventEmitter()

        self._setup_done = False
        self._name = ""
        self._type = ""
        self._is_reachable = False
        self._is_trusted = False

        self._battery = BatteryMirror(device_id, self._bus, self._on_battery_changed)
        self._connectivity = ConnectivityMirror(device_id, self._bus, self._on_connectivity_changed)
        self._matches: list = []
        # Bumped whenever the device stops being usable
        self._generation = 0

        self.media: Optional[MediaHandler] = None

        # Guard-only placeholders until the plugin objects are bound
        self.ring: Callable[[], None] = wrap_check(self)
        self.ping: Callable[..., None] = wrap_check(self)
        self.share_url: Callable[[str], None] = wrap_check(self)
        self.share_text: Callable[[str], None] = wrap_check(self)
        self.unpair: Callable[[], None] = wrap_check(self)
        self.request_pair: Callable[[], None] = basic_wrap_check(self)

    # ------------------------------------------------------------------
    # Mirrored state
    # ------------------------------------------------------------------
    @property
    def id(self) -> str:
        return self._device_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> str:
        return self._type

    @property
    def is_reachable(self) -> bool:
        return self._is_reachable

    @property
    def is_trusted(self) -> bool:
        return self._is_trusted

    @property
    def setup_done(self) -> bool:
        return self._setup_done

    @property
    def battery(self) -> Optional[Battery]:
        return self._battery.value

    @property
    def connectivity(self) -> Optional[Connectivity]:
        return self._connectivity.value

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def setup(self) -> None:
        """Load the device state and subscribe to its change signals.

        Idempotent.  When the device is already reachable and trusted the
        battery, connectivity and media mirrors are populated before this
        returns.  A plugin that cannot be loaded is logged and skipped.
        """
        if self._setup_done:
            return

        props = self._get_properties(config.DEVICE_INTERFACE)
        self._is_reachable = bool(props.get("isReachable", False))
        # Older daemons report pairing as isPaired
        self._is_trusted = bool(props.get("isTrusted", False) or props.get("isPaired", False))
        self._name = props.get("name", "")
        self._type = props.get("type", "")

        matches = []
        try:
            for signal_name, handler in (
                ("reachableChanged", self._on_reachable_changed),
                ("trustedChanged", self._on_trusted_changed),
                ("hasPairingRequestsChanged", self._on_pairing_requests_changed),
                ("nameChanged", self._on_name_changed),
                ("typeChanged", self._on_type_changed),
            ):
                matches.append(self._connect_signal(config.DEVICE_INTERFACE, signal_name, handler))
        except Exception:
            # Leave nothing subscribed so a retried setup() starts clean
            for match in matches:
                match.remove()
            raise
        self._matches.extend(matches)

        if self._is_reachable:
            try:
                self._bind_pairing()
            except Exception as e:
                print_and_log(f"[-] {self.id}: pairing interface unavailable: {e}", LOG__DEBUG)

        if self._is_reachable and self._is_trusted:
            self._init_capabilities()

        self._setup_done = True
        self.media = MediaHandler(self, self._bus)
        print_and_log(
            f"[+] Device {self._name} ({self.id}) set up: reachable={self._is_reachable} trusted={self._is_trusted}",
            LOG__DEBUG,
        )

    def close(self) -> None:
        """Drop every signal subscription held for this device."""
        for match in self._matches:
            match.remove()
        self._matches.clear()
        self._battery.clear()
        self._connectivity.clear()
        if self.media is not None:
            self.media.close()

    # ------------------------------------------------------------------
    # Capability (re)initialisation
    # ------------------------------------------------------------------
    def _bind_pairing(self) -> None:
        interface = self._get_interface(config.DEVICE_INTERFACE)
        self.request_pair = basic_wrap_check(self, interface.requestPair)

    def _load_battery(self) -> None:
        self._battery.load()

    def _load_connectivity(self) -> None:
        self._connectivity.load()

    def _bind_findmyphone(self) -> None:
        interface = self._get_interface(config.FINDMYPHONE_INTERFACE, config.FINDMYPHONE_PATH)
        self.ring = wrap_check(self, interface.ring)

    def _bind_ping(self) -> None:
        interface = self._get_interface(config.PING_INTERFACE, config.PING_PATH)

        def send_ping(message: Optional[str] = None):
            return interface.sendPing(message or "")

        self.ping = wrap_check(self, send_ping)

    def _bind_share(self) -> None:
        interface = self._get_interface(config.SHARE_INTERFACE, config.SHARE_PATH)
        self.share_url = wrap_check(self, interface.shareUrl)
        self.share_text = wrap_check(self, interface.shareText)

    def _bind_unpair(self) -> None:
        interface = self._get_interface(config.DEVICE_INTERFACE)
        self.unpair = wrap_check(self, interface.unpair)

    def _init_capabilities(self) -> None:
        generation = self._generation
        for label, step in (
            ("battery", self._load_battery),
            ("connectivity_report", self._load_connectivity),
            ("findmyphone", self._bind_findmyphone),
            ("ping", self._bind_ping),
            ("share", self._bind_share),
            ("unpair", self._bind_unpair),
        ):
            if generation != self._generation:
                break
            try:
                step()
            except Exception as e:
                print_and_log(f"[-] {self.id}: {label} unavailable: {e}", LOG__DEBUG)

        if generation != self._generation:
            # Dropped while loading; do not keep what was read before the drop
            self._battery.clear()
            self._connectivity.clear()

    def _clear_capabilities(self) -> None:
        self._generation += 1
        self._battery.clear()
        self._connectivity.clear()
        if self.media is not None:
            self.media.clear()

    # ------------------------------------------------------------------
    # Signal handlers
    # ------------------------------------------------------------------
    def _on_reachable_changed(self, reachable: bool) -> None:
        self._is_reachable = bool(reachable)
        if self._is_reachable:
            try:
                self._bind_pairing()
            except Exception as e:
                print_and_log(f"[-] {self.id}: pairing interface unavailable: {e}", LOG__DEBUG)
            if self._is_trusted:
                self._init_capabilities()
        else:
            self._clear_capabilities()
        print_and_log(f"[*] {self._name} reachable: {self._is_reachable}", LOG__DEBUG)
        self.events.emit("onReachableChanged", self._is_reachable)

    def _on_trusted_changed(self, trusted: bool) -> None:
        self._is_trusted = bool(trusted)
        if self._is_trusted:
            if self._is_reachable:
                self._init_capabilities()
        else:
            self._clear_capabilities()
        print_and_log(f"[*] {self._name} trusted: {self._is_trusted}", LOG__DEBUG)
        self.events.emit("onTrustedChanged", self._is_trusted)

    def _on_pairing_requests_changed(self, has_requests: bool) -> None:
        if not has_requests:
            return
        request = PairingRequest(self, self._bus)
        try:
            request.setup()
        except Exception as e:
            print_and_log(f"[-] {self.id}: could not set up pairing request: {e}", LOG__DEBUG)
            return
        print_and_log(f"[*] Pairing request from {self._name} ({self.id})", LOG__DEBUG)
        self.events.emit("onPairingRequest", request)

    def _on_name_changed(self, name: str) -> None:
        self._name = name
        self.events.emit("onNameChanged", name)

    def _on_type_changed(self, device_type: str) -> None:
        self._type = device_type
        self.events.emit("onTypeChanged", device_type)

    def _on_battery_changed(self, battery: Battery) -> None:
        self.events.emit("onBatteryChanged", battery)

    def _on_connectivity_changed(self, connectivity: Connectivity) -> None:
        self.events.emit("onConnectivityChanged", connectivity)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def get_notifications(self) -> List[Notification]:
        """Return the phone's active notifications, each fully loaded."""
        check_setup(self)
        interface = self._get_interface(config.NOTIFICATIONS_INTERFACE, config.NOTIFICATIONS_PATH)
        ids = interface.activeNotifications()
        return [Notification(self, notification_id, self._bus) for notification_id in ids]

    def share_file(self, path_to_file: Union[str, Path]):
        """Share a local file by sending its absolute ``file://`` URL."""
        check_setup(self)
        return self.share_url(Path(path_to_file).resolve().as_uri())

    def __repr__(self) -> str:
        return (
            f"<Device {self.id} name={self._name!r} type={self._type!r} "
            f"reachable={self._is_reachable} trusted={self._is_trusted}>"
        )
