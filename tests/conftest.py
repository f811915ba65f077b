"""
Pytest configuration and fixtures for the kdeconnect package.

Provides an in-memory stand-in for :class:`kdeconnect.dbuslayer.bus.KDEConnectBus`
so that the object model can be exercised without a session bus or a running
KDE Connect daemon.
"""

import logging
import sys

import pytest

from kdeconnect.core import config
from kdeconnect.core.log import get_logger


class FakeDBusError(Exception):
    """Plays the part of dbus.exceptions.DBusException in tests."""


class FakeMatch:
    def __init__(self, bus, path, interface, signal_name, handler):
        self.bus = bus
        self.path = path
        self.interface = interface
        self.signal_name = signal_name
        self.handler = handler
        self.removed = False

    def remove(self):
        self.removed = True
        if self in self.bus.matches:
            self.bus.matches.remove(self)


class FakeInterface:
    def __init__(self, bus, path, interface):
        self._bus = bus
        self._path = path
        self._interface = interface

    def __getattr__(self, method):
        if method.startswith("__"):
            raise AttributeError(method)
        bus, path, interface = self._bus, self._path, self._interface

        def remote_method(*args):
            bus.calls.append((path, interface, method, args))
            return bus.results.get((path, interface, method))

        remote_method.__name__ = method
        return remote_method


class FakeBus:
    """Same surface as KDEConnectBus, backed by dictionaries."""

    def __init__(self, service=config.DAEMON_SERVICE, root=config.DAEMON_ROOT):
        self.service = service
        self.root = root
        self.properties = {}
        self.results = {}
        self.nodes = {}
        self.failing = set()
        self.matches = []
        self.calls = []
        self.property_reads = []
        self.before_read = {}

    # KDEConnectBus surface ------------------------------------------------
    @property
    def devices_path(self):
        return f"{self.root}/devices"

    def device_path(self, device_id, sub=""):
        path = f"{self.devices_path}/{device_id}"
        return f"{path}/{sub}" if sub else path

    def get_interface(self, path, interface):
        if (path, interface) in self.failing:
            raise FakeDBusError(f"No such interface {interface} at {path}")
        return FakeInterface(self, path, interface)

    def get_properties(self, path, interface):
        self.property_reads.append((path, interface))
        hook = self.before_read.pop((path, interface), None)
        if hook is not None:
            hook()
        if (path, interface) in self.failing or (path, interface) not in self.properties:
            raise FakeDBusError(f"No such interface {interface} at {path}")
        return dict(self.properties[(path, interface)])

    def connect_signal(self, path, interface, signal_name, handler):
        match = FakeMatch(self, path, interface, signal_name, handler)
        self.matches.append(match)
        return match

    def child_nodes(self, path):
        return list(self.nodes.get(path, []))

    # Test helpers -----------------------------------------------------------
    def emit(self, path, interface, signal_name, *args):
        for match in list(self.matches):
            if (match.path, match.interface, match.signal_name) == (path, interface, signal_name):
                match.handler(*args)

    def emit_device(self, device_id, signal_name, *args):
        self.emit(self.device_path(device_id), config.DEVICE_INTERFACE, signal_name, *args)

    def subscriptions(self, path, interface, signal_name):
        return [
            m for m in self.matches
            if (m.path, m.interface, m.signal_name) == (path, interface, signal_name)
        ]

    def calls_to(self, method):
        return [c for c in self.calls if c[2] == method]

    def add_device(self, device_id="abc123", reachable=True, trusted=True, name="Phone",
                   device_type="phone", **extra):
        path = self.device_path(device_id)
        self.nodes.setdefault(self.devices_path, []).append(device_id)
        props = {"isReachable": reachable, "isTrusted": trusted, "name": name, "type": device_type}
        props.update(extra)
        self.properties[(path, config.DEVICE_INTERFACE)] = props
        self.properties[(self.device_path(device_id, config.BATTERY_PATH), config.BATTERY_INTERFACE)] = {
            "charge": 80,
            "isCharging": False,
        }
        self.properties[(self.device_path(device_id, config.CONNECTIVITY_PATH), config.CONNECTIVITY_INTERFACE)] = {
            "cellularNetworkType": "LTE",
            "cellularNetworkStrength": 3,
        }
        self.properties[(self.device_path(device_id, config.MPRIS_REMOTE_PATH), config.MPRIS_REMOTE_INTERFACE)] = {
            "volume": 50,
            "length": 180000,
            "isPlaying": True,
            "position": 1000,
            "player": "Spotify",
            "nowPlaying": "Artist - Song",
            "title": "Song",
            "artist": "Artist",
            "album": "Album",
            "canSeek": True,
        }
        return path

    def add_notification(self, device_id, notification_id, dismissable=True, **props):
        path = self.device_path(device_id, f"{config.NOTIFICATIONS_PATH}/{notification_id}")
        data = {
            "appName": "Messages",
            "dismissable": dismissable,
            "hasIcon": False,
            "silent": False,
            "text": f"text {notification_id}",
            "ticker": f"ticker {notification_id}",
            "title": f"title {notification_id}",
        }
        data.update(props)
        self.properties[(path, config.NOTIFICATION_INTERFACE)] = data
        active_key = (
            self.device_path(device_id, config.NOTIFICATIONS_PATH),
            config.NOTIFICATIONS_INTERFACE,
            "activeNotifications",
        )
        self.results.setdefault(active_key, []).append(str(notification_id))
        return path


@pytest.fixture
def bus():
    return FakeBus()


@pytest.fixture
def device_factory(bus):
    from kdeconnect.dbuslayer.device import Device

    def factory(device_id="abc123", setup=True, **props):
        bus.add_device(device_id, **props)
        device = Device(device_id, bus)
        if setup:
            device.setup()
        return device

    return factory


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Send package log records to stdout so failing tests show them."""
    formatter = logging.Formatter(fmt="%(levelname)-8s %(message)s - %(funcName)s:%(lineno)d ")
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)
    logger = get_logger()
    logger.addHandler(handler)
    yield
    logger.removeHandler(handler)
