"""
Core configuration settings for the KDE Connect client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

# Base paths
DATA_DIR = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local/share")) / "kdeconnect"
CONFIG_DIR = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config")) / "kdeconnect"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

# Logging configuration
LOG_DIR = DATA_DIR / "logs"

# Log types
LOG__GENERAL = "GENERAL"
LOG__DEBUG = "DEBUG"
LOG__USER = "USERMODE"

DEFAULT_LOG_LEVEL = "INFO"

## D-Bus Configurations

DAEMON_SERVICE = "org.kde.kdeconnect.daemon"
DAEMON_ROOT = "/modules/kdeconnect"

DBUS_PROPERTIES = "org.freedesktop.DBus.Properties"
INTROSPECT_INTERFACE = "org.freedesktop.DBus.Introspectable"

# Device object and its sub-objects (path suffix relative to the device)
DEVICE_INTERFACE = "org.kde.kdeconnect.device"
BATTERY_INTERFACE = "org.kde.kdeconnect.device.battery"
CONNECTIVITY_INTERFACE = "org.kde.kdeconnect.device.connectivity_report"
FINDMYPHONE_INTERFACE = "org.kde.kdeconnect.device.findmyphone"
PING_INTERFACE = "org.kde.kdeconnect.device.ping"
SHARE_INTERFACE = "org.kde.kdeconnect.device.share"
MPRIS_REMOTE_INTERFACE = "org.kde.kdeconnect.device.mprisremote"
NOTIFICATIONS_INTERFACE = "org.kde.kdeconnect.device.notifications"
NOTIFICATION_INTERFACE = "org.kde.kdeconnect.device.notifications.notification"

BATTERY_PATH = "battery"
CONNECTIVITY_PATH = "connectivity_report"
FINDMYPHONE_PATH = "findmyphone"
PING_PATH = "ping"
SHARE_PATH = "share"
MPRIS_REMOTE_PATH = "mprisremote"
NOTIFICATIONS_PATH = "notifications"

# Default polling interval for media monitors (seconds)
MEDIA_POLL_INTERVAL = 1


@dataclass
class Settings:
    """Effective runtime settings after file and environment overrides."""

    service: str = DAEMON_SERVICE
    root: str = DAEMON_ROOT
    log_level: str = DEFAULT_LOG_LEVEL


_ENV_OVERRIDES = {
    "service": "KDECONNECT_SERVICE",
    "root": "KDECONNECT_ROOT",
    "log_level": "KDECONNECT_LOG_LEVEL",
}


def _read_config_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(data).__name__}")
    return data


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Build :class:`Settings` from defaults, the YAML config file and the environment.

    Parameters
    ----------
    path
        Config file to read instead of ``CONFIG_FILE``.  A missing file is
        not an error; unknown keys are ignored.
    """
    settings = Settings()
    data = _read_config_file(Path(path) if path is not None else CONFIG_FILE)

    for key, env_name in _ENV_OVERRIDES.items():
        value = os.getenv(env_name, data.get(key))
        if value is not None:
            setattr(settings, key, str(value))

    settings.root = settings.root.rstrip("/")
    settings.log_level = settings.log_level.upper()
    return settings
