"""Phone notifications mirrored by the KDE Connect ``notifications`` plugin."""

from __future__ import annotations

from kdeconnect.core import config
from kdeconnect.core.guards import check_setup
from kdeconnect.core.log import print_and_log, LOG__DEBUG
from kdeconnect.dbuslayer.base import KDEConnectObject

__all__ = ["Notification"]


class Notification(KDEConnectObject):
    """Read-only snapshot of one notification.

    The properties are loaded once by the constructor; afterwards the
    instance is frozen and attribute assignment raises ``AttributeError``.
    """

    def __init__(self, device, notification_id, bus=None):
        super().__init__(device.id, f"{config.NOTIFICATIONS_PATH}/{notification_id}", bus)
        self.device = device
        self.notification_id = str(notification_id)
        self.notification_data_loaded = False
        self._frozen = False
        self._retrieve_data()

    def _retrieve_data(self) -> None:
        props = self._get_properties(config.NOTIFICATION_INTERFACE)
        self.app_name = props.get("appName", "")
        self.dismissable = bool(props.get("dismissable", False))
        self.has_icon = bool(props.get("hasIcon", False))
        self.silent = bool(props.get("silent", False))
        self.text = props.get("text", "")
        self.ticker = props.get("ticker", "")
        self.title = props.get("title", "")
        self.notification_data_loaded = True
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"Notification {self.notification_id} is read-only ({name})")
        super().__setattr__(name, value)

    def dismiss(self) -> bool:
        """Dismiss the notification on the phone.

        Returns False, without calling the daemon, when the notification is not
        dismissable.
        """
        if not self.dismissable:
            return False

        check_setup(self.device)
        self._get_interface(config.NOTIFICATION_INTERFACE).dismiss()
        print_and_log(f"[+] Dismissed notification {self.notification_id} on {self.device.id}", LOG__DEBUG)
        return True

    def __repr__(self) -> str:
        return f"<Notification {self.notification_id} {self.app_name!r}: {self.title!r}>"
