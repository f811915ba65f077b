"""Remote media-player mirror for the KDE Connect ``mprisremote`` plugin.

The handler keeps a snapshot of the player state that the phone reports
(track, position, volume, ...) and exposes the transport actions.  It follows
its device: whenever the device becomes reachable and trusted again it
re-reads the player, re-subscribes to ``propertiesChanged`` and rebinds the
actions; when the device drops, the device calls :meth:`MediaHandler.clear`.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from kdeconnect.core import config
from kdeconnect.core.events import EventEmitter
from kdeconnect.core.guards import check_setup, wrap_check
from kdeconnect.core.log import print_and_log, LOG__DEBUG
from kdeconnect.dbuslayer.base import KDEConnectObject

__all__ = ["MediaHandler"]

# attribute name -> remote property name
_FIELDS = {
    "volume": "volume",
    "length": "length",
    "is_playing": "isPlaying",
    "position": "position",
    "player": "player",
    "now_playing": "nowPlaying",
    "title": "title",
    "artist": "artist",
    "album": "album",
    "can_seek": "canSeek",
}

# remote action name -> method name
_ACTIONS = {
    "Next": "next",
    "Previous": "previous",
    "Pause": "pause",
    "PlayPause": "play_pause",
    "Stop": "stop",
    "Play": "play",
}


class MediaHandler(KDEConnectObject):
    """Media-player state of one device.

    Events
    ------
    onMediaPlayerUpdated()
        Emitted after every successful :meth:`update` and every :meth:`clear`,
        whether or not any value changed.
    """

    def __init__(self, device, bus=None):
        super().__init__(device.id, config.MPRIS_REMOTE_PATH, bus)
        self.device = device
        self.events = EventEmitter()

        self._state: Dict[str, Any] = dict.fromkeys(_FIELDS)
        self._match = None
        # Bumped by clear(); a refresh started in an older generation is dropped
        self._generation = 0

        self.next: Callable[[], None] = wrap_check(device)
        self.previous: Callable[[], None] = wrap_check(device)
        self.pause: Callable[[], None] = wrap_check(device)
        self.play_pause: Callable[[], None] = wrap_check(device)
        self.stop: Callable[[], None] = wrap_check(device)
        self.play: Callable[[], None] = wrap_check(device)

        device.events.on("onReachableChanged", self._on_device_state)
        device.events.on("onTrustedChanged", self._on_device_state)

        if device.is_reachable and device.is_trusted:
            self._init_safely()

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    @property
    def volume(self) -> Optional[int]:
        return self._state["volume"]

    @property
    def length(self) -> Optional[int]:
        return self._state["length"]

    @property
    def is_playing(self) -> Optional[bool]:
        return self._state["is_playing"]

    @property
    def position(self) -> Optional[int]:
        return self._state["position"]

    @property
    def player(self) -> Optional[str]:
        return self._state["player"]

    @property
    def now_playing(self) -> Optional[str]:
        return self._state["now_playing"]

    @property
    def title(self) -> Optional[str]:
        return self._state["title"]

    @property
    def artist(self) -> Optional[str]:
        return self._state["artist"]

    @property
    def album(self) -> Optional[str]:
        return self._state["album"]

    @property
    def can_seek(self) -> Optional[bool]:
        return self._state["can_seek"]

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._state)

    # ------------------------------------------------------------------
    # Refresh / clear
    # ------------------------------------------------------------------
    def update(self) -> bool:
        """Re-read the remote player and replace every field at once.

        Returns
        -------
        bool
            False if the device was cleared while the read was in flight and
            the result was discarded.
        """
        check_setup(self.device)
        generation = self._generation
        props = self._get_properties(config.MPRIS_REMOTE_INTERFACE)
        if generation != self._generation:
            print_and_log(f"[*] Discarding stale media refresh for {self.device.id}", LOG__DEBUG)
            return False

        self._state = {attr: props.get(remote) for attr, remote in _FIELDS.items()}
        self.events.emit("onMediaPlayerUpdated")
        return True

    def clear(self) -> None:
        """Blank every field and stop following ``propertiesChanged``."""
        self._generation += 1
        self._detach()
        self._state = dict.fromkeys(_FIELDS)
        self.events.emit("onMediaPlayerUpdated")

    def close(self) -> None:
        self._detach()
        self.device.events.off("onReachableChanged", self._on_device_state)
        self.device.events.off("onTrustedChanged", self._on_device_state)

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------
    def _create_run_command(self, interface, action: str) -> Callable[[], None]:
        def run():
            check_setup(self.device)
            return interface.sendAction(action)

        run.__name__ = _ACTIONS[action]
        return run

    def _init(self) -> None:
        if not self.update():
            return

        self._detach()
        interface = self._get_interface(config.MPRIS_REMOTE_INTERFACE)
        self._match = self._connect_signal(
            config.MPRIS_REMOTE_INTERFACE, "propertiesChanged", self._on_properties_changed
        )
        for action, attr in _ACTIONS.items():
            setattr(self, attr, self._create_run_command(interface, action))

    def _init_safely(self) -> None:
        try:
            self._init()
        except Exception as e:
            print_and_log(f"[-] Media player of {self.device.id} unavailable: {e}", LOG__DEBUG)

    def _detach(self) -> None:
        if self._match is not None:
            self._match.remove()
            self._match = None

    def _on_device_state(self, value: bool) -> None:
        if value and self.device.is_reachable and self.device.is_trusted:
            self._init_safely()

    def _on_properties_changed(self, *args) -> None:
        try:
            self.update()
        except Exception as e:
            print_and_log(f"[-] Media refresh of {self.device.id} failed: {e}", LOG__DEBUG)
