"""Named-event observer registry used by devices and media handlers."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from kdeconnect.core.log import print_and_log, LOG__DEBUG

__all__ = ["EventEmitter"]


class EventEmitter:
    """Minimal ``on``/``off``/``emit`` registry keyed by event name.

    Handlers run synchronously, in registration order, on the thread that
    calls :meth:`emit` (the GLib main loop for D-Bus signals).  A failing
    handler is logged and skipped so the remaining handlers still run.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}
        self._once: Dict[str, List[Callable]] = {}

    def on(self, event: str, handler: Callable) -> Callable:
        """Register *handler* for *event* and return it (usable as a decorator)."""
        self._listeners.setdefault(event, []).append(handler)
        return handler

    def once(self, event: str, handler: Callable) -> Callable:
        """Register *handler* to run on the next *event* only."""
        self.on(event, handler)
        self._once.setdefault(event, []).append(handler)
        return handler

    def off(self, event: str, handler: Callable) -> None:
        """Remove one registration of *handler*; unknown handlers are ignored."""
        handlers = self._listeners.get(event)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        pending = self._once.get(event)
        if pending and handler in pending:
            pending.remove(handler)
        if not handlers:
            del self._listeners[event]

    def remove_all_listeners(self, event: Optional[str] = None) -> None:
        if event is None:
            self._listeners.clear()
            self._once.clear()
        else:
            self._listeners.pop(event, None)
            self._once.pop(event, None)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def emit(self, event: str, *args: Any) -> bool:
        """Call every handler of *event* with *args*.

        Returns
        -------
        bool
            True if at least one handler was registered.
        """
        handlers = list(self._listeners.get(event, ()))
        for handler in handlers:
            if handler in self._once.get(event, ()):
                self.off(event, handler)
            try:
                handler(*args)
            except Exception as e:
                print_and_log(f"[ERROR] {event} handler {handler!r} failed: {e}", LOG__DEBUG)
        return bool(handlers)
