"""Precondition guards for device actions.

Two levels exist.  The *basic* guard needs the device to be set up and
reachable; the full guard additionally needs it to be trusted.  The wrappers
re-run the guard on every call, so a callable bound while the device was
usable still refuses to run once it no longer is.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional

from kdeconnect.core.errors import (
    DeviceNotReachableError,
    DeviceNotSetUpError,
    DeviceNotTrustedError,
)

__all__ = [
    "basic_check_setup",
    "check_setup",
    "basic_wrap_check",
    "wrap_check",
]


def basic_check_setup(device) -> None:
    """Raise unless *device* is set up and reachable."""
    if not device.setup_done:
        raise DeviceNotSetUpError(device.id)
    if not device.is_reachable:
        raise DeviceNotReachableError(device.id)


def check_setup(device) -> None:
    """Raise unless *device* is set up, reachable and trusted."""
    basic_check_setup(device)
    if not device.is_trusted:
        raise DeviceNotTrustedError(device.id)


def _wrap(guard: Callable[[Any], None], device, func: Optional[Callable]) -> Callable:
    def guarded(*args, **kwargs):
        guard(device)
        if func is None:
            return None
        return func(*args, **kwargs)

    if func is not None:
        functools.update_wrapper(guarded, func)
    return guarded


def basic_wrap_check(device, func: Optional[Callable] = None) -> Callable:
    """Return *func* behind the basic guard.

    With no *func* the result only runs the guard; it is the placeholder an
    action holds before its remote method is bound.
    """
    return _wrap(basic_check_setup, device, func)


def wrap_check(device, func: Optional[Callable] = None) -> Callable:
    """Return *func* behind the full (trusted) guard."""
    return _wrap(check_setup, device, func)
