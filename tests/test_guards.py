"""Tests for the setup / reachable / trusted guards."""

from types import SimpleNamespace

import pytest

from kdeconnect.core.errors import (
    DeviceNotReachableError,
    DeviceNotSetUpError,
    DeviceNotTrustedError,
    KDEConnectError,
)
from kdeconnect.core.guards import basic_check_setup, basic_wrap_check, check_setup, wrap_check


def _device(setup_done=True, is_reachable=True, is_trusted=True):
    return SimpleNamespace(id="abc123", setup_done=setup_done, is_reachable=is_reachable, is_trusted=is_trusted)


def test_basic_guard_order():
    with pytest.raises(DeviceNotSetUpError):
        basic_check_setup(_device(setup_done=False, is_reachable=False))
    with pytest.raises(DeviceNotReachableError):
        basic_check_setup(_device(is_reachable=False, is_trusted=False))
    basic_check_setup(_device(is_trusted=False))


def test_full_guard_requires_trust():
    with pytest.raises(DeviceNotTrustedError) as exc:
        check_setup(_device(is_trusted=False))
    assert exc.value.device_id == "abc123"
    assert isinstance(exc.value, KDEConnectError)
    check_setup(_device())


def test_placeholder_runs_guard_then_returns_none():
    device = _device(setup_done=False)
    placeholder = wrap_check(device)
    with pytest.raises(DeviceNotSetUpError):
        placeholder()

    device.setup_done = True
    assert placeholder("ignored", key="ignored") is None


def test_wrapped_action_forwards_arguments_and_result():
    calls = []

    def action(*args, **kwargs):
        calls.append((args, kwargs))
        return "done"

    guarded = wrap_check(_device(), action)
    assert guarded(1, 2, key="v") == "done"
    assert calls == [((1, 2), {"key": "v"})]


def test_guard_is_checked_at_call_time_not_bind_time():
    device = _device()
    calls = []
    guarded = wrap_check(device, lambda: calls.append(1))
    guarded()

    device.is_trusted = False
    with pytest.raises(DeviceNotTrustedError):
        guarded()
    assert calls == [1]


def test_basic_wrap_ignores_trust():
    device = _device(is_trusted=False)
    calls = []
    basic_wrap_check(device, lambda: calls.append("pair"))()
    assert calls == ["pair"]

    device.is_reachable = False
    with pytest.raises(DeviceNotReachableError):
        basic_wrap_check(device, lambda: calls.append("pair"))()
    assert calls == ["pair"]


def test_remote_errors_propagate_unchanged():
    class Boom(Exception):
        pass

    def failing():
        raise Boom("remote failure")

    with pytest.raises(Boom):
        wrap_check(_device(), failing)()


def test_wrapped_callable_without_function_metadata():
    class RemoteMethod:
        def __call__(self, value):
            return value * 2

    guarded = wrap_check(_device(), RemoteMethod())
    assert guarded(21) == 42


def test_wrapped_action_keeps_name():
    def sendPing(message=""):
        return message

    assert wrap_check(_device(), sendPing).__name__ == "sendPing"
