from kdeconnect.core.events import EventEmitter


def test_handlers_run_in_order_with_arguments():
    events = EventEmitter()
    seen = []
    events.on("onNameChanged", lambda v: seen.append(("a", v)))
    events.on("onNameChanged", lambda v: seen.append(("b", v)))

    assert events.emit("onNameChanged", "Phone") is True
    assert seen == [("a", "Phone"), ("b", "Phone")]
    assert events.emit("onTypeChanged", "phone") is False


def test_off_and_once():
    events = EventEmitter()
    seen = []

    def handler(value):
        seen.append(value)

    events.on("e", handler)
    events.once("e", lambda v: seen.append(("once", v)))
    events.emit("e", 1)
    events.off("e", handler)
    events.emit("e", 2)

    assert seen == [1, ("once", 1)]
    assert events.listener_count("e") == 0
    events.off("e", handler)


def test_failing_handler_does_not_stop_delivery():
    events = EventEmitter()
    seen = []

    def broken():
        raise RuntimeError("handler bug")

    events.on("onMediaPlayerUpdated", broken)
    events.on("onMediaPlayerUpdated", lambda: seen.append("ok"))
    events.emit("onMediaPlayerUpdated")
    assert seen == ["ok"]


def test_remove_all_listeners():
    events = EventEmitter()
    events.on("a", print)
    events.on("b", print)
    events.remove_all_listeners("a")
    assert events.listener_count("a") == 0
    assert events.listener_count("b") == 1
    events.remove_all_listeners()
    assert events.listener_count("b") == 0
