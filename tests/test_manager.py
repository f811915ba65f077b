from kdeconnect.dbuslayer.manager import device_ids, find_device, get_device, list_devices


def test_list_devices_returns_set_up_devices(bus):
    bus.add_device("abc123")
    bus.add_device("def456", reachable=False, trusted=False, name="Tablet", device_type="tablet")

    devices = list_devices(bus)

    assert [d.id for d in devices] == ["abc123", "def456"]
    assert all(d.setup_done for d in devices)
    assert devices[0].name == "Phone"
    assert devices[0].battery is not None
    assert devices[1].battery is None


def test_list_devices_filters(bus):
    bus.add_device("abc123")
    bus.add_device("def456", reachable=True, trusted=False)
    bus.add_device("ghi789", reachable=False, trusted=True)

    assert [d.id for d in list_devices(bus, only_reachable=True)] == ["abc123", "def456"]
    assert [d.id for d in list_devices(bus, only_trusted=True)] == ["abc123", "ghi789"]


def test_device_ids_empty(bus):
    assert device_ids(bus) == []
    assert list_devices(bus) == []


def test_get_and_find_device(bus):
    bus.add_device("abc123", name="Phone")
    bus.add_device("def456", name="Tablet")

    assert get_device("def456", bus).name == "Tablet"
    assert find_device("Tablet", bus).id == "def456"
    assert find_device("abc123", bus).name == "Phone"
    assert find_device("nothing", bus) is None
