from __future__ import annotations

import asyncio

import pytest

from neosmart.config import DriverConfig
from neosmart.core import DeviceRegistry, StateSynchronizer, generate_device_id
from neosmart.errors import BridgeError
from neosmart.models import DeviceData

from conftest import BridgeFactory, FakeBridge, FakeHost, hub_entry

HALL_ID = generate_device_id("Hall", "1")


async def _noop(_data: DeviceData) -> None:
    return None


def _setup(bridge: FakeBridge, host: FakeHost) -> tuple[DeviceRegistry, StateSynchronizer]:
    registry = DeviceRegistry(DriverConfig(), BridgeFactory(bridge), _noop)
    return registry, StateSynchronizer(registry, host)


def _hall() -> DeviceData:
    return DeviceData(id=HALL_ID, bridge_ip="10.0.0.5", paired_with_app_version="1.2.0")


def test_refresh_updates_state_and_notifies(bridge, host):
    bridge.payload = {
        "devices": [hub_entry("Landing", 1, "17.0", "16.0"), hub_entry("Hall", 1, "21.5", "20.46")]
    }

    async def scenario():
        registry, sync = _setup(bridge, host)
        record = registry.add(_hall())
        await sync.refresh(_hall())

        assert record.name == "Hall"
        assert record.state.target_temperature == 21.5
        assert record.state.measure_temperature == 20.5
        assert host.realtime_events == [
            (HALL_ID, "target_temperature", 21.5),
            (HALL_ID, "measure_temperature", 20.5),
        ]
        await registry.close()

    asyncio.run(scenario())


def test_notifications_repeat_for_unchanged_values(bridge, host):
    bridge.payload = {"devices": [hub_entry("Hall", 1, "21.0", "20.0")]}

    async def scenario():
        registry, sync = _setup(bridge, host)
        registry.add(_hall())
        await sync.refresh(_hall())
        await sync.refresh(_hall())
        assert len(host.realtime_events) == 4
        await registry.close()

    asyncio.run(scenario())


def test_measured_temperature_rounds_half_up(bridge, host):
    bridge.payload = {"devices": [hub_entry("Hall", 1, 20.25, 19.75)]}

    async def scenario():
        registry, sync = _setup(bridge, host)
        record = registry.add(_hall())
        await sync.refresh(_hall())
        # set point stays unrounded
        assert record.state.target_temperature == 20.25
        assert record.state.measure_temperature == 19.8
        await registry.close()

    asyncio.run(scenario())


@pytest.mark.parametrize(
    "payload",
    [{}, {"devices": None}, {"devices": "Hall"}, []],
)
def test_malformed_response_is_skipped(bridge, host, payload):
    done: list[bool] = []

    async def scenario():
        registry, sync = _setup(bridge, host)
        record = registry.add(_hall())
        bridge.payload = payload
        await sync.refresh(_hall(), on_done=lambda: done.append(True))

        assert done == [True]
        assert record.state.target_temperature is None
        assert host.realtime_events == []
        await registry.close()

    asyncio.run(scenario())


def test_bad_entry_does_not_block_valid_ones(bridge, host):
    garage = {"device": "Garage Plug", "DEVICE_TYPE": 6, "CURRENT_SET_TEMPERATURE": "21.0"}
    bridge.payload = {"devices": [garage, "junk", hub_entry("Hall", 1, "21.5", "20.4")]}

    async def scenario():
        registry, sync = _setup(bridge, host)
        record = registry.add(_hall())
        await sync.refresh(_hall())

        assert record.state.target_temperature == 21.5
        assert record.state.measure_temperature == 20.4
        assert host.realtime_events == [
            (HALL_ID, "target_temperature", 21.5),
            (HALL_ID, "measure_temperature", 20.4),
        ]
        await registry.close()

    asyncio.run(scenario())


def test_bad_entry_for_refreshed_device_is_skipped(bridge, host):
    bridge.payload = {"devices": [{"device": "Hall", "DEVICE_TYPE": 1}]}

    async def scenario():
        registry, sync = _setup(bridge, host)
        record = registry.add(_hall())
        await sync.refresh(_hall())

        assert record.state.target_temperature is None
        assert host.realtime_events == []
        await registry.close()

    asyncio.run(scenario())


def test_device_missing_from_response_is_untouched(bridge, host):
    bridge.payload = {"devices": [hub_entry("Landing")]}

    async def scenario():
        registry, sync = _setup(bridge, host)
        record = registry.add(_hall())
        record.state.target_temperature = 19.0
        await sync.refresh(_hall())

        assert record.state.target_temperature == 19.0
        assert host.realtime_events == []
        await registry.close()

    asyncio.run(scenario())


def test_other_registered_devices_are_not_updated(bridge, host):
    bridge.payload = {"devices": [hub_entry("Hall"), hub_entry("Landing", 1, "16.0", "15.0")]}
    landing = DeviceData(id=generate_device_id("Landing", "1"), bridge_ip="10.0.0.5")

    async def scenario():
        registry, sync = _setup(bridge, host)
        registry.add(_hall())
        landing_record = registry.add(landing)
        await sync.refresh(_hall())

        assert landing_record.state.target_temperature is None
        assert {event[0] for event in host.realtime_events} == {HALL_ID}
        await registry.close()

    asyncio.run(scenario())


def test_no_bridge_is_a_silent_no_op(host):
    async def scenario():
        bridge = FakeBridge()
        _, sync = _setup(bridge, host)
        await sync.refresh(_hall())
        await sync.refresh(None)
        assert bridge.info_calls == 0

    asyncio.run(scenario())


def test_transport_error_propagates(bridge, host):
    bridge.info_error = "connection refused"

    async def scenario():
        registry, sync = _setup(bridge, host)
        registry.add(_hall())
        with pytest.raises(BridgeError):
            await sync.refresh(_hall())
        await registry.close()

    asyncio.run(scenario())


class _GatedBridge(FakeBridge):
    """Answers INFO requests only when told to, in any order."""

    def __init__(self) -> None:
        super().__init__()
        self.pending: list[asyncio.Future] = []

    async def info(self):
        self.info_calls += 1
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future


def test_device_removed_during_refresh(host):
    async def scenario():
        bridge = _GatedBridge()
        registry, sync = _setup(bridge, host)
        registry.add(_hall())

        refresh = asyncio.create_task(sync.refresh(_hall()))
        await asyncio.sleep(0)
        await registry.remove(HALL_ID)
        bridge.pending[0].set_result({"devices": [hub_entry("Hall")]})
        await refresh

        assert host.realtime_events == []

    asyncio.run(scenario())


def test_stale_response_is_discarded(host):
    async def scenario():
        bridge = _GatedBridge()
        registry, sync = _setup(bridge, host)
        record = registry.add(_hall())

        older = asyncio.create_task(sync.refresh(_hall()))
        await asyncio.sleep(0)
        newer = asyncio.create_task(sync.refresh(_hall()))
        await asyncio.sleep(0)

        bridge.pending[1].set_result({"devices": [hub_entry("Hall", 1, "22.0", "21.0")]})
        await newer
        bridge.pending[0].set_result({"devices": [hub_entry("Hall", 1, "18.0", "17.0")]})
        await older

        assert record.state.target_temperature == 22.0
        assert [event[2] for event in host.realtime_events] == [22.0, 21.0]
        await registry.close()

    asyncio.run(scenario())
