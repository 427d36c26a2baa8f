from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from packaging.version import InvalidVersion, Version

from neosmart.bridge import BridgeClient
from neosmart.config import DriverConfig
from neosmart.models import DeviceData

from .polling import PollingTask

logger = logging.getLogger(__name__)

RE_PAIR_NEEDED = "re_pair_needed"

ClientFactory = Callable[[str], BridgeClient]
PollCallback = Callable[[DeviceData], Awaitable[None]]


@dataclass
class DeviceState:
    target_temperature: float | None = None
    measure_temperature: float | None = None


@dataclass
class DeviceRecord:
    data: DeviceData
    poller: PollingTask
    name: str | None = None
    state: DeviceState = field(default_factory=DeviceState)
    unavailable_reason: str | None = None
    _issued: int = field(default=0, repr=False)
    _applied: int = field(default=0, repr=False)

    @property
    def id(self) -> str:
        return self.data.id

    def next_sequence(self) -> int:
        self._issued += 1
        return self._issued

    def accept(self, sequence: int) -> bool:
        """Mark ``sequence`` as applied unless a newer response already was."""
        if sequence <= self._applied:
            return False
        self._applied = sequence
        return True


def needs_re_pair(paired_version: str | None, minimum: str) -> bool:
    if paired_version is None:
        return True
    try:
        return Version(paired_version) < Version(minimum)
    except InvalidVersion:
        logger.warning("Unparseable pairing version %r", paired_version)
        return True


class DeviceRegistry:
    """Devices known to the driver and the single hub client they share."""

    def __init__(
        self,
        config: DriverConfig,
        client_factory: ClientFactory,
        on_poll: PollCallback,
    ) -> None:
        self._config = config
        self._client_factory = client_factory
        self._on_poll = on_poll
        self._records: dict[str, DeviceRecord] = {}
        self._bridge: BridgeClient | None = None
        self._bridge_ip: str | None = None

    @property
    def bridge(self) -> BridgeClient | None:
        return self._bridge

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._records

    def add(self, data: DeviceData) -> DeviceRecord:
        existing = self._records.get(data.id)
        if existing is not None:
            logger.debug("Device %s already registered", data.id)
            return existing

        self._ensure_bridge(data)

        poller = PollingTask(
            data.id, self._config.poll_interval, lambda: self._on_poll(data)
        )
        record = DeviceRecord(data=data, poller=poller)
        if needs_re_pair(data.paired_with_app_version, self._config.min_paired_version):
            record.unavailable_reason = RE_PAIR_NEEDED

        self._records[data.id] = record
        poller.start()
        logger.info("Registered device %s", data.id)
        return record

    def lookup(self, device_id: str) -> DeviceRecord | None:
        return self._records.get(device_id)

    async def remove(self, device_id: str) -> bool:
        record = self._records.get(device_id)
        if record is None:
            return False
        # stop polling before the record goes away
        await record.poller.stop()
        self._records.pop(device_id, None)
        logger.info("Removed device %s", device_id)
        return True

    async def close(self) -> None:
        for device_id in list(self._records):
            await self.remove(device_id)

    def _ensure_bridge(self, data: DeviceData) -> None:
        if self._bridge is None:
            if not data.bridge_ip:
                logger.warning("Device %s has no hub address", data.id)
                return
            self._bridge = self._client_factory(data.bridge_ip)
            self._bridge_ip = data.bridge_ip
            logger.info("Using neoHub at %s", data.bridge_ip)
        elif data.bridge_ip and data.bridge_ip != self._bridge_ip:
            logger.warning(
                "Device %s belongs to hub %s but the driver talks to %s only",
                data.id,
                data.bridge_ip,
                self._bridge_ip,
            )
