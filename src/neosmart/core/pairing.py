from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from pydantic import ValidationError

from neosmart.errors import BridgeError
from neosmart.models import DeviceData, DeviceDescriptor, DiscoveredHub

from .identity import generate_device_id

logger = logging.getLogger(__name__)

Discover = Callable[[], Awaitable[DiscoveredHub]]


class PairingFlow:
    def __init__(self, discover: Discover, timeout: float, app_version: str) -> None:
        self._discover = discover
        self._timeout = timeout
        self._app_version = app_version

    async def list_devices(self) -> list[DeviceDescriptor]:
        """Offer every device of the first hub that answers within the timeout."""
        try:
            hub = await asyncio.wait_for(self._discover(), timeout=self._timeout)
        except (asyncio.TimeoutError, TimeoutError):
            logger.info("No neoHub found within %.0fs", self._timeout)
            return []
        except (BridgeError, ValidationError) as exc:
            logger.warning("neoHub discovery failed: %s", exc)
            return []

        descriptors = []
        for hub_device in hub.devices:
            device_id = generate_device_id(hub_device.name, hub_device.type_code)
            descriptors.append(
                DeviceDescriptor(
                    id=device_id,
                    name=hub_device.name,
                    data=DeviceData(
                        id=device_id,
                        bridge_ip=hub.host,
                        paired_with_app_version=self._app_version,
                    ),
                )
            )
        logger.info("Offering %d device(s) from %s", len(descriptors), hub.host)
        return descriptors
