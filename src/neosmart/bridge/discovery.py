"""Locate a neoHub on the LAN with the ``hubseek`` UDP broadcast."""

from __future__ import annotations

import asyncio
import json
import logging

from neosmart.config import BridgeConfig
from neosmart.models import DiscoveredHub, HubInfo

from .client import NeoHubClient

logger = logging.getLogger(__name__)

HUBSEEK = b"hubseek"


def _host_from_reply(data: bytes, sender: str) -> str:
    try:
        payload = json.loads(data.decode("utf-8", errors="replace"))
    except json.JSONDecodeError:
        return sender
    if isinstance(payload, dict) and payload.get("ip"):
        return str(payload["ip"])
    return sender


class HubSeekProtocol(asyncio.DatagramProtocol):
    def __init__(self, found: asyncio.Future[str]) -> None:
        self._found = found

    def datagram_received(self, data: bytes, addr: tuple[str, int]) -> None:
        # our own broadcast can loop back
        if data == HUBSEEK or self._found.done():
            return
        host = _host_from_reply(data, addr[0])
        logger.debug("Hub answered hubseek from %s (ip=%s)", addr[0], host)
        self._found.set_result(host)

    def error_received(self, exc: Exception) -> None:
        logger.debug("hubseek socket error: %s", exc)


async def seek_hub(config: BridgeConfig) -> str:
    """Broadcast until a hub answers and return its address; never times out."""
    loop = asyncio.get_running_loop()
    found: asyncio.Future[str] = loop.create_future()
    transport, _ = await loop.create_datagram_endpoint(
        lambda: HubSeekProtocol(found),
        local_addr=("0.0.0.0", 0),
        allow_broadcast=True,
    )
    try:
        target = (config.broadcast_address, config.discovery_port)
        while True:
            transport.sendto(HUBSEEK, target)
            try:
                return await asyncio.wait_for(asyncio.shield(found), 2.0)
            except (asyncio.TimeoutError, TimeoutError):
                logger.debug("No hubseek reply yet, broadcasting again")
    finally:
        transport.close()


async def discover_hub(config: BridgeConfig) -> DiscoveredHub:
    host = await seek_hub(config)
    client = NeoHubClient(host, port=config.port, timeout=config.timeout)
    info = HubInfo.model_validate(await client.info())
    devices = info.hub_devices()
    logger.info("Found neoHub at %s with %d device(s)", host, len(devices))
    return DiscoveredHub(host=host, port=config.port, devices=devices)
