"""Mock neoHub server for development and testing."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from neosmart.errors import BridgeError

from .client import DEFAULT_PORT, TERMINATOR, decode_response

if TYPE_CHECKING:
    from asyncio import StreamReader, StreamWriter

logger = logging.getLogger(__name__)


@dataclass
class MockZone:
    name: str
    device_type: int = 1
    set_temperature: float = 20.0
    current_temperature: float = 19.5

    def to_info(self) -> dict[str, Any]:
        # the real hub sends temperatures as strings
        return {
            "device": self.name,
            "DEVICE_TYPE": self.device_type,
            "CURRENT_SET_TEMPERATURE": f"{self.set_temperature:.1f}",
            "CURRENT_TEMPERATURE": f"{self.current_temperature:.1f}",
        }


def _default_zones() -> list[MockZone]:
    return [
        MockZone("Living Room", set_temperature=21.0, current_temperature=20.4),
        MockZone("Bedroom", set_temperature=18.0, current_temperature=18.7),
    ]


@dataclass
class MockNeoHub:
    """Mock neoHub answering INFO and SET_TEMP."""

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    zones: list[MockZone] = field(default_factory=_default_zones)

    _server: asyncio.Server | None = field(default=None, repr=False)

    @property
    def bound_port(self) -> int:
        if self._server and self._server.sockets:
            return int(self._server.sockets[0].getsockname()[1])
        return self.port

    def zone(self, name: str) -> MockZone | None:
        for zone in self.zones:
            if zone.name == name:
                return zone
        return None

    async def start(self) -> None:
        self._server = await asyncio.start_server(
            self._handle_client, self.host, self.port
        )
        logger.info("Mock neoHub listening on %s:%d", self.host, self.bound_port)

    async def stop(self) -> None:
        if self._server:
            self._server.close()
            await self._server.wait_closed()
            logger.info("Mock neoHub stopped")

    async def run_forever(self) -> None:
        await self.start()
        if self._server:
            await self._server.serve_forever()

    async def _handle_client(
        self, reader: "StreamReader", writer: "StreamWriter"
    ) -> None:
        try:
            raw = await reader.readuntil(TERMINATOR)
            try:
                command = decode_response(raw)
            except BridgeError:
                response: dict[str, Any] = {"error": "invalid json"}
            else:
                response = self.handle_command(command)
            writer.write(json.dumps(response).encode("utf-8") + TERMINATOR)
            await writer.drain()
        except (asyncio.IncompleteReadError, ConnectionResetError, BrokenPipeError):
            logger.debug("Client went away before a full command arrived")
        finally:
            writer.close()
            await writer.wait_closed()

    def handle_command(self, command: dict[str, Any]) -> dict[str, Any]:
        logger.debug("Received command %s", command)
        if "INFO" in command:
            return {"devices": [zone.to_info() for zone in self.zones]}

        if "SET_TEMP" in command:
            args = command["SET_TEMP"]
            if not isinstance(args, list) or len(args) != 2:
                return {"error": "SET_TEMP expects [temperature, device]"}
            temperature, name = args
            zone = self.zone(name)
            if zone is None:
                return {"error": f"Device not found: {name}"}
            zone.set_temperature = float(temperature)
            logger.info("Zone '%s' set to %s", name, temperature)
            return {"result": "temperature was set"}

        return {"error": "unknown command"}


async def run_mock_hub(host: str = "0.0.0.0", port: int = DEFAULT_PORT) -> None:
    hub = MockNeoHub(host=host, port=port)
    await hub.run_forever()
