"""Client for the neoHub JSON API (TCP, NUL-terminated JSON messages)."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

from neosmart.errors import BridgeError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 4242
TERMINATOR = b"\x00"
# INFO replies from hubs with many zones exceed the 64 KiB stream default
READ_LIMIT = 1024 * 1024


class BridgeClient(Protocol):
    async def info(self) -> dict[str, Any]: ...

    async def set_temperature(self, temperature: int, device_name: str) -> None: ...


def encode_command(command: dict[str, Any]) -> bytes:
    return json.dumps(command).encode("utf-8") + TERMINATOR


def decode_response(raw: bytes) -> dict[str, Any]:
    text = raw.rstrip(TERMINATOR).decode("utf-8", errors="replace").strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BridgeError(f"Invalid JSON from hub: {exc}") from exc
    if not isinstance(data, dict):
        raise BridgeError(f"Unexpected hub response: {text[:80]!r}")
    return data


class NeoHubClient:
    """One short-lived connection per command, as the hub expects."""

    def __init__(
        self, host: str, port: int = DEFAULT_PORT, timeout: float = 5.0
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"NeoHubClient({self.host!r}, port={self.port})"

    async def command(self, command: dict[str, Any]) -> dict[str, Any]:
        logger.debug("-> %s:%d %s", self.host, self.port, command)
        try:
            return await asyncio.wait_for(self._roundtrip(command), self.timeout)
        except (asyncio.TimeoutError, TimeoutError) as exc:
            raise BridgeError(
                f"No response from hub {self.host}:{self.port} (timeout)"
            ) from exc
        except (
            ConnectionError,
            OSError,
            asyncio.IncompleteReadError,
            asyncio.LimitOverrunError,
        ) as exc:
            raise BridgeError(
                f"Failed to talk to hub {self.host}:{self.port}: {exc}"
            ) from exc

    async def _roundtrip(self, command: dict[str, Any]) -> dict[str, Any]:
        reader, writer = await asyncio.open_connection(
            self.host, self.port, limit=READ_LIMIT
        )
        try:
            writer.write(encode_command(command))
            await writer.drain()
            raw = await reader.readuntil(TERMINATOR)
        finally:
            writer.close()
            await writer.wait_closed()
        response = decode_response(raw)
        logger.debug("<- %s:%d %s", self.host, self.port, response)
        return response

    async def info(self) -> dict[str, Any]:
        return await self.command({"INFO": 0})

    async def set_temperature(self, temperature: int, device_name: str) -> None:
        response = await self.command({"SET_TEMP": [temperature, device_name]})
        if "error" in response:
            raise BridgeError(str(response["error"]))
