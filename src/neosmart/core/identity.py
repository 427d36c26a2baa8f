"""Stable device identities.

The hub exposes no persistent device id, so a device is identified by the
base64 encoding of its name followed by its type code.
"""

from __future__ import annotations

import base64


def generate_device_id(name: str, type_code: str | int) -> str:
    return base64.b64encode(f"{name}{type_code}".encode("utf-8")).decode("ascii")


def decode_device_id(device_id: str) -> str:
    return base64.b64decode(device_id.encode("ascii")).decode("utf-8")
