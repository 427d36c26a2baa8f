from __future__ import annotations

import logging
import os
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DATE_FORMAT = "%H:%M:%S"

# raw hub commands and replies are logged here at DEBUG
WIRE_LOGGER = "neosmart.bridge.client"
WIRE_ENV_VAR = "NEOSMART_WIRE_LOG"


def setup_logging(level: LogLevel | str | None = None, wire: bool | None = None) -> None:
    """Install coloredlogs; hub traffic stays hidden unless ``wire`` is set."""
    resolved = (level or os.environ.get("LOGLEVEL", "INFO")).upper()
    if wire is None:
        wire = os.environ.get(WIRE_ENV_VAR, "") not in ("", "0")

    coloredlogs.install(level=resolved, fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    # INFO replies list every zone, far too chatty for plain DEBUG
    logging.getLogger(WIRE_LOGGER).setLevel(logging.DEBUG if wire else logging.INFO)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
