"""Logging bootstrap.

Configures the root logger so every ``logging.getLogger(__name__)`` call
in btw emits either:

* **JSON lines** (``json_output=True``): machine-parseable, one object
  per record.
* **Human-readable** (``json_output=False``, default): timestamp-prefixed
  lines on stderr, for interactive use.

Library code only creates loggers; ``setup_logging`` is called by the CLI.
"""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from btw.configs.system import LoggingConfig

_DEV_FORMAT = "%(levelname)-8s %(asctime)s %(name)s  %(message)s"
_DEV_DATEFMT = "%H:%M:%S"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure the root logger (call once at startup)."""
    if config is None:
        config = LoggingConfig()

    root = logging.getLogger()
    root.setLevel(config.level.upper())

    handler = logging.StreamHandler(sys.stderr)

    if config.json_output:
        formatter: logging.Formatter = JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
        )
    else:
        formatter = logging.Formatter(fmt=_DEV_FORMAT, datefmt=_DEV_DATEFMT)

    handler.setFormatter(formatter)
    root.handlers = [handler]

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
