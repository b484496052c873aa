from __future__ import annotations

import logging
from copy import copy, deepcopy
from typing import Any
from urllib.parse import unquote

from rich.console import Console
from rich.logging import RichHandler
from uvicorn.config import LOGGING_CONFIG
from uvicorn.logging import AccessFormatter as UvicornAccessFormatter

PACKAGE_LOGGER = "kashi"


def configure_logging(debug: bool = False) -> logging.Logger:
    """Attach a single stderr RichHandler to the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


class Utf8AccessFormatter(UvicornAccessFormatter):
    """Access log formatter that shows percent-encoded lyric query strings as UTF-8."""

    def formatMessage(self, record):  # type: ignore[override]
        args = record.args
        if not isinstance(args, tuple) or len(args) != 5 or not isinstance(args[2], str):
            return super().formatMessage(record)
        decoded = copy(record)
        decoded.args = args[:2] + (unquote(args[2], encoding="utf-8", errors="replace"),) + args[3:]
        return super().formatMessage(decoded)


def build_uvicorn_log_config(debug: bool = False) -> dict[str, Any]:
    """
    Build the dictConfig passed to ``uvicorn.run``.

    Access lines go through :class:`Utf8AccessFormatter`, and the ``kashi``
    logger is attached to uvicorn's default stderr handler so conversion
    warnings show up next to the request log.
    """
    config = deepcopy(LOGGING_CONFIG)
    access = config.get("formatters", {}).get("access")
    if isinstance(access, dict):
        access["()"] = f"{__name__}.Utf8AccessFormatter"
    config.setdefault("loggers", {})[PACKAGE_LOGGER] = {
        "handlers": ["default"],
        "level": "DEBUG" if debug else "INFO",
        "propagate": False,
    }
    return config
