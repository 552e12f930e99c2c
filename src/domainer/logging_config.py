"""Logging setup for the domainer service and CLI."""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | int = "INFO", fmt: str = DEFAULT_FORMAT) -> None:
    """Configure the ``domainer`` logger hierarchy.

    Safe to call more than once; the handler is only attached the first time.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger("domainer")
    root.setLevel(level)

    if not any(getattr(h, "_domainer", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        handler._domainer = True  # type: ignore[attr-defined]
        root.addHandler(handler)
