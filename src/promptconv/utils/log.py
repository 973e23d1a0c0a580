"""Logging setup for the CLI.

Library code only creates module loggers (``logging.getLogger(__name__)``);
handlers are attached here, once, by the CLI entrypoint.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_PACKAGE_LOGGER = "promptconv"


def configure_logging(level: str = "WARNING") -> None:
    """Send ``promptconv`` log records at *level* or above to stderr via rich."""
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(level.upper())
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
