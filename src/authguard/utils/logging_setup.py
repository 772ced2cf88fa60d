"""Logging configuration for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send authguard log records to stderr through Rich."""
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True), show_path=False, rich_tracebacks=verbose
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("authguard")
    root.handlers[:] = [handler]
    root.setLevel(level)
