"""Logging setup for the apkbadge CLI."""

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler

logger = logging.getLogger("apkbadge")


def setup_logging(log_level: str = "WARNING", debug: bool = False) -> None:
    """Configure the apkbadge logger.

    Library code only ever calls ``logging.getLogger(__name__)``; handlers are
    attached here so that importing apkbadge never touches the root logger.

    Args:
        log_level: The logging level to use (e.g. "INFO").
        debug: Whether debug mode is enabled (overrides log_level).
    """
    handler = RichHandler(
        console=RichConsole(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger.setLevel(logging.DEBUG if debug else getattr(logging, log_level.upper()))
    logger.handlers = [handler]
    logger.propagate = False
