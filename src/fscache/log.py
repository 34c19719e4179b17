"""Logging setup for applications embedding fscache."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from fscache.config.schema import CacheConfig

error_console = Console(stderr=True)


def setup_logging(
    verbosity: int = 0,
    level: str | None = None,
    config: CacheConfig | None = None,
) -> None:
    """Configure root logging with a rich stderr handler.

    Precedence: ``level``, then ``config.log_level``, then ``verbosity``
    (0 warning, 1 info, 2+ debug).
    """
    resolved = logging.WARNING
    if verbosity == 1:
        resolved = logging.INFO
    elif verbosity >= 2:
        resolved = logging.DEBUG
    if config is not None:
        resolved = logging.getLevelName(config.log_level)
    if level:
        resolved = logging.getLevelName(level.upper())

    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )
