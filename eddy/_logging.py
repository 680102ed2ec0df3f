"""Konfiguracja logowania CLI (RichHandler na stderr)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str) -> None:
    """Jednorazowa konfiguracja głównego loggera; wywoływana tylko z CLI."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
