"""Configuración de logging para entry-points (CLI).

Los módulos solo hacen `logging.getLogger(__name__)`; el handler (Rich) se
instala una vez desde la CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGERS = ("adapters", "core", "cli")


def configure_logging(level: str | int = "WARNING", *, console: Console | None = None) -> None:
    """Instala un `RichHandler` en stderr para los loggers del proyecto."""

    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    for name in _ROOT_LOGGERS:
        log = logging.getLogger(name)
        log.handlers[:] = [handler]
        log.setLevel(level)
