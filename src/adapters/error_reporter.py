"""Embudo único de errores hacia telemetría.

El reporter solo observa: el llamador relanza el mismo error tras `report()`.
"""

from __future__ import annotations

import logging

from core.interfaces.telemetry import TelemetrySink

logger = logging.getLogger(__name__)


class LoggingTelemetrySink(TelemetrySink):
    """Sumidero por defecto: registra el error con su traceback."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logging.getLogger("adapters.telemetry")

    def report(self, error: BaseException, origin: str) -> None:
        self._log.error(
            "%s failed: %s: %s",
            origin,
            type(error).__name__,
            error,
            exc_info=(type(error), error, error.__traceback__),
        )


class ErrorReporter:
    def __init__(self, sink: TelemetrySink | None = None) -> None:
        self._sink = sink if sink is not None else LoggingTelemetrySink()

    @property
    def sink(self) -> TelemetrySink:
        return self._sink

    def report(self, error: BaseException, origin: str) -> None:
        try:
            self._sink.report(error, origin)
        except Exception:
            # Un sumidero roto no debe tapar el error original.
            logger.exception("Telemetry sink %r raised while reporting %s", self._sink, origin)
