"""Contrato del sumidero de telemetría de errores."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TelemetrySink(Protocol):
    """Recibe cada error de transporte/serialización.

    Reglas de diseño:
    - Fire-and-forget: no debe lanzar ni bloquear al llamador.
    - `origin` es el nombre de la operación que falló (p.ej. `get_json`).
    """

    def report(self, error: BaseException, origin: str) -> None:
        ...
