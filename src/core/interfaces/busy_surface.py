"""Contrato de la superficie de UI que muestra actividad de red."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class BusySurface(Protocol):
    """Indicador on/off de "hay al menos una petición en vuelo".

    Reglas de diseño:
    - Se puede invocar desde un contexto que no es el de la UI.
    - La implementación despacha por su cuenta al contexto dueño del estado visual.
    """

    def set_busy(self, busy: bool) -> None:
        ...
