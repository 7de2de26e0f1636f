"""Coordinador de la señal "busy" compartida entre peticiones concurrentes.

Reglas:
- Un único contador de peticiones en vuelo por coordinador.
- La UI ve `busy=True` desde el primer `enter()` hasta el último `exit()`,
  sin parpadeos mientras quede al menos una petición pendiente.
- El contador nunca queda por debajo de 0 tras un `exit()`.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from core.interfaces.busy_surface import BusySurface

Dispatch = Callable[[Callable[[bool], None], bool], object]


def _call_now(fn: Callable[[bool], None], value: bool) -> None:
    fn(value)


class BusySignalCoordinator:
    """Contador reentrante de peticiones en vuelo.

    `dispatch` recibe `(surface.set_busy, valor)` y debe entregarlo al contexto
    dueño de la UI sin bloquear; `loop.call_soon_threadsafe` encaja tal cual.
    """

    def __init__(self, surface: BusySurface | None = None, *, dispatch: Dispatch | None = None) -> None:
        self._surface = surface
        self._dispatch = dispatch or _call_now
        self._lock = threading.Lock()
        self._count = 0

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._count

    def enter(self) -> None:
        with self._lock:
            was_idle = self._count == 0
            self._count += 1
            # Notificamos dentro del lock para que True/False no se reordenen.
            if was_idle:
                self._notify(True)

    def exit(self) -> None:
        with self._lock:
            self._count -= 1
            if self._count <= 0:
                self._count = 0
                self._notify(False)

    @contextmanager
    def track(self) -> Iterator[None]:
        """Ámbito de una petición: `exit()` se ejecuta en cualquier salida."""

        self.enter()
        try:
            yield
        finally:
            self.exit()

    def _notify(self, busy: bool) -> None:
        if self._surface is None:
            return
        self._dispatch(self._surface.set_busy, busy)
