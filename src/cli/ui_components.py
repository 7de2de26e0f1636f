"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
import threading

import httpx
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text

from core.domain.models import Patient


class RichBusySurface:
    """Spinner de Rich como superficie "busy".

    `Status` refresca en su propio hilo; aquí solo se arranca/para bajo lock,
    así que es seguro llamarlo desde cualquier hilo o tarea.
    """

    def __init__(self, console: Console, message: str = "Waiting for the API...") -> None:
        self._status = Status(message, console=console, spinner="dots")
        self._lock = threading.Lock()
        self._visible = False

    @property
    def visible(self) -> bool:
        return self._visible

    def set_busy(self, busy: bool) -> None:
        with self._lock:
            if busy and not self._visible:
                self._status.start()
                self._visible = True
            elif not busy and self._visible:
                self._status.stop()
                self._visible = False


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("HealthClinic", style="bold cyan")
    subtitle = Text("JSON API client • diagnostics", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_response_table(response: httpx.Response) -> Table:
    """Status + headers de una respuesta cruda."""

    table = Table(title=f"{response.request.method} {response.request.url}")
    table.add_column("Header", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("status", f"{response.status_code} {response.reason_phrase}")
    for name, value in response.headers.items():
        table.add_row(name, value)
    return table


def build_patients_table(patients: list[Patient]) -> Table:
    table = Table(title="Patients")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Email", style="magenta")
    table.add_column("Phone", style="green")
    for p in patients:
        table.add_row(
            "" if p.id is None else str(p.id),
            p.name,
            p.email or "",
            p.phone or "",
        )
    return table


def build_json_panel(value: object, *, title: str = "Response") -> Panel:
    body = json.dumps(value, ensure_ascii=False, indent=2, sort_keys=True, default=str)
    return Panel(Text(body), title=Text(title, style="bold yellow"), border_style="yellow")
