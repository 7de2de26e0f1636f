"""CLI principal (Typer).

Comandos genéricos (`get`, `post`, `put`, `patch`, `delete`) sobre la fachada
`ApiClient`, más el sub-comando `patients` y `doctor`.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console

from adapters.api_client import ApiClient
from adapters.clinic_api import PatientsService
from adapters.request_builder import ABSENT
from cli import doctor
from cli.ui_components import (
    RichBusySurface,
    build_json_panel,
    build_patients_table,
    build_response_table,
)
from core.config import AppSettings
from core.domain.models import Patient
from core.errors import ApiClientError
from core.logging_setup import configure_logging
from core.services.busy_signal import BusySignalCoordinator

app = typer.Typer(no_args_is_help=True, help="HealthClinic JSON API client.")
patients_app = typer.Typer(no_args_is_help=True, help="Patients endpoint.")
app.add_typer(patients_app, name="patients")
app.add_typer(doctor.app, name="doctor")

_console = Console()

A = TypeVar("A", bound=ApiClient)
R = TypeVar("R")


def _open(cls: type[A], settings: AppSettings) -> A:
    """Instancia un servicio con el spinner de Rich como superficie busy."""

    return cls(settings, busy=BusySignalCoordinator(RichBusySurface(_console)))


def _call(cls: type[A], action: Callable[[A], Awaitable[R]]) -> R:
    settings = AppSettings()
    configure_logging(settings.log_level)

    async def runner() -> R:
        service = _open(cls, settings)
        try:
            return await action(service)
        finally:
            await service.aclose()

    try:
        return asyncio.run(runner())
    except ApiClientError as exc:
        _console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _load_body(data: Optional[str], file: Optional[Path]) -> Any:
    if data is not None and file is not None:
        raise typer.BadParameter("use either --data or --file, not both")
    if file is not None:
        return file.read_bytes()
    if data is not None:
        try:
            return json.loads(data)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"--data is not valid JSON: {exc}") from exc
    return ABSENT


def _show_raw(response: Any) -> None:
    _console.print(build_response_table(response))
    if response.content:
        try:
            _console.print(build_json_panel(response.json()))
        except ValueError:
            _console.print(response.text)


_NO_BODY_PARAM = object()


def _send(verb: str, url: str, body: Any, raw: bool) -> None:
    if raw:
        response = _call(ApiClient, lambda api: getattr(api, f"{verb}_raw")(url, *_args(body)))
        _show_raw(response)
        return
    value = _call(ApiClient, lambda api: getattr(api, f"{verb}_json")(url, *_args(body), Any))
    _console.print(build_json_panel(value))


def _args(body: Any) -> tuple[Any, ...]:
    return () if body is _NO_BODY_PARAM else (body,)


_DATA_OPTION = typer.Option(None, "--data", "-d", help="JSON body.")
_FILE_OPTION = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Send file as binary body.")
_RAW_OPTION = typer.Option(False, "--raw", help="Show status and headers instead of decoding.")


@app.command()
def get(url: str, raw: bool = _RAW_OPTION) -> None:
    """GET a URL (absolute or relative to the configured base URL)."""

    _send("get", url, _NO_BODY_PARAM, raw)


@app.command()
def post(
    url: str,
    data: Optional[str] = _DATA_OPTION,
    file: Optional[Path] = _FILE_OPTION,
    raw: bool = _RAW_OPTION,
) -> None:
    """POST a JSON or binary body."""

    _send("post", url, _load_body(data, file), raw)


@app.command()
def put(
    url: str,
    data: Optional[str] = _DATA_OPTION,
    file: Optional[Path] = _FILE_OPTION,
    raw: bool = _RAW_OPTION,
) -> None:
    """PUT a JSON or binary body."""

    _send("put", url, _load_body(data, file), raw)


@app.command()
def patch(
    url: str,
    data: Optional[str] = _DATA_OPTION,
    file: Optional[Path] = _FILE_OPTION,
    raw: bool = _RAW_OPTION,
) -> None:
    """PATCH a JSON or binary body."""

    _send("patch", url, _load_body(data, file), raw)


@app.command()
def delete(url: str, raw: bool = _RAW_OPTION) -> None:
    """DELETE a URL."""

    _send("delete", url, _NO_BODY_PARAM, raw)


@patients_app.command("list")
def list_patients() -> None:
    """List all patients."""

    patients = _call(PatientsService, lambda api: api.list_patients())
    _console.print(build_patients_table(patients))


@patients_app.command("show")
def show_patient(patient_id: int) -> None:
    """Show one patient."""

    patient = _call(PatientsService, lambda api: api.get_patient(patient_id))
    _console.print(build_json_panel(patient.model_dump(mode="json", by_alias=True), title="Patient"))


@patients_app.command("create")
def create_patient(
    name: str = typer.Option(..., "--name", help="Full name."),
    email: Optional[str] = typer.Option(None, "--email"),
    phone: Optional[str] = typer.Option(None, "--phone"),
) -> None:
    """Create a patient and print the stored record."""

    patient = Patient(name=name, email=email, phone=phone)
    created = _call(PatientsService, lambda api: api.create_patient(patient))
    _console.print(build_patients_table([created]))


@patients_app.command("delete")
def delete_patient(patient_id: int) -> None:
    """Delete a patient."""

    response = _call(PatientsService, lambda api: api.delete_patient(patient_id))
    _console.print(f"DELETE /patients/{patient_id} -> {response.status_code}")


def run() -> None:
    app()
