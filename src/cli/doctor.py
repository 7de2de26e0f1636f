"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.api_client import ApiClient
from adapters.error_reporter import ErrorReporter
from cli.ui_components import print_banner
from core.config import AppSettings, write_user_env_vars
from core.errors import ApiClientError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


class _SilentSink:
    def report(self, error: BaseException, origin: str) -> None:
        pass


def _open(settings: AppSettings) -> ApiClient:
    # Los fallos se muestran en la tabla; no hace falta volcarlos al log.
    return ApiClient(settings, reporter=ErrorReporter(_SilentSink()))


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    async with _open(settings) as api:
        try:
            response = await api.get_raw(settings.api_base_url)
        except ApiClientError as exc:
            return False, str(exc)
    return True, f"HTTP {response.status_code}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="HealthClinic Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Log level", "OK", settings.log_level)

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] Run `healthclinic doctor configure` to point the client at another API."
        )


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    current = AppSettings()
    base_url = typer.prompt("API base URL", default=current.api_base_url, show_default=True).strip()
    timeout = typer.prompt(
        "HTTP timeout (seconds)",
        default=current.http_timeout_seconds,
        type=float,
        show_default=True,
    )

    if not base_url:
        raise typer.BadParameter("base_url is required")
    if timeout <= 0:
        raise typer.BadParameter("timeout must be greater than 0")

    env_path = write_user_env_vars(
        {
            "HEALTHCLINIC_API_BASE_URL": base_url,
            "HEALTHCLINIC_HTTP_TIMEOUT_SECONDS": f"{timeout:g}",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
