"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.rest_resource import HttpEntityResource
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.resources_loader import load_seed_entities

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_resource(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with HttpEntityResource(settings) as resource:
            entities = await resource.list_all()
        return True, f"{len(entities)} records"
    except Exception as exc:
        return False, str(exc)


def _check_seed(settings: AppSettings) -> tuple[bool, str]:
    if settings.seed_path is None:
        return True, "not set (built-in sample records)"
    try:
        return True, f"{len(load_seed_entities(settings.seed_path))} records"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="recordsync doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("Collection", "OK", settings.collection)
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    ok_seed, detail_seed = _check_seed(settings)
    table.add_row("Seed file", "OK" if ok_seed else "FAIL", detail_seed)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_resource(settings))
    table.add_row("Resource", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] Every command accepts `--memory` to work against the in-memory resource."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores the API location in the user config .env)."""

    settings = AppSettings()
    base_url = typer.prompt("API base URL", default=settings.api_base_url, show_default=True).strip()
    collection = typer.prompt("Collection", default=settings.collection, show_default=True).strip()

    if not base_url or not collection:
        raise typer.BadParameter("base_url and collection are required")

    env_path = write_user_env_vars(
        {
            "RECORDSYNC_API_BASE_URL": base_url,
            "RECORDSYNC_COLLECTION": collection,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
