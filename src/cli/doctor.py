"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.kv_store import KvRestListStore
from core.config import AppSettings, StoreConfig, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_store(config: StoreConfig) -> tuple[bool, str]:
    try:
        values = await KvRestListStore(config).get(config.key)
    except Exception as exc:
        return False, str(exc)
    if values is None:
        return True, f"Key '{config.key}' not created yet"
    return True, f"{len(values)} subscriber(s) under '{config.key}'"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    config = settings.store_config()

    table = Table(title="mailcapture Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row(
        "KV_REST_API_URL",
        "OK" if settings.kv_rest_api_url else "MISSING",
        settings.kv_rest_api_url or "-",
    )
    table.add_row(
        "KV_REST_API_TOKEN",
        "OK" if settings.kv_rest_api_token else "MISSING",
        "set" if settings.kv_rest_api_token else "-",
    )
    table.add_row("User env file", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    # Connectivity (best-effort)
    if config is None:
        table.add_row("Store", "SKIPPED", "Degraded mode: subscribe always fails with 'Missing required setup'")
    else:
        ok_store, detail_store = asyncio.run(_check_store(config))
        table.add_row("Store", "OK" if ok_store else "FAIL", detail_store)

    _console.print(table)

    if config is None:
        _console.print("\n[yellow]Note:[/yellow] Run `mailcapture doctor setup-store` to configure the store.")


@app.command(name="setup-store")
def setup_store() -> None:
    """Interactive store setup (stores config in the user config .env)."""

    url = typer.prompt("KV REST API URL").strip()
    token = typer.prompt("KV REST API token", hide_input=True, confirmation_prompt=False).strip()

    if not url or not token:
        raise typer.BadParameter("url and token are required")

    env_path = write_user_env_vars(
        {
            "KV_REST_API_URL": url,
            "KV_REST_API_TOKEN": token,
        }
    )

    _console.print(f"[green]Saved store config to:[/green] {env_path}")
