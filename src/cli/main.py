"""CLI de mailcapture (Typer).

Hace de capa de presentación: recoge el candidato, lo valida localmente para
dar feedback inmediato, llama al servicio y renderiza el `Outcome`.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from cli import doctor
from cli.local_state import load_last_email, remember_email
from cli.ui_components import build_outcome_panel, print_banner
from core.config import AppSettings, LogLevel
from core.domain.models import INVALID_EMAIL_MESSAGE, Outcome
from core.domain.validation import validate_email
from core.services.subscription import SubscriptionService

app = typer.Typer(no_args_is_help=True, help="Email capture: validate and store newsletter signups.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.value,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def build_service(settings: AppSettings) -> SubscriptionService:
    return SubscriptionService(settings.store_config())


def _render(outcome: Outcome, *, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(outcome.model_dump(mode="json"), ensure_ascii=False))
    else:
        _console.print(build_outcome_panel(outcome))


@app.callback()
def main(
    log_level: Optional[LogLevel] = typer.Option(
        None, "--log-level", case_sensitive=False, help="Override MAILCAPTURE_LOG_LEVEL."
    ),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        typer.echo(f"Invalid configuration:\n{exc}", err=True)
        raise typer.Exit(code=2) from exc
    _configure_logging(log_level or settings.log_level)


@app.command()
def subscribe(
    email: Optional[str] = typer.Argument(None, help="Address to subscribe (prompted when omitted)."),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
) -> None:
    """Subscribe an email address to the list."""

    if email is None:
        if not as_json:
            print_banner(_console)
        last = load_last_email()
        email = typer.prompt("Email", default=last or "", show_default=bool(last), err=True)

    # Feedback inmediato: no hace falta red para rechazar un email mal formado.
    validation = validate_email(email)
    if not validation.ok:
        outcome = Outcome.failure(validation.reason or INVALID_EMAIL_MESSAGE)
    else:
        service = build_service(AppSettings())
        outcome = asyncio.run(service.subscribe(email))

    _render(outcome, as_json=as_json)

    if not outcome.ok:
        raise typer.Exit(code=1)
    remember_email(email)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
