"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from core.domain.models import Outcome


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Solo en modo interactivo; con `--json` no se imprime nada extra.
    """

    title = Text("mailcapture", style="bold cyan")
    subtitle = Text("Newsletter signup", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_outcome_panel(outcome: Outcome) -> Panel:
    """Panel para presentar un `Outcome` (verde si ok, rojo si no)."""

    style = "green" if outcome.ok else "red"
    title = Text("Subscribed" if outcome.ok else "Error", style=f"bold {style}")
    body = Text(outcome.message)
    body.append(f"\n\nid: {outcome.id}", style="dim")
    return Panel(body, title=title, border_style=style)
