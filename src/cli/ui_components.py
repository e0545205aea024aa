"""Rich UI components for the CLI.

Why separate components:
- Keeps command logic away from visual details.
- Tables and the notification sink are reused by several commands.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.actions import BaseAction, OperationFailed
from core.domain.models import Entity


def print_banner(console: Console) -> None:
    title = Text("recordsync", style="bold cyan")
    subtitle = Text("Commands • Outcomes • Entity store", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _columns(entities: Sequence[Entity]) -> list[str]:
    columns: list[str] = ["id"]
    for entity in entities:
        for key in entity.model_dump():
            if key not in columns:
                columns.append(key)
    return columns


def build_entities_table(entities: Iterable[Entity], *, title: str = "Entities") -> Table:
    """Table with one row per entity; columns are the union of all fields."""

    rows = list(entities)
    table = Table(title=title)
    columns = _columns(rows)
    for name in columns:
        table.add_column(name, style="cyan" if name == "id" else "white", no_wrap=name == "id")
    for entity in rows:
        data: dict[str, Any] = entity.model_dump()
        table.add_row(*("" if data.get(name) is None else str(data.get(name)) for name in columns))
    return table


def describe_outcome(outcome: BaseAction) -> Text:
    if isinstance(outcome, OperationFailed):
        return Text.assemble((outcome.type.value, "red"), f"  {outcome.reason}")
    return Text(outcome.type.value, style="green")


@dataclass
class ShownNotification:
    message: str
    action: str
    duration_ms: int
    expires_at: float


@dataclass
class RichSnackBar:
    """`NotificationSink` printing one line per notification on a Rich console.

    A terminal cannot take a line back, so "dismissal" is tracked through
    `expires_at`; `active()` lists the ones still on screen.
    """

    console: Console
    shown: list[ShownNotification] = field(default_factory=list)

    def open(self, message: str, action: str, duration_ms: int) -> None:
        style = "bold red" if message.upper().startswith("FAIL") else "bold green"
        self.shown.append(
            ShownNotification(
                message=message,
                action=action,
                duration_ms=duration_ms,
                expires_at=time.monotonic() + duration_ms / 1000,
            )
        )
        self.console.print(
            Text.assemble((f" {message} ", f"{style} reverse"), " ", action, (f"  ({duration_ms} ms)", "dim"))
        )

    def active(self) -> list[ShownNotification]:
        now = time.monotonic()
        return [n for n in self.shown if n.expires_at > now]
