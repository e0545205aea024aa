"""recordsync command line.

Each command builds one store (resource -> effects -> store), wires the
notification fan-out to a Rich snackbar, dispatches commands and prints
the derived view once every outcome has settled.
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import AsyncExitStack
from typing import Any, Callable

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.memory_resource import InMemoryEntityResource
from adapters.rest_resource import HttpEntityResource
from cli import doctor
from cli.ui_components import RichSnackBar, build_entities_table, describe_outcome, print_banner
from core.config import AppSettings
from core.domain.actions import LoadAllSucceeded, Outcome, is_failure
from core.domain.models import EntityId
from core.effects import EntityEffects
from core.interfaces.resource import EntityResource
from core.notifications import NotificationFanOut
from core.resources_loader import load_seed_entities, sample_entities
from core.selectors import select_all
from core.services.store import EntityStore

app = typer.Typer(no_args_is_help=True, help="Keep a local entity store in sync with a remote resource.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

StoreScript = Callable[[EntityStore], None]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def parse_entity_id(value: str) -> EntityId:
    """CLI ids are ints when they look like ints, strings otherwise."""

    value = value.strip()
    if value.lstrip("-").isdigit():
        return int(value)
    return value


def parse_fields(values: list[str]) -> dict[str, Any]:
    """Parse `key=value` pairs; values are JSON when they decode, raw strings otherwise."""

    data: dict[str, Any] = {}
    for raw in values:
        if "=" not in raw:
            raise typer.BadParameter(f"expected key=value, got {raw!r}", param_hint="--field")
        key, value = raw.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"empty key in {raw!r}", param_hint="--field")
        try:
            data[key] = json.loads(value)
        except json.JSONDecodeError:
            data[key] = value
    return data


def _memory_resource(settings: AppSettings) -> InMemoryEntityResource:
    seed = load_seed_entities(settings.seed_path) if settings.seed_path else sample_entities()
    return InMemoryEntityResource(seed)


async def _run(
    script: StoreScript,
    *,
    settings: AppSettings,
    memory: bool,
    resource: EntityResource | None = None,
) -> tuple[EntityStore, list[Outcome]]:
    async with AsyncExitStack() as stack:
        if resource is None:
            if memory:
                resource = _memory_resource(settings)
            else:
                resource = await stack.enter_async_context(HttpEntityResource(settings))

        store = EntityStore(EntityEffects(resource))
        store.add_action_listener(
            NotificationFanOut(RichSnackBar(_console), duration_ms=settings.notification_duration_ms)
        )
        script(store)
        return store, await store.settle()


def _finish(store: EntityStore, outcomes: list[Outcome], *, title: str = "Entities") -> None:
    for outcome in outcomes:
        _console.print(describe_outcome(outcome))
    _console.print(build_entities_table(store.select(select_all), title=title))
    if any(is_failure(outcome) for outcome in outcomes):
        raise typer.Exit(code=1)


def _settings() -> AppSettings:
    settings = AppSettings()
    configure_logging(settings.log_level)
    return settings


_MEMORY_OPTION = typer.Option(False, "--memory", help="Use the in-memory resource instead of HTTP.")
_FIELD_OPTION = typer.Option([], "--field", "-f", help="Entity field as key=value (repeatable).")


@app.command(name="list")
def list_entities(memory: bool = _MEMORY_OPTION) -> None:
    """Load every entity and show them."""

    settings = _settings()
    store, outcomes = asyncio.run(_run(lambda s: s.load_all(), settings=settings, memory=memory))
    _finish(store, outcomes)


@app.command()
def add(
    entity_id: str = typer.Argument(..., help="Identifier of the new entity."),
    fields: list[str] = _FIELD_OPTION,
    memory: bool = _MEMORY_OPTION,
) -> None:
    """Create an entity."""

    settings = _settings()
    entity = {**parse_fields(fields), "id": parse_entity_id(entity_id)}
    store, outcomes = asyncio.run(_run(lambda s: s.add(entity), settings=settings, memory=memory))
    _finish(store, outcomes)


@app.command()
def update(
    entity_id: str = typer.Argument(..., help="Identifier of the entity to update."),
    fields: list[str] = _FIELD_OPTION,
    memory: bool = _MEMORY_OPTION,
) -> None:
    """Load the collection, then update one entity."""

    settings = _settings()
    entity = {**parse_fields(fields), "id": parse_entity_id(entity_id)}
    store, outcomes = asyncio.run(
        _run(_load_then(lambda s: s.update(entity)), settings=settings, memory=memory)
    )
    _finish(store, outcomes)


@app.command()
def delete(
    entity_id: str = typer.Argument(..., help="Identifier of the entity to delete."),
    memory: bool = _MEMORY_OPTION,
) -> None:
    """Load the collection, then delete one entity."""

    settings = _settings()
    target = parse_entity_id(entity_id)
    store, outcomes = asyncio.run(
        _run(_load_then(lambda s: s.delete(target)), settings=settings, memory=memory)
    )
    _finish(store, outcomes)


def _load_then(then: StoreScript) -> StoreScript:
    """Issue `then` once the initial load has settled successfully."""

    def script(store: EntityStore) -> None:
        issued = False

        def on_action(action: object) -> None:
            nonlocal issued
            if not issued and isinstance(action, LoadAllSucceeded):
                issued = True
                then(store)

        store.add_action_listener(on_action)
        store.load_all()

    return script


@app.command()
def demo(
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the welcome banner."),
) -> None:
    """Run a scripted session against the in-memory resource.

    Two concurrent adds settle in reverse order, an update replaces a name
    and a delete of a missing id fails without retry.
    """

    settings = _settings()
    if banner:
        print_banner(_console)

    resource = InMemoryEntityResource(
        sample_entities(),
        latency_seconds=0.05,
        delays={25: 0.3, 133: 0.1},
    )

    def script(store: EntityStore) -> None:
        store.subscribe(lambda view: _console.print(f"[dim]view: {len(view)} entities[/dim]"))
        store.load_all()

    async def session() -> tuple[EntityStore, list[Outcome]]:
        store, outcomes = await _run(script, settings=settings, memory=True, resource=resource)
        store.add({"id": 25, "name": "Pikachu", "type": "electric"})
        store.add({"id": 133, "name": "Eevee", "type": "normal"})
        store.update({"id": 1, "name": "Ivysaur"})
        store.delete(999)
        outcomes.extend(await store.settle())
        return store, outcomes

    store, outcomes = asyncio.run(session())
    for outcome in outcomes:
        _console.print(describe_outcome(outcome))
    _console.print(build_entities_table(store.select(select_all), title="Entities (demo)"))


def run() -> None:
    app()
