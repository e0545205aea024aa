"""Shared fakes for the resource and notification collaborators."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from core.domain.errors import ResourceError
from core.domain.models import Entity, EntityId


class FakeResource:
    """Scriptable `EntityResource`.

    `failures` maps a method name to the exception it raises, `delays` maps
    an entity id to the seconds its call waits before settling.
    """

    def __init__(
        self,
        records: list[dict[str, Any]] | None = None,
        *,
        failures: dict[str, Exception] | None = None,
        delays: dict[EntityId, float] | None = None,
    ) -> None:
        self.records = [Entity.model_validate(r) for r in records or []]
        self.failures = failures or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, Any]] = []

    async def _settle(self, name: str, key: Any) -> None:
        self.calls.append((name, key))
        await asyncio.sleep(self.delays.get(key, 0))
        if name in self.failures:
            raise self.failures[name]

    async def list_all(self) -> list[Entity]:
        await self._settle("list_all", None)
        return list(self.records)

    async def create(self, entity: Entity) -> Entity:
        await self._settle("create", entity.id)
        # Server-side enrichment, to tell server copies from client copies.
        return entity.merged({"created": True})

    async def persist(self, entity: Entity) -> None:
        await self._settle("persist", entity.id)

    async def remove(self, entity_id: EntityId) -> None:
        await self._settle("remove", entity_id)


class RecordingSink:
    def __init__(self) -> None:
        self.opened: list[tuple[str, str, int]] = []

    def open(self, message: str, action: str, duration_ms: int) -> None:
        self.opened.append((message, action, duration_ms))


@pytest.fixture
def make_resource():
    return FakeResource


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def network_error() -> ResourceError:
    return ResourceError("network")


@pytest.fixture
def isolated_settings(monkeypatch, tmp_path):
    """Keep developer .env files and RECORDSYNC_* variables out of the tests."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for name in ("API_BASE_URL", "COLLECTION", "SEED_PATH", "LOG_LEVEL", "NOTIFICATION_DURATION_MS"):
        monkeypatch.delenv(f"RECORDSYNC_{name}", raising=False)
