"""In-memory `EntityResource`.

Stands in for a real backend during demos and tests, the way an
in-memory web API does for front-end development: records live in a
dict, duplicate ids are rejected on create, and optional latencies
(global or per id) make calls actually suspend so concurrent commands
can settle out of order.
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, Mapping

from core.domain.actions import Operation
from core.domain.errors import ResourceError
from core.domain.models import Entity, EntityId


class InMemoryEntityResource:
    def __init__(
        self,
        seed: Iterable[Entity] = (),
        *,
        latency_seconds: float = 0.0,
        delays: Mapping[EntityId, float] | None = None,
        fail_operations: Iterable[Operation | str] = (),
    ) -> None:
        self._records: dict[EntityId, Entity] = {entity.id: entity for entity in seed}
        self.latency_seconds = latency_seconds
        self.delays = dict(delays or {})
        self.fail_operations = {Operation(op) for op in fail_operations}
        self.calls: list[tuple[Operation, Any]] = []

    @property
    def records(self) -> Mapping[EntityId, Entity]:
        return dict(self._records)

    async def _call(self, operation: Operation, argument: Any) -> None:
        self.calls.append((operation, argument))
        # Always yield to the loop so calls really interleave.
        await asyncio.sleep(self.delays.get(argument, self.latency_seconds))
        if operation in self.fail_operations:
            raise ResourceError(f"{operation.value} unavailable")

    async def list_all(self) -> list[Entity]:
        await self._call(Operation.LOAD, None)
        return list(self._records.values())

    async def create(self, entity: Entity) -> Entity:
        await self._call(Operation.ADD, entity.id)
        if entity.id in self._records:
            raise ResourceError(f"id {entity.id} already exists", status_code=409)
        self._records[entity.id] = entity
        return entity

    async def persist(self, entity: Entity) -> None:
        await self._call(Operation.UPDATE, entity.id)
        if entity.id not in self._records:
            raise ResourceError("not found", status_code=404)
        # Partial payloads update only the fields they carry.
        self._records[entity.id] = self._records[entity.id].merged(entity)

    async def remove(self, entity_id: EntityId) -> None:
        await self._call(Operation.DELETE, entity_id)
        if entity_id not in self._records:
            raise ResourceError("not found", status_code=404)
        del self._records[entity_id]
