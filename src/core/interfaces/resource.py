"""Contract for the remote resource holding the entity collection.

Why Protocol:
- Structural typing: an HTTP client, an in-memory server or a test fake
  are interchangeable without inheriting from a base class.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import Entity, EntityId


@runtime_checkable
class EntityResource(Protocol):
    """Minimal asynchronous CRUD contract.

    Design rules:
    - Every method is a coroutine because it typically performs I/O.
    - Failures are signalled by raising (usually `ResourceError`).
    - Each call is made exactly once by the core; no retries.
    """

    async def list_all(self) -> Sequence[Entity]:
        """Return every entity currently held by the resource."""

        ...

    async def create(self, entity: Entity) -> Entity:
        """Create `entity` and return the server version (ids may be assigned)."""

        ...

    async def persist(self, entity: Entity) -> None:
        """Store the new version of an existing entity."""

        ...

    async def remove(self, entity_id: EntityId) -> None:
        """Delete the entity identified by `entity_id`."""

        ...
