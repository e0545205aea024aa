"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Entities arrive from a remote resource with fields the core never
  inspects; `extra="allow"` keeps them intact while still validating the
  identifier.
- Frozen models give structural equality and forbid in-place mutation of a
  state that listeners may still hold a reference to.

Note:
- These models describe *what* the state is, not *how* it is fetched.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

EntityId = Union[int, str]


class Entity(BaseModel):
    """A single record of the managed collection.

    Only `id` is declared; any other field is carried through unexamined.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: EntityId = Field(
        ...,
        description="Unique identifier of the record (integer or string).",
    )

    @classmethod
    def coerce(cls, value: "Entity | Mapping[str, Any]") -> "Entity":
        """Accept an `Entity` or a plain mapping (e.g. decoded JSON)."""

        if isinstance(value, Entity):
            return value
        return cls.model_validate(dict(value))

    def merged(self, changes: "Entity | Mapping[str, Any]") -> "Entity":
        """Return a copy with `changes` applied; the identifier never changes."""

        patch = changes.model_dump() if isinstance(changes, Entity) else dict(changes)
        patch.pop("id", None)
        return Entity.model_validate({**self.model_dump(), **patch, "id": self.id})


class EntityState(BaseModel):
    """Normalized collection: ordered identifiers plus an id -> entity map.

    Invariant: `set(ids) == set(entities)` and `ids` holds no duplicates.
    Every operation returns a new instance; the receiver is never modified.
    """

    model_config = ConfigDict(frozen=True)

    ids: tuple[EntityId, ...] = Field(
        default=(),
        description="Identifiers in insertion (or provided) order.",
    )
    entities: dict[EntityId, Entity] = Field(
        default_factory=dict,
        description="Entities keyed by identifier.",
    )

    @classmethod
    def initial(cls) -> "EntityState":
        return cls()

    def add_all(self, entities: Iterable[Entity]) -> "EntityState":
        """Replace the whole collection with `entities`.

        Duplicated identifiers keep their first position and their last value.
        """

        ids: list[EntityId] = []
        mapping: dict[EntityId, Entity] = {}
        for entity in entities:
            if entity.id not in mapping:
                ids.append(entity.id)
            mapping[entity.id] = entity
        return EntityState(ids=tuple(ids), entities=mapping)

    def add_one(self, entity: Entity) -> "EntityState":
        """Insert `entity`, or overwrite it in place when the id already exists."""

        ids = self.ids if entity.id in self.entities else (*self.ids, entity.id)
        return EntityState(ids=ids, entities={**self.entities, entity.id: entity})

    def update_one(
        self,
        entity_id: EntityId,
        changes: Entity | Mapping[str, Any],
    ) -> "EntityState":
        """Merge `changes` into an existing entity; unknown ids leave the state as is."""

        current = self.entities.get(entity_id)
        if current is None:
            return self
        return EntityState(
            ids=self.ids,
            entities={**self.entities, entity_id: current.merged(changes)},
        )

    def remove_one(self, entity_id: EntityId) -> "EntityState":
        if entity_id not in self.entities:
            return self
        entities = dict(self.entities)
        del entities[entity_id]
        return EntityState(
            ids=tuple(i for i in self.ids if i != entity_id),
            entities=entities,
        )

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self.entities
