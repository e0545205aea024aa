"""Derived views over `EntityState`.

`select_all` returns entities in identifier-sequence order (insertion
order, or the order provided by the last full load). Equal states always
yield equal sequences.
"""

from __future__ import annotations

from core.domain.models import Entity, EntityId, EntityState


def select_all(state: EntityState) -> tuple[Entity, ...]:
    return tuple(state.entities[entity_id] for entity_id in state.ids)


def select_ids(state: EntityState) -> tuple[EntityId, ...]:
    return state.ids


def select_total(state: EntityState) -> int:
    return len(state.ids)


def select_entity(state: EntityState, entity_id: EntityId) -> Entity | None:
    return state.entities.get(entity_id)
