"""Reducer: applies confirmed outcomes to the entity state.

`reduce` is total and pure. Request-phase commands, failures and any
unrecognized value leave the state untouched (the very same object is
returned, so identity checks can detect "no change").
"""

from __future__ import annotations

from core.domain.actions import (
    AddSucceeded,
    DeleteSucceeded,
    LoadAllSucceeded,
    UpdateSucceeded,
)
from core.domain.models import EntityState


def initial_state() -> EntityState:
    return EntityState.initial()


def reduce(state: EntityState | None, action: object) -> EntityState:
    if state is None:
        state = initial_state()

    if isinstance(action, LoadAllSucceeded):
        return state.add_all(action.entities)
    if isinstance(action, AddSucceeded):
        return state.add_one(action.entity)
    if isinstance(action, UpdateSucceeded):
        return state.update_one(action.entity.id, action.entity)
    if isinstance(action, DeleteSucceeded):
        return state.remove_one(action.id)

    # Commands, OperationFailed variants and foreign actions.
    return state
