"""
Unit tests for the reducer: only confirmed outcomes change the state.
"""

import pytest
from hypothesis import given, strategies as st

from core.domain import actions
from core.domain.actions import (
    AddFailed,
    AddSucceeded,
    DeleteFailed,
    DeleteSucceeded,
    LoadAllFailed,
    LoadAllSucceeded,
    UpdateFailed,
    UpdateSucceeded,
)
from core.domain.models import Entity, EntityState
from core.reducer import initial_state, reduce


def make(entity_id, **fields) -> Entity:
    return Entity.model_validate({"id": entity_id, **fields})


@pytest.fixture
def state() -> EntityState:
    return EntityState.initial().add_one(make(1, name="Bulbasaur"))


FAILURES = [
    LoadAllFailed(reason="network"),
    AddFailed(reason="network"),
    UpdateFailed(reason="network"),
    DeleteFailed(reason="network"),
]


def test_none_state_starts_from_initial():
    assert reduce(None, actions.load_all()) == initial_state()


def test_load_all_succeeded_replaces_state():
    result = reduce(initial_state(), LoadAllSucceeded(entities=[make(1, name="a"), make(2, name="b")]))
    assert set(result.ids) == {1, 2}
    assert set(result.entities) == {1, 2}


def test_add_succeeded_inserts(state):
    result = reduce(state, AddSucceeded(entity=make(2, name="Ivysaur")))
    assert result.ids == (1, 2)


def test_update_succeeded_scenario(state):
    result = reduce(state, UpdateSucceeded(entity=make(1, name="Ivysaur")))
    assert result.entities == {1: make(1, name="Ivysaur")}


def test_update_succeeded_unknown_id_is_noop(state):
    assert reduce(state, UpdateSucceeded(entity=make(7, name="x"))) is state


def test_delete_succeeded_is_idempotent(state):
    once = reduce(state, DeleteSucceeded(id=1))
    twice = reduce(once, DeleteSucceeded(id=1))
    assert once == twice
    assert once.ids == ()


@pytest.mark.parametrize("failure", FAILURES, ids=lambda f: type(f).__name__)
def test_failures_do_not_change_state(state, failure):
    assert reduce(state, failure) is state


@pytest.mark.parametrize(
    "command",
    [actions.load_all(), actions.add({"id": 2}), actions.update({"id": 1, "name": "x"}), actions.delete(1)],
    ids=lambda c: type(c).__name__,
)
def test_commands_do_not_change_state(state, command):
    assert reduce(state, command) is state


@pytest.mark.parametrize("foreign", [None, "ADD", {"type": "[Entity] Add success"}, object()])
def test_unknown_actions_are_noop(state, foreign):
    assert reduce(state, foreign) is state


@given(
    st.lists(st.integers(min_value=0, max_value=5), unique=True),
    st.sampled_from(FAILURES),
)
def test_reduce_failure_is_identity_for_any_state(ids, failure):
    state = EntityState.initial().add_all([make(i) for i in ids])
    assert reduce(state, failure) == state
