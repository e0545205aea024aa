"""Commands and outcomes.

Every state-changing intent is a Command (request phase). Executing it
against the remote resource yields exactly one Outcome, either a success
carrying the data the reducer needs, or an `OperationFailed` carrying a
reason. The set of classes below is closed: reducer, effects and the
notification fan-out dispatch on these types with `isinstance`.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.models import Entity, EntityId


class ActionType(str, Enum):
    """Tags carried by each action class (handy for logs and UIs)."""

    LOAD_ALL = "[Entity] Load all"
    LOAD_ALL_SUCCESS = "[Entity] Load all success"
    LOAD_ALL_FAILED = "[Entity] Load all failed"
    ADD = "[Entity] Add"
    ADD_SUCCESS = "[Entity] Add success"
    ADD_FAILED = "[Entity] Add failed"
    UPDATE = "[Entity] Update"
    UPDATE_SUCCESS = "[Entity] Update success"
    UPDATE_FAILED = "[Entity] Update failed"
    DELETE = "[Entity] Delete"
    DELETE_SUCCESS = "[Entity] Delete success"
    DELETE_FAILED = "[Entity] Delete failed"


class Operation(str, Enum):
    """Operation class an action belongs to."""

    LOAD = "load"
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


class BaseAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ClassVar[ActionType]
    operation: ClassVar[Operation]


# --- Commands (request phase) ---


class LoadAll(BaseAction):
    type: ClassVar[ActionType] = ActionType.LOAD_ALL
    operation: ClassVar[Operation] = Operation.LOAD


class Add(BaseAction):
    type: ClassVar[ActionType] = ActionType.ADD
    operation: ClassVar[Operation] = Operation.ADD

    entity: Entity


class Update(BaseAction):
    type: ClassVar[ActionType] = ActionType.UPDATE
    operation: ClassVar[Operation] = Operation.UPDATE

    entity: Entity


class Delete(BaseAction):
    type: ClassVar[ActionType] = ActionType.DELETE
    operation: ClassVar[Operation] = Operation.DELETE

    id: EntityId


# --- Success outcomes ---


class LoadAllSucceeded(BaseAction):
    type: ClassVar[ActionType] = ActionType.LOAD_ALL_SUCCESS
    operation: ClassVar[Operation] = Operation.LOAD

    entities: tuple[Entity, ...] = ()


class AddSucceeded(BaseAction):
    type: ClassVar[ActionType] = ActionType.ADD_SUCCESS
    operation: ClassVar[Operation] = Operation.ADD

    entity: Entity


class UpdateSucceeded(BaseAction):
    type: ClassVar[ActionType] = ActionType.UPDATE_SUCCESS
    operation: ClassVar[Operation] = Operation.UPDATE

    entity: Entity


class DeleteSucceeded(BaseAction):
    type: ClassVar[ActionType] = ActionType.DELETE_SUCCESS
    operation: ClassVar[Operation] = Operation.DELETE

    id: EntityId


# --- Failure outcomes ---


class OperationFailed(BaseAction):
    """The single error kind of the protocol, parameterized by `operation`."""

    reason: str = Field(..., description="Human readable cause reported by the resource.")


class LoadAllFailed(OperationFailed):
    type: ClassVar[ActionType] = ActionType.LOAD_ALL_FAILED
    operation: ClassVar[Operation] = Operation.LOAD


class AddFailed(OperationFailed):
    type: ClassVar[ActionType] = ActionType.ADD_FAILED
    operation: ClassVar[Operation] = Operation.ADD


class UpdateFailed(OperationFailed):
    type: ClassVar[ActionType] = ActionType.UPDATE_FAILED
    operation: ClassVar[Operation] = Operation.UPDATE


class DeleteFailed(OperationFailed):
    type: ClassVar[ActionType] = ActionType.DELETE_FAILED
    operation: ClassVar[Operation] = Operation.DELETE


Command = Union[LoadAll, Add, Update, Delete]
SuccessOutcome = Union[LoadAllSucceeded, AddSucceeded, UpdateSucceeded, DeleteSucceeded]
FailedOutcome = Union[LoadAllFailed, AddFailed, UpdateFailed, DeleteFailed]
Outcome = Union[SuccessOutcome, FailedOutcome]
Action = Union[Command, Outcome]

COMMANDS: tuple[type[BaseAction], ...] = (LoadAll, Add, Update, Delete)
SUCCESS_OUTCOMES: tuple[type[BaseAction], ...] = (
    AddSucceeded,
    UpdateSucceeded,
    DeleteSucceeded,
    LoadAllSucceeded,
)
FAILED_OUTCOMES: tuple[type[BaseAction], ...] = (
    AddFailed,
    UpdateFailed,
    DeleteFailed,
    LoadAllFailed,
)


def is_command(action: object) -> bool:
    return isinstance(action, COMMANDS)


def is_success(action: object) -> bool:
    return isinstance(action, SUCCESS_OUTCOMES)


def is_failure(action: object) -> bool:
    return isinstance(action, FAILED_OUTCOMES)


def load_all() -> LoadAll:
    return LoadAll()


def add(entity: Entity | dict) -> Add:
    return Add(entity=Entity.coerce(entity))


def update(entity: Entity | dict) -> Update:
    return Update(entity=Entity.coerce(entity))


def delete(entity_id: EntityId) -> Delete:
    return Delete(id=entity_id)
