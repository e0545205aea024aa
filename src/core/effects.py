"""Effect pipeline: commands -> remote calls -> outcomes.

Each command is handled by one coroutine that suspends only on the
resource call and always returns exactly one outcome. Exceptions coming
from the resource are converted to the matching `*Failed` outcome here and
never propagate further. No retries: a failure is terminal for that
command instance.
"""

from __future__ import annotations

import logging

from core.domain.actions import (
    Add,
    AddFailed,
    AddSucceeded,
    Command,
    Delete,
    DeleteFailed,
    DeleteSucceeded,
    LoadAll,
    LoadAllFailed,
    LoadAllSucceeded,
    Outcome,
    Update,
    UpdateFailed,
    UpdateSucceeded,
)
from core.domain.models import Entity
from core.interfaces.resource import EntityResource

logger = logging.getLogger(__name__)


def _reason(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


class EntityEffects:
    """Runs commands against an `EntityResource`."""

    def __init__(self, resource: EntityResource) -> None:
        self._resource = resource

    async def handle(self, command: Command) -> Outcome:
        """Dispatch `command` to its handler.

        Raises `TypeError` for anything that is not a command: that is a
        programming error, not an operation outcome.
        """

        if isinstance(command, LoadAll):
            return await self.load_all(command)
        if isinstance(command, Add):
            return await self.add(command)
        if isinstance(command, Update):
            return await self.update(command)
        if isinstance(command, Delete):
            return await self.delete(command)
        raise TypeError(f"Not a command: {command!r}")

    async def load_all(self, command: LoadAll) -> LoadAllSucceeded | LoadAllFailed:
        logger.debug("%s", command.type.value)
        try:
            found = await self._resource.list_all()
            entities = tuple(Entity.coerce(item) for item in found)
        except Exception as exc:
            logger.warning("%s: %s", LoadAllFailed.type.value, exc)
            return LoadAllFailed(reason=_reason(exc))
        logger.info("%s (%d entities)", LoadAllSucceeded.type.value, len(entities))
        return LoadAllSucceeded(entities=entities)

    async def add(self, command: Add) -> AddSucceeded | AddFailed:
        logger.debug("%s id=%s", command.type.value, command.entity.id)
        try:
            created = Entity.coerce(await self._resource.create(command.entity))
        except Exception as exc:
            logger.warning("%s: %s", AddFailed.type.value, exc)
            return AddFailed(reason=_reason(exc))
        logger.info("%s id=%s", AddSucceeded.type.value, created.id)
        return AddSucceeded(entity=created)

    async def update(self, command: Update) -> UpdateSucceeded | UpdateFailed:
        logger.debug("%s id=%s", command.type.value, command.entity.id)
        try:
            await self._resource.persist(command.entity)
        except Exception as exc:
            logger.warning("%s id=%s: %s", UpdateFailed.type.value, command.entity.id, exc)
            return UpdateFailed(reason=_reason(exc))
        logger.info("%s id=%s", UpdateSucceeded.type.value, command.entity.id)
        # The outcome echoes the submitted entity, not a server copy.
        return UpdateSucceeded(entity=command.entity)

    async def delete(self, command: Delete) -> DeleteSucceeded | DeleteFailed:
        logger.debug("%s id=%s", command.type.value, command.id)
        try:
            await self._resource.remove(command.id)
        except Exception as exc:
            logger.warning("%s id=%s: %s", DeleteFailed.type.value, command.id, exc)
            return DeleteFailed(reason=_reason(exc))
        logger.info("%s id=%s", DeleteSucceeded.type.value, command.id)
        return DeleteSucceeded(id=command.id)
