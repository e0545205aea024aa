"""Entity store: the single owner of the application state.

This module wires the pure pieces together:
- the reducer is applied synchronously to every dispatched action;
- state subscribers get the derived view whenever it changes;
- action listeners (e.g. the notification fan-out) see every action after
  the reducer ran;
- commands are handed to the effect pipeline as independent asyncio tasks,
  and each task dispatches its outcome when its remote call settles.

Everything runs on one event loop, so outcomes reach the reducer in settle
order and no locking is needed. There is no cancellation: once issued, a
command task always runs to completion.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Mapping

from core.domain import actions
from core.domain.actions import Action, Command, Outcome
from core.domain.models import Entity, EntityId, EntityState
from core.effects import EntityEffects
from core.reducer import initial_state, reduce
from core.selectors import select_all

logger = logging.getLogger(__name__)

Selector = Callable[[EntityState], Any]
Listener = Callable[[Any], None]
ActionListener = Callable[[Action], Any]
Unsubscribe = Callable[[], None]

_UNSET = object()


class _Subscription:
    def __init__(self, selector: Selector, listener: Listener) -> None:
        self.selector = selector
        self.listener = listener
        self.last: Any = _UNSET


class EntityStore:
    """Injectable state container; one instance per application lifetime."""

    def __init__(self, effects: EntityEffects, *, state: EntityState | None = None) -> None:
        self._effects = effects
        self._state = state if state is not None else initial_state()
        self._subscriptions: list[_Subscription] = []
        self._action_listeners: list[ActionListener] = []
        self._tasks: set[asyncio.Task[Outcome]] = set()

    @property
    def state(self) -> EntityState:
        return self._state

    @property
    def pending(self) -> int:
        """Number of commands whose remote call has not settled yet."""

        return len(self._tasks)

    def select(self, selector: Selector = select_all) -> Any:
        return selector(self._state)

    # --- Subscriptions ---

    def subscribe(self, listener: Listener, selector: Selector = select_all) -> Unsubscribe:
        """Push the derived view now and on every distinct change."""

        subscription = _Subscription(selector, listener)
        self._subscriptions.append(subscription)
        self._emit(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def add_action_listener(self, listener: ActionListener) -> Unsubscribe:
        self._action_listeners.append(listener)

        def remove() -> None:
            if listener in self._action_listeners:
                self._action_listeners.remove(listener)

        return remove

    # --- Dispatch ---

    def dispatch(self, action: Action) -> asyncio.Task[Outcome] | None:
        """Reduce `action`, notify listeners and start its effect if it is a command.

        Returns the task running the effect for commands, `None` otherwise.
        Commands require a running event loop.
        """

        previous = self._state
        self._state = reduce(previous, action)
        if self._state is not previous:
            for subscription in list(self._subscriptions):
                self._emit(subscription)

        for listener in list(self._action_listeners):
            try:
                listener(action)
            except Exception:
                logger.exception("Action listener failed on %s", type(action).__name__)

        if not actions.is_command(action):
            return None

        task = asyncio.get_running_loop().create_task(self._run_effect(action))  # type: ignore[arg-type]
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_effect(self, command: Command) -> Outcome:
        outcome = await self._effects.handle(command)
        self.dispatch(outcome)
        return outcome

    async def settle(self) -> list[Outcome]:
        """Wait until no command is in flight; return outcomes in completion order."""

        settled: list[Outcome] = []
        awaited: set[asyncio.Task[Outcome]] = set()
        while True:
            # Listeners may issue new commands while we wait.
            remaining = [task for task in self._tasks if task not in awaited]
            if not remaining:
                return settled
            for future in asyncio.as_completed(remaining):
                settled.append(await future)
            awaited.update(remaining)

    # --- Command constructors ---

    def load_all(self) -> asyncio.Task[Outcome]:
        return self.dispatch(actions.load_all())  # type: ignore[return-value]

    def add(self, entity: Entity | Mapping[str, Any]) -> asyncio.Task[Outcome]:
        return self.dispatch(actions.add(Entity.coerce(entity)))  # type: ignore[return-value]

    def update(self, entity: Entity | Mapping[str, Any]) -> asyncio.Task[Outcome]:
        return self.dispatch(actions.update(Entity.coerce(entity)))  # type: ignore[return-value]

    def delete(self, entity_id: EntityId) -> asyncio.Task[Outcome]:
        return self.dispatch(actions.delete(entity_id))  # type: ignore[return-value]

    def _emit(self, subscription: _Subscription) -> None:
        try:
            value = subscription.selector(self._state)
            if subscription.last is not _UNSET and value == subscription.last:
                return
            subscription.last = value
            subscription.listener(value)
        except Exception:
            logger.exception("State subscriber failed")
