"""Notification fan-out.

Observes the action stream and opens one transient notification per
outcome: SUCCESS for the four success variants, FAILED for the four
failure variants. It never touches the state; commands are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from core.domain.actions import FAILED_OUTCOMES, SUCCESS_OUTCOMES
from core.interfaces.notifier import NotificationSink

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 2000


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str
    action: str
    duration_ms: int


class NotificationFanOut:
    """Callable action listener forwarding outcomes to a `NotificationSink`."""

    def __init__(
        self,
        sink: NotificationSink,
        *,
        duration_ms: int = DEFAULT_DURATION_MS,
        success_message: str = "SUCCESS",
        success_action: str = "Operation success",
        failed_message: str = "FAILED",
        failed_action: str = "Operation failed",
    ) -> None:
        self._sink = sink
        self._duration_ms = duration_ms
        self._success = (success_message, success_action)
        self._failed = (failed_message, failed_action)

    def classify(self, action: object) -> NotificationLevel | None:
        if isinstance(action, SUCCESS_OUTCOMES):
            return NotificationLevel.SUCCESS
        if isinstance(action, FAILED_OUTCOMES):
            return NotificationLevel.FAILED
        return None

    def __call__(self, action: object) -> Notification | None:
        level = self.classify(action)
        if level is None:
            return None

        message, label = self._success if level is NotificationLevel.SUCCESS else self._failed
        notification = Notification(
            level=level,
            message=message,
            action=label,
            duration_ms=self._duration_ms,
        )
        logger.debug("notify %s for %s", level.value, type(action).__name__)
        self._sink.open(notification.message, notification.action, notification.duration_ms)
        return notification
