"""Contract for the transient notification sink (snackbar/toast-like)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NotificationSink(Protocol):
    def open(self, message: str, action: str, duration_ms: int) -> None:
        """Show a short-lived notification; the return value is ignored."""

        ...
