"""Errors raised by resource adapters.

The effect pipeline catches these (and any other `Exception`) at its
boundary and turns them into `OperationFailed` outcomes; they never reach
the reducer.
"""

from __future__ import annotations


class ResourceError(Exception):
    """A remote resource operation did not succeed."""

    def __init__(self, reason: str, *, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.reason
        return f"{self.reason} (HTTP {self.status_code})"
