from __future__ import annotations

from typing import Optional


class SyncError(Exception):
    """Base class for errors raised inside the sync layer."""


class PayloadShapeError(SyncError):
    """A remote payload was not the expected container or its rows did not validate."""


class RemoteUnavailableError(SyncError):
    """The remote data source could not be reached within the retry budget."""

    def __init__(self, description: str, attempts: int, last_error: Optional[BaseException] = None) -> None:
        self.description = description
        self.attempts = attempts
        self.last_error = last_error
        detail = f": {last_error!r}" if last_error is not None else ""
        super().__init__(f"{description} failed after {attempts} attempt(s){detail}")
