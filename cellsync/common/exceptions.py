"""
Custom Exception Classes for Cells Sync

Hierarchical exception structure for error handling across services.
"""

from typing import Any


class CellSyncError(Exception):
    """Base exception for all Cells Sync client errors"""

    def __init__(self, message: str, recoverable: bool = True):
        self.message = message
        self.recoverable = recoverable
        super().__init__(message)


class RemoteError(CellSyncError):
    """Configuration round-trip failed (non-200 status or transport failure)"""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        stack: str | None = None,
        operation: str | None = None,
    ):
        self.status_code = status_code
        self.stack = stack
        self.operation = operation
        super().__init__(message, recoverable=True)


class SettingsError(CellSyncError):
    """Malformed settings payload"""

    def __init__(self, message: str):
        super().__init__(f"Settings Error: {message}", recoverable=False)


class ObserverError(CellSyncError):
    """One or more observers raised during notification"""

    def __init__(self, failures: list[tuple[Any, BaseException]]):
        self.failures = failures
        super().__init__(
            f"{len(failures)} observer(s) failed during notification",
            recoverable=True,
        )
