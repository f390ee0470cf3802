"""
Common Utilities

Shared modules used across all services:
- config.py - Configuration dataclasses and client settings
- exceptions.py - Custom exception classes
- logging_setup.py - Structured logging setup
"""

from .config import (
    Configuration,
    LogsSettings,
    UpdatesSettings,
    DebuggingSettings,
    ServiceSettings,
    UpdateFrequency,
    ClientSettings,
    get_client_settings,
    build_url,
)
from .exceptions import (
    CellSyncError,
    RemoteError,
    SettingsError,
    ObserverError,
)
from .logging_setup import (
    ServiceLogger,
    get_service_logger,
)

__all__ = [
    # Config
    "Configuration",
    "LogsSettings",
    "UpdatesSettings",
    "DebuggingSettings",
    "ServiceSettings",
    "UpdateFrequency",
    "ClientSettings",
    "get_client_settings",
    "build_url",
    # Exceptions
    "CellSyncError",
    "RemoteError",
    "SettingsError",
    "ObserverError",
    # Logging
    "ServiceLogger",
    "get_service_logger",
]
