"""
Cells Sync desktop client core.

Settings synchronization between the desktop UI and the local sync agent.
"""

from .common import Configuration, RemoteError
from .services.settings import RemoteConfigClient, SettingsStore

__version__ = "0.1.0"

__all__ = ["Configuration", "RemoteError", "RemoteConfigClient", "SettingsStore"]
