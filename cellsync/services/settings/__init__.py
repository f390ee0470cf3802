"""
Settings Service - Agent Settings Synchronization

Responsibilities:
- Fetch the agent settings (GET /config)
- Persist edited settings (PUT /config)
- Keep one live Configuration per store
- Notify observers of every accepted update
"""

from .client import RemoteConfigClient, RemoteResult
from .observers import ObserverRegistry
from .seed import load_seed
from .store import SettingsStore
from .validator import SettingsValidator

__all__ = [
    "RemoteConfigClient",
    "RemoteResult",
    "ObserverRegistry",
    "SettingsStore",
    "SettingsValidator",
    "load_seed",
]
