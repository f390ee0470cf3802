"""
Configuration Dataclasses

Type-safe structures for the sync agent settings and for the client
that talks to the agent. Wire keys keep the agent's PascalCase naming;
attributes are snake_case.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, ClassVar, Mapping

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import SettingsError


class UpdateFrequency(str, Enum):
    """When the agent checks for new releases"""
    RESTART = "restart"
    DAILY = "daily"
    MONTHLY = "monthly"
    MANUAL = "manual"


class _Section:
    """
    Shared wire mapping for configuration sections.

    Only keys present in the payload are set; absent keys stay None and
    are left out of to_dict(). Keys the client does not know about are
    kept in `extra` and written back unchanged.
    """

    WIRE_KEYS: ClassVar[dict[str, str]] = {}
    BASELINE: ClassVar[dict[str, Any]] = {}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None):
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise SettingsError(
                f"section {cls.__name__} must be an object, got {type(data).__name__}"
            )
        remaining = dict(data)
        values = {
            attr: remaining.pop(key)
            for attr, key in cls.WIRE_KEYS.items()
            if key in remaining
        }
        return cls(**values, extra=remaining)

    @classmethod
    def baseline(cls):
        """Fixed client-side default for this section"""
        return cls.from_dict(copy.deepcopy(cls.BASELINE))

    def to_dict(self) -> dict[str, Any]:
        result = {}
        for attr, key in self.WIRE_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value.value if isinstance(value, Enum) else value
        for key, value in self.extra.items():
            result.setdefault(key, value)
        return result

    def is_empty(self) -> bool:
        return not self.to_dict()


@dataclass
class LogsSettings(_Section):
    """Log file location and rotation"""
    folder: str | None = None
    max_files_number: int | None = None
    max_files_size: int | None = None  # MB
    max_age_days: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    WIRE_KEYS: ClassVar[dict[str, str]] = {
        "folder": "Folder",
        "max_files_number": "MaxFilesNumber",
        "max_files_size": "MaxFilesSize",
        "max_age_days": "MaxAgeDays",
    }
    BASELINE: ClassVar[dict[str, Any]] = {
        "Folder": "",
        "MaxFilesNumber": 1,
        "MaxFilesSize": 30,
        "MaxAgeDays": 30,
    }


@dataclass
class UpdatesSettings(_Section):
    """Self-update policy"""
    frequency: str | None = None  # see UpdateFrequency
    download_auto: bool | None = None
    update_channel: str | None = None
    update_url: str | None = None
    update_public_key: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    WIRE_KEYS: ClassVar[dict[str, str]] = {
        "frequency": "Frequency",
        "download_auto": "DownloadAuto",
        "update_channel": "UpdateChannel",
        "update_url": "UpdateUrl",
        "update_public_key": "UpdatePublicKey",
    }
    BASELINE: ClassVar[dict[str, Any]] = {
        "Frequency": UpdateFrequency.RESTART.value,
        "DownloadAuto": True,
        "UpdateChannel": "",
        "UpdateUrl": "",
        "UpdatePublicKey": "",
    }


@dataclass
class DebuggingSettings(_Section):
    """Developer panels"""
    show_panels: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    WIRE_KEYS: ClassVar[dict[str, str]] = {"show_panels": "ShowPanels"}
    BASELINE: ClassVar[dict[str, Any]] = {"ShowPanels": False}


@dataclass
class ServiceSettings(_Section):
    """OS service integration"""
    auto_start: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    WIRE_KEYS: ClassVar[dict[str, str]] = {"auto_start": "AutoStart"}
    BASELINE: ClassVar[dict[str, Any]] = {"AutoStart": False}


# (attribute, wire key, section type) in wire order
SECTIONS: tuple[tuple[str, str, type], ...] = (
    ("logs", "Logs", LogsSettings),
    ("updates", "Updates", UpdatesSettings),
    ("debugging", "Debugging", DebuggingSettings),
    ("service", "Service", ServiceSettings),
)


def _parse_sections(data: Any, use_baseline: bool) -> dict[str, _Section]:
    """Build all four sections before anything is assigned"""
    # Only construction may start from nothing; an agent reply must be an object
    if data is None and use_baseline:
        data = {}
    if not isinstance(data, Mapping):
        raise SettingsError(f"configuration must be an object, got {type(data).__name__}")

    sections = {}
    for attr, key, section_type in SECTIONS:
        value = data.get(key)
        if value is None:
            sections[attr] = section_type.baseline() if use_baseline else section_type()
        else:
            sections[attr] = section_type.from_dict(value)
    return sections


@dataclass
class Configuration:
    """Agent settings as exchanged with GET/PUT /config"""
    logs: LogsSettings = field(default_factory=LogsSettings.baseline)
    updates: UpdatesSettings = field(default_factory=UpdatesSettings.baseline)
    debugging: DebuggingSettings = field(default_factory=DebuggingSettings.baseline)
    service: ServiceSettings = field(default_factory=ServiceSettings.baseline)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None = None) -> "Configuration":
        """Constructor-time load: a missing section falls back to its baseline"""
        return cls(**_parse_sections(data, use_baseline=True))

    def replace_from(self, data: Mapping[str, Any]) -> None:
        """
        Replace all four sections in place from a server payload.

        No merge with the previous values and no baseline: a section the
        server did not send becomes empty.
        """
        for attr, section in _parse_sections(data, use_baseline=False).items():
            setattr(self, attr, section)

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, attr).to_dict() for attr, key, _ in SECTIONS}

    def snapshot(self) -> dict[str, Any]:
        """Detached copy of the wire form"""
        return copy.deepcopy(self.to_dict())


class ClientSettings(BaseSettings):
    """
    Connection settings for the local sync agent.

    Loaded from CELLSYNC_* environment variables or a .env file:
    - CELLSYNC_API_URL=http://localhost:3636
    - CELLSYNC_TIMEOUT_S=30
    """
    api_url: str = "http://localhost:3636"
    config_path: str = "/config"
    # None waits forever
    timeout_s: float | None = 30.0

    model_config = SettingsConfigDict(
        env_prefix="CELLSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_client_settings() -> ClientSettings:
    """Get cached settings."""
    return ClientSettings()


def build_url(path: str, settings: ClientSettings | None = None) -> str:
    """Join the agent base URL and a resource path"""
    settings = settings or get_client_settings()
    return f"{settings.api_url.rstrip('/')}/{path.lstrip('/')}"
