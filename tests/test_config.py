"""Configuration model: baselines, wire mapping, wholesale replacement"""

import pytest

from cellsync.common.config import (
    ClientSettings,
    Configuration,
    DebuggingSettings,
    LogsSettings,
    UpdateFrequency,
    UpdatesSettings,
    build_url,
)
from cellsync.common.exceptions import SettingsError

FULL = {
    "Logs": {"Folder": "/tmp/logs", "MaxFilesNumber": 3, "MaxFilesSize": 5, "MaxAgeDays": 2},
    "Updates": {
        "Frequency": "daily",
        "DownloadAuto": False,
        "UpdateChannel": "beta",
        "UpdateUrl": "https://updates.example.com",
        "UpdatePublicKey": "KEY",
    },
    "Debugging": {"ShowPanels": True},
    "Service": {"AutoStart": True},
}


def test_missing_section_gets_baseline():
    data = {k: v for k, v in FULL.items() if k != "Debugging"}

    config = Configuration.from_dict(data)

    assert config.debugging == DebuggingSettings(show_panels=False)
    assert config.to_dict()["Debugging"] == {"ShowPanels": False}


def test_all_sections_present_are_kept_verbatim():
    assert Configuration.from_dict(FULL).to_dict() == FULL


def test_empty_input_is_fully_defaulted():
    config = Configuration.from_dict(None)

    assert config.to_dict() == {
        "Logs": {"Folder": "", "MaxFilesNumber": 1, "MaxFilesSize": 30, "MaxAgeDays": 30},
        "Updates": {
            "Frequency": "restart",
            "DownloadAuto": True,
            "UpdateChannel": "",
            "UpdateUrl": "",
            "UpdatePublicKey": "",
        },
        "Debugging": {"ShowPanels": False},
        "Service": {"AutoStart": False},
    }
    assert Configuration() == config


def test_null_section_gets_baseline():
    config = Configuration.from_dict({"Service": None})
    assert config.service.auto_start is False


def test_present_section_is_not_merged_with_baseline():
    config = Configuration.from_dict({"Logs": {"Folder": "/var/log"}})

    assert config.logs.folder == "/var/log"
    assert config.logs.max_files_number is None
    assert config.to_dict()["Logs"] == {"Folder": "/var/log"}


def test_unknown_section_keys_survive_serialization():
    logs = LogsSettings.from_dict({"Folder": "/x", "Compress": True})

    assert logs.extra == {"Compress": True}
    assert logs.to_dict() == {"Folder": "/x", "Compress": True}


def test_enum_frequency_serializes_as_string():
    updates = UpdatesSettings(frequency=UpdateFrequency.MONTHLY)
    assert updates.to_dict() == {"Frequency": "monthly"}


def test_replace_from_drops_absent_sections():
    config = Configuration.from_dict(FULL)

    config.replace_from({"Logs": {"Folder": "/srv"}})

    assert config.logs.to_dict() == {"Folder": "/srv"}
    assert config.updates.is_empty()
    assert config.debugging.is_empty()
    assert config.service.is_empty()


def test_replace_from_rejects_non_object_without_touching_state():
    config = Configuration.from_dict(FULL)
    before = config.snapshot()

    with pytest.raises(SettingsError):
        config.replace_from({"Logs": {"Folder": "/srv"}, "Updates": "yes"})
    with pytest.raises(SettingsError):
        config.replace_from(["not", "an", "object"])

    assert config.snapshot() == before


def test_replace_from_rejects_null_reply():
    config = Configuration.from_dict(FULL)
    before = config.snapshot()

    with pytest.raises(SettingsError, match="got NoneType"):
        config.replace_from(None)

    assert config.snapshot() == before


def test_snapshot_is_detached():
    config = Configuration.from_dict(FULL)
    snap = config.snapshot()

    snap["Logs"]["Folder"] = "changed"

    assert config.logs.folder == "/tmp/logs"


def test_build_url_joins_base_and_path():
    settings = ClientSettings(api_url="http://localhost:3636/")
    assert build_url("/config", settings) == "http://localhost:3636/config"
    assert build_url("config", settings) == "http://localhost:3636/config"


def test_client_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CELLSYNC_API_URL", "http://127.0.0.1:9000")
    monkeypatch.setenv("CELLSYNC_TIMEOUT_S", "5")

    settings = ClientSettings()

    assert settings.api_url == "http://127.0.0.1:9000"
    assert settings.timeout_s == 5.0
    assert settings.config_path == "/config"
