from __future__ import annotations

import json
from pathlib import Path

import pytest

from alpaca_cli import config as alpaca_config
from alpaca_cli.config import (
    LIVE_BASE_URL,
    PAPER_BASE_URL,
    ConfigStore,
    Configuration,
    load_configuration,
    load_settings,
)


def test_store_round_trip_and_last_write_wins(tmp_path: Path) -> None:
    store = ConfigStore(tmp_path / "nested" / "config.json")
    assert store.get("mode") is None

    store.set("mode", "live")
    store.set("mode", "paper")
    store.set("keyId", "KEY")

    assert store.get("mode") == "paper"
    assert json.loads(store.path.read_text(encoding="utf-8")) == {"mode": "paper", "keyId": "KEY"}
    assert store.path.stat().st_mode & 0o777 == 0o600


def test_store_ignores_corrupt_files(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    store = ConfigStore(path)
    assert store.as_dict() == {}

    path.write_text("[1, 2]", encoding="utf-8")
    assert store.get("keyId") is None


def test_mode_can_be_set_without_credentials(tmp_path: Path) -> None:
    store = ConfigStore(tmp_path / "config.json")
    store.set("mode", "paper")

    cfg = load_configuration(store)
    assert cfg.key_id is None
    assert cfg.is_paper


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ({}, LIVE_BASE_URL),
        ({"mode": "live"}, LIVE_BASE_URL),
        ({"mode": "paper"}, PAPER_BASE_URL),
        ({"mode": "paper", "baseUrl": "https://example.test/"}, "https://example.test"),
    ],
)
def test_resolved_base_url(data: dict[str, str], expected: str) -> None:
    assert Configuration.model_validate(data).resolved_base_url == expected


def test_env_credentials_win_over_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = ConfigStore(tmp_path / "config.json")
    store.set("keyId", "stored-key")
    store.set("secretKey", "stored-secret")
    monkeypatch.setenv("APCA_API_SECRET_KEY", "env-secret")
    monkeypatch.setenv("APCA_API_BASE_URL", "https://paper.example")

    cfg = load_configuration(store)

    assert cfg.key_id == "stored-key"
    assert cfg.secret_key == "env-secret"
    assert cfg.resolved_base_url == "https://paper.example"


def test_settings_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALPACA_CLI_CONFIG_PATH", str(tmp_path / "alt.json"))
    monkeypatch.setenv("ALPACA_CLI_REQUEST_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("ALPACA_CLI_LOG_LEVEL", "debug")
    monkeypatch.setenv("ALPACA_CLI_UNRELATED", "ignored")

    settings = load_settings()

    assert settings.config_path == tmp_path / "alt.json"
    assert settings.request_timeout_seconds == 2.5
    assert settings.log_level == "DEBUG"
    assert settings.data_url == alpaca_config.DEFAULT_DATA_URL


def test_settings_reject_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALPACA_CLI_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError, match="unsupported log level"):
        load_settings()


def test_default_config_path_uses_xdg(fake_home: Path) -> None:
    assert alpaca_config.default_config_path() == fake_home / ".config" / "alpacacli" / "config.json"
