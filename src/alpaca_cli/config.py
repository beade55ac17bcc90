"""Persistent credential store plus runtime settings from env overrides."""

from __future__ import annotations

from contextlib import suppress
import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

LIVE_BASE_URL = "https://api.alpaca.markets"
PAPER_BASE_URL = "https://paper-api.alpaca.markets"
DEFAULT_DATA_URL = "https://data.alpaca.markets"

CONFIG_KEYS = ("keyId", "secretKey", "mode", "baseUrl")

# Official Alpaca SDK variable names; these win over the stored values.
CREDENTIAL_ENV_VARS = {
    "APCA_API_KEY_ID": "keyId",
    "APCA_API_SECRET_KEY": "secretKey",
    "APCA_API_BASE_URL": "baseUrl",
}

SETTINGS_ENV_PREFIX = "ALPACA_CLI_"


def _env_path(name: str, fallback: Path) -> Path:
    raw = os.environ.get(name, "").strip()
    return Path(raw).expanduser() if raw else fallback.expanduser()


def default_config_path() -> Path:
    config_home = _env_path("XDG_CONFIG_HOME", Path.home() / ".config")
    return _env_path(f"{SETTINGS_ENV_PREFIX}CONFIG_PATH", config_home / "alpacacli" / "config.json")


class Configuration(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    key_id: str | None = Field(default=None, alias="keyId")
    secret_key: str | None = Field(default=None, alias="secretKey")
    mode: str | None = None
    base_url: str | None = Field(default=None, alias="baseUrl")

    @property
    def is_paper(self) -> bool:
        return self.mode == "paper"

    @property
    def resolved_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        return PAPER_BASE_URL if self.is_paper else LIVE_BASE_URL


class Settings(BaseModel):
    config_path: Path = Field(default_factory=default_config_path)
    data_url: str = DEFAULT_DATA_URL
    request_timeout_seconds: float = 15.0
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unsupported log level '{value}'")
        return level


class ConfigStore:
    """Flat key/value store persisted as a JSON object; last write wins."""

    def __init__(self, path: Path) -> None:
        self._path = path.expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        logger.info("config key %s written to %s", key, self._path)

    def as_dict(self) -> dict[str, str]:
        return {key: value for key, value in self._read().items() if isinstance(value, str)}

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            loaded = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("ignoring unreadable config file %s", self._path)
            return {}
        if isinstance(loaded, dict):
            return loaded
        return {}

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        with suppress(OSError):
            self._path.chmod(0o600)


def _coerce_env_value(value: str) -> Any:
    lower = value.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


def load_configuration(store: ConfigStore) -> Configuration:
    data: dict[str, Any] = {key: value for key, value in store.as_dict().items() if key in CONFIG_KEYS}
    for env_name, key in CREDENTIAL_ENV_VARS.items():
        raw = os.environ.get(env_name, "").strip()
        if raw:
            data[key] = raw
    return Configuration.model_validate(data)


def load_settings() -> Settings:
    overrides: dict[str, Any] = {}
    for key, raw in os.environ.items():
        if not key.startswith(SETTINGS_ENV_PREFIX):
            continue
        field = key[len(SETTINGS_ENV_PREFIX) :].lower()
        if field not in Settings.model_fields:
            continue
        overrides[field] = raw.strip() if field in {"config_path", "data_url", "log_level"} else _coerce_env_value(raw)
    return Settings.model_validate(overrides)
