"""Configuration helpers for the integration runtime."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from .cache import DEFAULT_CAPACITY
from .exceptions import ConfigurationError
from .host import DEFAULT_HTTP_TIMEOUT

DEFAULT_DATA_DIR = Path.home() / ".game_integrations"
DEFAULT_CONFIG_FILE = DEFAULT_DATA_DIR / "config.json"
DEFAULT_WORKERS = 8


@dataclass(slots=True)
class IntegrationsConfig:
    """Runtime configuration describing where integrations and games live."""

    integrations_path: Path
    games_root: Path
    addons_root: Path
    settings_file: Optional[Path] = None
    workers: int = DEFAULT_WORKERS
    cache_capacity: int = DEFAULT_CAPACITY
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers}.")
        if self.cache_capacity < 1:
            raise ConfigurationError(f"cache_capacity must be at least 1, got {self.cache_capacity}.")
        if self.http_timeout <= 0:
            raise ConfigurationError(f"http_timeout must be positive, got {self.http_timeout}.")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "IntegrationsConfig":
        env = os.environ if env is None else env
        integrations = env.get("GAME_INTEGRATIONS_PATH")
        if not integrations:
            raise ConfigurationError(
                "Environment variable GAME_INTEGRATIONS_PATH must point to the integrations directory."
            )
        settings = env.get("GAME_INTEGRATIONS_SETTINGS")
        return cls(
            integrations_path=_path(integrations),
            games_root=_path(env.get("GAME_INTEGRATIONS_GAMES_ROOT") or DEFAULT_DATA_DIR / "games"),
            addons_root=_path(env.get("GAME_INTEGRATIONS_ADDONS_ROOT") or DEFAULT_DATA_DIR / "addons"),
            settings_file=_path(settings) if settings else None,
            workers=_number(int, env.get("GAME_INTEGRATIONS_WORKERS"), DEFAULT_WORKERS, "workers"),
            cache_capacity=_number(
                int, env.get("GAME_INTEGRATIONS_CACHE_CAPACITY"), DEFAULT_CAPACITY, "cache_capacity"
            ),
            http_timeout=_number(
                float, env.get("GAME_INTEGRATIONS_HTTP_TIMEOUT"), DEFAULT_HTTP_TIMEOUT, "http_timeout"
            ),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "IntegrationsConfig":
        if "integrations_path" not in data:
            raise ConfigurationError("Configuration is missing 'integrations_path'.")
        settings = data.get("settings_file")
        return cls(
            integrations_path=_path(data["integrations_path"]),
            games_root=_path(data.get("games_root") or DEFAULT_DATA_DIR / "games"),
            addons_root=_path(data.get("addons_root") or DEFAULT_DATA_DIR / "addons"),
            settings_file=_path(settings) if settings else None,
            workers=_number(int, data.get("workers"), DEFAULT_WORKERS, "workers"),
            cache_capacity=_number(int, data.get("cache_capacity"), DEFAULT_CAPACITY, "cache_capacity"),
            http_timeout=_number(float, data.get("http_timeout"), DEFAULT_HTTP_TIMEOUT, "http_timeout"),
        )

    def to_mapping(self) -> MutableMapping[str, object]:
        return {
            "integrations_path": str(self.integrations_path),
            "games_root": str(self.games_root),
            "addons_root": str(self.addons_root),
            "settings_file": str(self.settings_file) if self.settings_file else None,
            "workers": self.workers,
            "cache_capacity": self.cache_capacity,
            "http_timeout": self.http_timeout,
        }

    def dump(self, destination: Path | None = None) -> None:
        destination = destination or DEFAULT_CONFIG_FILE
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(json.dumps(self.to_mapping(), indent=2), encoding="utf8")

    @classmethod
    def load(cls, source: Path | None = None) -> "IntegrationsConfig":
        source = source or DEFAULT_CONFIG_FILE
        if not source.exists():
            raise FileNotFoundError(f"Configuration file not found: {source}")
        try:
            data = json.loads(source.read_text(encoding="utf8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Configuration file '{source}' is not valid JSON: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Configuration file '{source}' must contain a JSON object.")
        return cls.from_mapping(data)


def _path(value: Any) -> Path:
    return Path(str(value)).expanduser().resolve()


def _number(kind: type, value: Any, default: Any, name: str) -> Any:
    if value is None or value == "":
        return default
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a {kind.__name__}, got {value!r}.") from exc


__all__ = ["DEFAULT_CONFIG_FILE", "DEFAULT_DATA_DIR", "DEFAULT_WORKERS", "IntegrationsConfig"]
