"""Application context wiring configuration, settings and registry together."""

from __future__ import annotations

import functools
from dataclasses import dataclass

from .config import IntegrationsConfig
from .host import HostApi
from .registry import GameRegistry
from .settings import SettingsStore


@dataclass(slots=True)
class AppContext:
    """Everything a launcher front end needs, built once at startup."""

    config: IntegrationsConfig
    settings: SettingsStore
    registry: GameRegistry

    @classmethod
    def from_config(cls, config: IntegrationsConfig, *, strict: bool = False) -> "AppContext":
        if config.settings_file is not None:
            settings = SettingsStore.load(
                config.settings_file,
                games_root=config.games_root,
                addons_root=config.addons_root,
            )
        else:
            settings = SettingsStore(games_root=config.games_root, addons_root=config.addons_root)
        registry = GameRegistry(
            config.integrations_path,
            host_factory=functools.partial(HostApi, http_timeout=config.http_timeout),
            cache_capacity=config.cache_capacity,
            strict=strict,
        )
        return cls(config=config, settings=settings, registry=registry)


__all__ = ["AppContext"]
