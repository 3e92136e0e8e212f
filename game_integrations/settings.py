"""Per-game user settings: install directories and enabled addons.

Settings are read from a single JSON or YAML document (chosen by file
suffix) keyed by game name::

    games:
      genshin:
        paths:
          global: {game: /games/genshin, addons: /games/genshin-addons}
        addons:
          global:
            - {group: voice-packs, name: en}

Editions without explicit paths fall back to ``<games_root>/<game>/<edition>``
and ``<addons_root>/<game>/<edition>``.  Editions without an ``addons`` entry
have no optional addons enabled.  The store is read-only once loaded, so the
scan workers can share it without locking.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class EnabledAddon:
    group: str
    name: str


@dataclass(frozen=True, slots=True)
class EditionPaths:
    game: Path
    addons: Path


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Resolved settings of one game."""

    game_name: str
    games_root: Path
    addons_root: Path
    paths: Mapping[str, EditionPaths] = field(default_factory=dict)
    addons: Mapping[str, Tuple[EnabledAddon, ...]] = field(default_factory=dict)

    def edition_paths(self, edition: str) -> EditionPaths:
        explicit = self.paths.get(edition)
        if explicit is not None:
            return explicit
        return EditionPaths(
            game=self.games_root / self.game_name / edition,
            addons=self.addons_root / self.game_name / edition,
        )

    def enabled_addons(self, edition: str) -> Tuple[EnabledAddon, ...]:
        return self.addons.get(edition, ())


class SettingsStore:
    """Read-only lookup of :class:`GameSettings` by game name."""

    def __init__(
        self,
        document: Optional[Mapping[str, Any]] = None,
        *,
        games_root: Path,
        addons_root: Path,
    ) -> None:
        self._games_root = Path(games_root)
        self._addons_root = Path(addons_root)
        games = (document or {}).get("games")
        if games is None:
            games = {}
        if not isinstance(games, Mapping):
            raise ConfigurationError("Settings 'games' section must be a mapping.")
        self._games: Mapping[str, GameSettings] = MappingProxyType(
            {str(name): self._parse_game(str(name), data) for name, data in games.items()}
        )

    @classmethod
    def load(cls, source: Path, *, games_root: Path, addons_root: Path) -> "SettingsStore":
        resolved = Path(source)
        if not resolved.exists():
            raise FileNotFoundError(resolved)
        text = resolved.read_text(encoding="utf8")
        try:
            if resolved.suffix.lower() in {".yaml", ".yml"}:
                payload = yaml.safe_load(text)
            else:
                payload = json.loads(text)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Unable to parse settings file '{resolved}': {exc}") from exc
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ConfigurationError("Settings root must be a mapping.")
        return cls(payload, games_root=games_root, addons_root=addons_root)

    def get_game_settings(self, game_name: str) -> GameSettings:
        settings = self._games.get(game_name)
        if settings is None:
            return GameSettings(game_name, self._games_root, self._addons_root)
        return settings

    def games(self) -> Tuple[str, ...]:
        return tuple(sorted(self._games))

    # ------------------------------------------------------------------
    # parsing helpers
    # ------------------------------------------------------------------
    def _parse_game(self, game_name: str, data: Any) -> GameSettings:
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Settings of game '{game_name}' must be a mapping.")
        paths: Dict[str, EditionPaths] = {}
        for edition, raw in _section(data, "paths", game_name).items():
            if not isinstance(raw, Mapping) or "game" not in raw or "addons" not in raw:
                raise ConfigurationError(
                    f"Paths of {game_name}/{edition} must define both 'game' and 'addons'."
                )
            paths[str(edition)] = EditionPaths(
                game=Path(str(raw["game"])).expanduser(),
                addons=Path(str(raw["addons"])).expanduser(),
            )
        addons: Dict[str, Tuple[EnabledAddon, ...]] = {}
        for edition, entries in _section(data, "addons", game_name).items():
            if not isinstance(entries, list):
                raise ConfigurationError(f"Addons of {game_name}/{edition} must be a list.")
            addons[str(edition)] = tuple(self._parse_addon(game_name, str(edition), entry) for entry in entries)
        return GameSettings(
            game_name=game_name,
            games_root=self._games_root,
            addons_root=self._addons_root,
            paths=MappingProxyType(paths),
            addons=MappingProxyType(addons),
        )

    @staticmethod
    def _parse_addon(game_name: str, edition: str, entry: Any) -> EnabledAddon:
        if not isinstance(entry, Mapping) or "group" not in entry or "name" not in entry:
            raise ConfigurationError(
                f"Enabled addon entries of {game_name}/{edition} need 'group' and 'name'."
            )
        return EnabledAddon(group=str(entry["group"]), name=str(entry["name"]))


def _section(data: Mapping[str, Any], key: str, game_name: str) -> Mapping[str, Any]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"Settings '{key}' of game '{game_name}' must be a mapping.")
    return section


__all__ = ["EditionPaths", "EnabledAddon", "GameSettings", "SettingsStore"]
