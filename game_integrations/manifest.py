"""Integration manifest parsing.

Each game directory ships a ``manifest.json`` that names the game, points at
its integration script and declares the wire-format standard the script was
written against::

    {
        "manifest_version": 1,
        "game": {"name": "genshin", "title": "Genshin Impact", "developer": "miHoYo"},
        "script": {"path": "integration.py", "standard": "v1"}
    }

The flat form (``game_name``, ``game_title``, ``game_developer``,
``script_path``, ``script_standard``) is accepted as well.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from .exceptions import LoadError, MarshalError
from .standards import IntegrationStandard

MANIFEST_FILE_NAME = "manifest.json"


@dataclass(frozen=True, slots=True)
class Manifest:
    """Immutable description of one game integration."""

    game_name: str
    game_title: str
    game_developer: str
    script_path: str
    script_standard: IntegrationStandard

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Manifest":
        if not isinstance(data, Mapping):
            raise LoadError("Manifest root must be a JSON object.")
        if "game" in data or "script" in data:
            game = _section(data, "game")
            script = _section(data, "script")
            values = {
                "game_name": game.get("name"),
                "game_title": game.get("title"),
                "game_developer": game.get("developer"),
                "script_path": script.get("path"),
                "script_standard": script.get("standard"),
            }
        else:
            values = {key: data.get(key) for key in _FLAT_FIELDS}
        missing = [key for key, value in values.items() if not isinstance(value, str) or not value]
        if missing:
            raise LoadError("Manifest is missing required field(s): " + ", ".join(missing))
        try:
            standard = IntegrationStandard.from_str(values.pop("script_standard"))
        except MarshalError as exc:
            raise LoadError(str(exc)) from exc
        return cls(script_standard=standard, **values)

    @classmethod
    def load(cls, path: Path) -> "Manifest":
        try:
            data = json.loads(Path(path).read_text(encoding="utf8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(f"Unable to read manifest '{path}': {exc}") from exc
        except ValueError as exc:
            raise LoadError(f"Manifest '{path}' is not valid JSON: {exc}") from exc
        return cls.from_mapping(data)

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "manifest_version": 1,
            "game": {
                "name": self.game_name,
                "title": self.game_title,
                "developer": self.game_developer,
            },
            "script": {
                "path": self.script_path,
                "standard": self.script_standard.value,
            },
        }

    def resolve_script_path(self, manifest_dir: Path) -> Path:
        """Return the script path as given when absolute, else relative to ``manifest_dir``."""

        script_path = Path(self.script_path)
        if script_path.is_absolute():
            return script_path
        return Path(manifest_dir) / script_path


_FLAT_FIELDS = ("game_name", "game_title", "game_developer", "script_path", "script_standard")


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = data.get(key)
    if not isinstance(section, Mapping):
        raise LoadError(f"Manifest section '{key}' must be a JSON object.")
    return section


__all__ = ["MANIFEST_FILE_NAME", "Manifest"]
