"""Addon groups and addons published by integration scripts.

An addon never stores its installation path.  The path is derived from the
addon type and the edition's configured directories:

* ``module`` addons live inside the game installation itself;
* ``layer`` and ``component`` addons live under
  ``<addons root>/<group name>/<addon name>``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, Tuple

from ..exceptions import MarshalError
from .base import (
    IntegrationStandard,
    get_bool,
    get_str,
    require_sequence,
    require_table,
)

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..settings import EditionPaths, EnabledAddon


class AddonType(Enum):
    MODULE = "module"
    LAYER = "layer"
    COMPONENT = "component"

    @classmethod
    def from_str(cls, value: str, standard: IntegrationStandard) -> "AddonType":
        if standard is IntegrationStandard.V1:
            try:
                return cls(value)
            except ValueError as exc:
                raise MarshalError(f"Wrong v1 addon type: {value!r}") from exc
        raise NotImplementedError(standard)

    def to_str(self, standard: IntegrationStandard) -> str:
        if standard is IntegrationStandard.V1:
            return self.value
        raise NotImplementedError(standard)


@dataclass(frozen=True, slots=True)
class Addon:
    type: AddonType
    name: str
    title: str
    version: str
    required: bool

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "Addon":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "Addon")
            return cls(
                type=AddonType.from_str(get_str(table, "type", "Addon"), standard),
                name=get_str(table, "name", "Addon"),
                title=get_str(table, "title", "Addon"),
                version=get_str(table, "version", "Addon"),
                required=get_bool(table, "required", "Addon"),
            )
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            return {
                "type": self.type.to_str(standard),
                "name": self.name,
                "title": self.title,
                "version": self.version,
                "required": self.required,
            }
        raise NotImplementedError(standard)

    def installation_path(self, group_name: str, paths: "EditionPaths") -> Path:
        """Return where this addon is installed for the given edition paths."""

        if self.type is AddonType.MODULE:
            return Path(paths.game)
        return Path(paths.addons) / group_name / self.name


@dataclass(frozen=True, slots=True)
class AddonsGroup:
    name: str
    title: str
    addons: Tuple[Addon, ...] = field(default_factory=tuple)

    def get(self, addon_name: str) -> Addon:
        for addon in self.addons:
            if addon.name == addon_name:
                return addon
        raise KeyError(addon_name)

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "AddonsGroup":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "AddonsGroup")
            name = get_str(table, "name", "AddonsGroup")
            raw_addons = require_sequence(table.get("addons"), f"AddonsGroup[{name}].addons")
            addons = tuple(Addon.from_table(addon, standard) for addon in raw_addons)
            _ensure_unique((addon.name for addon in addons), f"addon in group {name!r}")
            return cls(name=name, title=get_str(table, "title", "AddonsGroup"), addons=addons)
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            return {
                "name": self.name,
                "title": self.title,
                "addons": [addon.to_table(standard) for addon in self.addons],
            }
        raise NotImplementedError(standard)


def groups_from_sequence(values: Any, standard: IntegrationStandard) -> Tuple[AddonsGroup, ...]:
    """Decode a script's addons list, rejecting duplicate group names."""

    groups = tuple(
        AddonsGroup.from_table(group, standard)
        for group in require_sequence(values, "addons list")
    )
    _ensure_unique((group.name for group in groups), "addons group")
    return groups


def is_addon_enabled(
    enabled_addons: Iterable["EnabledAddon"], addon: Addon, group: AddonsGroup
) -> bool:
    """Required addons are always enabled; others must be listed in settings."""

    return addon.required or any(
        enabled.group == group.name and enabled.name == addon.name
        for enabled in enabled_addons
    )


def _ensure_unique(names: Iterable[str], what: str) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise MarshalError(f"Duplicate {what}: {name!r}")
        seen.add(name)


__all__ = [
    "Addon",
    "AddonType",
    "AddonsGroup",
    "groups_from_sequence",
    "is_addon_enabled",
]
