"""Game edition records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .base import IntegrationStandard, get_str, require_table


@dataclass(frozen=True, slots=True)
class GameEdition:
    """Named variant of a game (regional release, test server, ...)."""

    name: str
    title: str

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "GameEdition":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "GameEdition")
            return cls(
                name=get_str(table, "name", "GameEdition"),
                title=get_str(table, "title", "GameEdition"),
            )
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            return {"name": self.name, "title": self.title}
        raise NotImplementedError(standard)


__all__ = ["GameEdition"]
