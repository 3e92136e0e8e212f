"""Launch configuration handed to the process launch collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .base import IntegrationStandard, get_str, get_str_list, get_str_map, require_table


@dataclass(frozen=True, slots=True)
class GameLaunchOptions:
    executable: str
    options: Tuple[str, ...] = field(default_factory=tuple)
    environment: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def env(self) -> Dict[str, str]:
        """Environment variables as a fresh mutable mapping."""

        return dict(self.environment)

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "GameLaunchOptions":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "GameLaunchOptions")
            environment = get_str_map(table, "environment", "GameLaunchOptions")
            return cls(
                executable=get_str(table, "executable", "GameLaunchOptions"),
                options=tuple(get_str_list(table, "options", "GameLaunchOptions")),
                environment=tuple(environment.items()),
            )
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            return {
                "executable": self.executable,
                "options": list(self.options),
                "environment": dict(self.environment),
            }
        raise NotImplementedError(standard)


__all__ = ["GameLaunchOptions"]
