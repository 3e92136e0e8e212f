"""Runtime status bundles reported by integration scripts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import MarshalError
from .base import IntegrationStandard, get_bool, get_optional_str, get_str, require_table


class StatusSeverity(str, Enum):
    NONE = "none"
    WARNING = "warning"
    CRITICAL = "critical"

    @classmethod
    def from_str(cls, value: str, standard: IntegrationStandard) -> "StatusSeverity":
        if standard is IntegrationStandard.V1:
            try:
                return cls(value)
            except ValueError as exc:
                raise MarshalError(f"Wrong v1 status severity: {value!r}") from exc
        raise NotImplementedError(standard)


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Whether the game may be launched right now, and why not."""

    allow_launch: bool
    severity: StatusSeverity = StatusSeverity.NONE
    reason: Optional[str] = None

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "GameStatus":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "GameStatus")
            return cls(
                allow_launch=get_bool(table, "allow_launch", "GameStatus"),
                severity=StatusSeverity.from_str(get_str(table, "severity", "GameStatus"), standard),
                reason=get_optional_str(table, "reason", "GameStatus"),
            )
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            table: Dict[str, Any] = {
                "allow_launch": self.allow_launch,
                "severity": self.severity.value,
            }
            if self.reason is not None:
                table["reason"] = self.reason
            return table
        raise NotImplementedError(standard)


__all__ = ["GameStatus", "StatusSeverity"]
