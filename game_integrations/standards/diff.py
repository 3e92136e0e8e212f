"""Installed-versus-latest deltas for games and addons."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import MarshalError
from .base import IntegrationStandard, get_str, require_table
from .download import DownloadInfo


class DiffStatus(Enum):
    """State of an installation compared to the latest available version.

    New states are added as new members; the v1 wire names are fixed.
    """

    UP_TO_DATE = "latest"
    OUTDATED = "outdated"
    UNAVAILABLE = "unavailable"

    @classmethod
    def from_str(cls, value: str, standard: IntegrationStandard) -> "DiffStatus":
        if standard is IntegrationStandard.V1:
            try:
                return cls(value)
            except ValueError as exc:
                raise MarshalError(f"Wrong v1 diff status: {value!r}") from exc
        raise NotImplementedError(standard)

    def to_str(self, standard: IntegrationStandard) -> str:
        if standard is IntegrationStandard.V1:
            return self.value
        raise NotImplementedError(standard)


@dataclass(frozen=True, slots=True)
class Diff:
    """How to move from the installed version to the latest one.

    ``diff`` is ``None`` when no transition payload exists, which is the
    normal case for ``UP_TO_DATE`` and ``UNAVAILABLE`` statuses.
    """

    current_version: str
    latest_version: str
    edition: str
    status: DiffStatus
    diff: Optional[DownloadInfo] = None

    @property
    def needs_update(self) -> bool:
        return self.status is DiffStatus.OUTDATED

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "Diff":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "Diff")
            payload = table.get("diff")
            return cls(
                current_version=get_str(table, "current_version", "Diff"),
                latest_version=get_str(table, "latest_version", "Diff"),
                edition=get_str(table, "edition", "Diff"),
                status=DiffStatus.from_str(get_str(table, "status", "Diff"), standard),
                diff=DownloadInfo.from_table(payload, standard) if payload is not None else None,
            )
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            table: Dict[str, Any] = {
                "current_version": self.current_version,
                "latest_version": self.latest_version,
                "edition": self.edition,
                "status": self.status.to_str(standard),
            }
            if self.diff is not None:
                table["diff"] = self.diff.to_table(standard)
            return table
        raise NotImplementedError(standard)


__all__ = ["Diff", "DiffStatus"]
