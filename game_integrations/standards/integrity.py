"""File integrity expectations reported by integration scripts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .base import IntegrationStandard, get_int, get_str, get_table, require_table


@dataclass(frozen=True, slots=True)
class IntegrityFile:
    """File the expectation applies to, relative to the install root."""

    path: str
    size: int
    uri: str

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "IntegrityFile":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "IntegrityFile")
            return cls(
                path=get_str(table, "path", "IntegrityFile"),
                size=get_int(table, "size", "IntegrityFile"),
                uri=get_str(table, "uri", "IntegrityFile"),
            )
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            return {"path": self.path, "size": self.size, "uri": self.uri}
        raise NotImplementedError(standard)


@dataclass(frozen=True, slots=True)
class IntegrityInfo:
    """Hash algorithm, expected digest and the file it covers.

    ``hash`` is kept as the raw algorithm name the script declared.  Well known
    algorithms are computed by the host; anything else is delegated back to the
    script's optional ``integrity_hash`` hook.
    """

    hash: str
    value: str
    file: IntegrityFile

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "IntegrityInfo":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "IntegrityInfo")
            return cls(
                hash=get_str(table, "hash", "IntegrityInfo"),
                value=get_str(table, "value", "IntegrityInfo"),
                file=IntegrityFile.from_table(get_table(table, "file", "IntegrityInfo"), standard),
            )
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            return {
                "hash": self.hash,
                "value": self.value,
                "file": self.file.to_table(standard),
            }
        raise NotImplementedError(standard)


__all__ = ["IntegrityFile", "IntegrityInfo"]
