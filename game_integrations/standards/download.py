"""Installable payload descriptions.

A :class:`Download` only says *what* has to be fetched; moving the bytes is the
transfer collaborator's job.  Payloads come in two shapes: a single archive
behind one URI, or an archive split into ordered segments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..exceptions import MarshalError
from .base import (
    IntegrationStandard,
    get_int,
    get_str,
    get_str_list,
    get_table,
    require_table,
)


class DownloadType(str, Enum):
    ARCHIVE = "archive"
    SEGMENTS = "segments"

    @classmethod
    def from_str(cls, value: str, standard: IntegrationStandard) -> "DownloadType":
        if standard is IntegrationStandard.V1:
            try:
                return cls(value)
            except ValueError as exc:
                raise MarshalError(f"Wrong v1 download type: {value!r}") from exc
        raise NotImplementedError(standard)

    def to_str(self, standard: IntegrationStandard) -> str:
        if standard is IntegrationStandard.V1:
            return self.value
        raise NotImplementedError(standard)


@dataclass(frozen=True, slots=True)
class DownloadInfo:
    """Location and size of a payload."""

    type: DownloadType
    size: int
    uri: Optional[str] = None
    segments: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def uris(self) -> Tuple[str, ...]:
        """Every URI the transfer collaborator has to fetch, in order."""

        if self.type is DownloadType.ARCHIVE:
            return (self.uri,) if self.uri else ()
        return self.segments

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "DownloadInfo":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "DownloadInfo")
            kind = DownloadType.from_str(get_str(table, "type", "DownloadInfo"), standard)
            size = get_int(table, "size", "DownloadInfo")
            if kind is DownloadType.ARCHIVE:
                return cls(type=kind, size=size, uri=get_str(table, "uri", "DownloadInfo"))
            segments = tuple(get_str_list(table, "segments", "DownloadInfo"))
            if not segments:
                raise MarshalError("DownloadInfo.segments must not be empty")
            return cls(type=kind, size=size, segments=segments)
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            table: Dict[str, Any] = {"type": self.type.to_str(standard), "size": self.size}
            if self.type is DownloadType.ARCHIVE:
                table["uri"] = self.uri
            else:
                table["segments"] = list(self.segments)
            return table
        raise NotImplementedError(standard)


@dataclass(frozen=True, slots=True)
class Download:
    """Latest installable version of a game or addon edition."""

    version: str
    edition: str
    download: DownloadInfo

    @classmethod
    def from_table(cls, table: Any, standard: IntegrationStandard) -> "Download":
        if standard is IntegrationStandard.V1:
            table = require_table(table, "Download")
            return cls(
                version=get_str(table, "version", "Download"),
                edition=get_str(table, "edition", "Download"),
                download=DownloadInfo.from_table(get_table(table, "download", "Download"), standard),
            )
        raise NotImplementedError(standard)

    def to_table(self, standard: IntegrationStandard) -> Dict[str, Any]:
        if standard is IntegrationStandard.V1:
            return {
                "version": self.version,
                "edition": self.edition,
                "download": self.download.to_table(standard),
            }
        raise NotImplementedError(standard)


__all__ = ["Download", "DownloadInfo", "DownloadType"]
