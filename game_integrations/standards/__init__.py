"""Versioned data model exchanged with integration scripts.

Every record type offers ``from_table(table, standard)`` and
``to_table(standard)``.  The ``standard`` argument selects the wire format; a
script bound to ``v1`` keeps receiving and producing exactly the ``v1`` field
set even after newer standards are added.
"""

from __future__ import annotations

from .addons import Addon, AddonType, AddonsGroup, groups_from_sequence, is_addon_enabled
from .base import IntegrationStandard
from .diff import Diff, DiffStatus
from .download import Download, DownloadInfo, DownloadType
from .game import GameEdition
from .integrity import IntegrityFile, IntegrityInfo
from .launch_options import GameLaunchOptions
from .status import GameStatus, StatusSeverity

__all__ = [
    "Addon",
    "AddonType",
    "AddonsGroup",
    "Diff",
    "DiffStatus",
    "Download",
    "DownloadInfo",
    "DownloadType",
    "GameEdition",
    "GameLaunchOptions",
    "GameStatus",
    "IntegrationStandard",
    "IntegrityFile",
    "IntegrityInfo",
    "StatusSeverity",
    "groups_from_sequence",
    "is_addon_enabled",
]
