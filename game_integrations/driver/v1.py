"""Driver bound to the ``v1`` integration standard.

The table below is the complete ``v1`` contract: which script function backs
each operation.  Argument order is fixed by the methods of :class:`V1Driver`.
Neither may change once published, otherwise existing third-party scripts
stop working; a new contract is a new standard with its own driver.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, List, Optional, TypeVar

from ..exceptions import MarshalError
from ..host import ScriptContext
from ..standards import (
    AddonsGroup,
    Diff,
    Download,
    GameEdition,
    GameLaunchOptions,
    GameStatus,
    IntegrationStandard,
    IntegrityInfo,
    groups_from_sequence,
)
from ..standards.base import describe, require_sequence
from .base import Capability, Driver

logger = logging.getLogger(__name__)

T = TypeVar("T")

ENTRY_POINTS = MappingProxyType(
    {
        "get_editions_list": "v1_game_get_editions_list",
        "get_card_picture": "v1_visual_get_card_picture",
        "get_background_picture": "v1_visual_get_background_picture",
        "get_details_style": "v1_visual_get_details_background_css",
        "is_installed": "v1_game_is_installed",
        "get_version": "v1_game_get_version",
        "get_download": "v1_game_get_download",
        "get_diff": "v1_game_get_diff",
        "get_status": "v1_game_get_status",
        "get_launch_options": "v1_game_get_launch_options",
        "is_process_running": "v1_game_is_running",
        "kill_process": "v1_game_kill",
        "get_integrity": "v1_game_get_integrity_info",
        "run_diff_transition": "v1_game_diff_transition",
        "run_diff_post_transition": "v1_game_diff_post_transition",
        "integrity_hash": "v1_integrity_hash",
        "get_addons_list": "v1_addons_get_list",
        "is_addon_installed": "v1_addons_is_installed",
        "get_addon_version": "v1_addons_get_version",
        "get_addon_download": "v1_addons_get_download",
        "get_addon_diff": "v1_addons_get_diff",
        "get_addon_paths": "v1_addons_get_paths",
        "get_addon_integrity": "v1_addons_get_integrity_info",
        "run_addons_diff_transition": "v1_addons_diff_transition",
        "run_addons_diff_post_transition": "v1_addons_diff_post_transition",
    }
)

CAPABILITY_ENTRY_POINTS = MappingProxyType(
    {
        Capability.DETAILS_STYLE: ENTRY_POINTS["get_details_style"],
        Capability.DIFF_TRANSITION: ENTRY_POINTS["run_diff_transition"],
        Capability.DIFF_POST_TRANSITION: ENTRY_POINTS["run_diff_post_transition"],
        Capability.INTEGRITY_HASH: ENTRY_POINTS["integrity_hash"],
        Capability.ADDONS_DIFF_TRANSITION: ENTRY_POINTS["run_addons_diff_transition"],
        Capability.ADDONS_DIFF_POST_TRANSITION: ENTRY_POINTS["run_addons_diff_post_transition"],
    }
)


class V1Driver(Driver):
    """Marshals ``v1`` calls into a :class:`~game_integrations.host.ScriptContext`."""

    standard = IntegrationStandard.V1

    def __init__(self, context: ScriptContext) -> None:
        self._context = context

    @property
    def context(self) -> ScriptContext:
        return self._context

    def supports(self, capability: Capability) -> bool:
        return self._context.probe(CAPABILITY_ENTRY_POINTS[capability])

    # ------------------------------------------------------------------
    # game level
    # ------------------------------------------------------------------
    def get_editions_list(self) -> List[GameEdition]:
        editions = self._call("get_editions_list")
        return [
            GameEdition.from_table(edition, self.standard)
            for edition in require_sequence(editions, "v1_game_get_editions_list result")
        ]

    def get_card_picture(self, edition: str) -> str:
        return self._expect(str, "get_card_picture", self._call("get_card_picture", edition))

    def get_background_picture(self, edition: str) -> str:
        return self._expect(str, "get_background_picture", self._call("get_background_picture", edition))

    def get_details_style(self, edition: str) -> Optional[str]:
        if not self.supports(Capability.DETAILS_STYLE):
            return None
        return self._expect_optional(str, "get_details_style", self._call("get_details_style", edition))

    def is_installed(self, path: str, edition: str) -> bool:
        return self._expect(bool, "is_installed", self._call("is_installed", path, edition))

    def get_version(self, path: str, edition: str) -> Optional[str]:
        return self._expect_optional(str, "get_version", self._call("get_version", path, edition))

    def get_download(self, edition: str) -> Download:
        return Download.from_table(self._call("get_download", edition), self.standard)

    def get_diff(self, path: str, edition: str) -> Optional[Diff]:
        return self._optional_record(Diff.from_table, self._call("get_diff", path, edition))

    def get_status(self, path: str, edition: str) -> Optional[GameStatus]:
        return self._optional_record(GameStatus.from_table, self._call("get_status", path, edition))

    def get_launch_options(self, game_path: str, addons_path: str, edition: str) -> GameLaunchOptions:
        options = self._call("get_launch_options", game_path, addons_path, edition)
        return GameLaunchOptions.from_table(options, self.standard)

    def is_process_running(self, game_path: str, edition: str) -> bool:
        return self._expect(bool, "is_process_running", self._call("is_process_running", game_path, edition))

    def kill_process(self, game_path: str, edition: str) -> None:
        self._call("kill_process", game_path, edition)

    def get_integrity(self, game_path: str, edition: str) -> List[IntegrityInfo]:
        return self._integrity_list("get_integrity", game_path, edition)

    def run_diff_transition(self, transition_path: str, edition: str) -> None:
        self._call("run_diff_transition", transition_path, edition)

    def run_diff_post_transition(self, game_path: str, edition: str) -> None:
        self._call("run_diff_post_transition", game_path, edition)

    def integrity_hash(self, algorithm: str, data: bytes) -> str:
        return self._expect(str, "integrity_hash", self._call("integrity_hash", algorithm, bytes(data)))

    # ------------------------------------------------------------------
    # addon level
    # ------------------------------------------------------------------
    def get_addons_list(self, edition: str) -> List[AddonsGroup]:
        return list(groups_from_sequence(self._call("get_addons_list", edition), self.standard))

    def is_addon_installed(self, group_name: str, addon_name: str, addon_path: str, edition: str) -> bool:
        result = self._call("is_addon_installed", group_name, addon_name, addon_path, edition)
        return self._expect(bool, "is_addon_installed", result)

    def get_addon_version(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> Optional[str]:
        result = self._call("get_addon_version", group_name, addon_name, addon_path, edition)
        return self._expect_optional(str, "get_addon_version", result)

    def get_addon_download(self, group_name: str, addon_name: str, edition: str) -> Download:
        result = self._call("get_addon_download", group_name, addon_name, edition)
        return Download.from_table(result, self.standard)

    def get_addon_diff(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> Optional[Diff]:
        result = self._call("get_addon_diff", group_name, addon_name, addon_path, edition)
        return self._optional_record(Diff.from_table, result)

    def get_addon_paths(self, group_name: str, addon_name: str, addon_path: str, edition: str) -> List[str]:
        result = self._call("get_addon_paths", group_name, addon_name, addon_path, edition)
        paths = require_sequence(result, "v1_addons_get_paths result")
        return [self._expect(str, "get_addon_paths", path) for path in paths]

    def get_addon_integrity(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> List[IntegrityInfo]:
        return self._integrity_list("get_addon_integrity", group_name, addon_name, addon_path, edition)

    def run_addons_diff_transition(
        self, group_name: str, addon_name: str, transition_path: str, edition: str
    ) -> None:
        self._call("run_addons_diff_transition", group_name, addon_name, transition_path, edition)

    def run_addons_diff_post_transition(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> None:
        self._call("run_addons_diff_post_transition", group_name, addon_name, addon_path, edition)

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _call(self, operation: str, *args: Any) -> Any:
        entry_point = ENTRY_POINTS[operation]
        result = self._context.call(entry_point, *args)
        logger.debug("%s%r -> %r", entry_point, args, result)
        return result

    def _integrity_list(self, operation: str, *args: Any) -> List[IntegrityInfo]:
        result = self._call(operation, *args)
        infos = require_sequence(result, f"{ENTRY_POINTS[operation]} result")
        return [IntegrityInfo.from_table(info, self.standard) for info in infos]

    def _optional_record(self, decode: Callable[[Any, IntegrationStandard], T], value: Any) -> Optional[T]:
        if value is None:
            return None
        return decode(value, self.standard)

    @staticmethod
    def _expect(kind: type, operation: str, value: Any) -> Any:
        # bool is an int subclass, but no v1 operation returns integers.
        if not isinstance(value, kind):
            raise MarshalError(
                f"{ENTRY_POINTS[operation]} must return {kind.__name__}, got {describe(value)}"
            )
        return value

    @classmethod
    def _expect_optional(cls, kind: type, operation: str, value: Any) -> Any:
        if value is None:
            return None
        return cls._expect(kind, operation, value)


__all__ = ["CAPABILITY_ENTRY_POINTS", "ENTRY_POINTS", "V1Driver"]
