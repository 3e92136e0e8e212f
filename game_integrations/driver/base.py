"""Abstract driver contract shared by every wire-format version."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import FrozenSet, List, Optional

from ..standards import (
    AddonsGroup,
    Diff,
    Download,
    GameEdition,
    GameLaunchOptions,
    GameStatus,
    IntegrationStandard,
    IntegrityInfo,
)


class Capability(Enum):
    """Optional script hooks a driver can probe for before invoking them."""

    DETAILS_STYLE = "details_style"
    DIFF_TRANSITION = "diff_transition"
    DIFF_POST_TRANSITION = "diff_post_transition"
    INTEGRITY_HASH = "integrity_hash"
    ADDONS_DIFF_TRANSITION = "addons_diff_transition"
    ADDONS_DIFF_POST_TRANSITION = "addons_diff_post_transition"


class Driver(ABC):
    """Typed game and addon operations backed by one integration script.

    Implementations bind the contract to exactly one
    :class:`~game_integrations.standards.IntegrationStandard` for their whole
    lifetime.  Operations that cross into the script raise
    :class:`~game_integrations.exceptions.ScriptCallError` when the entry point
    is missing or raises, and
    :class:`~game_integrations.exceptions.MarshalError` when the returned value
    does not match the schema.  Optional hooks are discovered with
    :meth:`supports` (or the ``has_*`` shorthands) first; a ``False`` answer is
    a normal result, never an error.
    """

    standard: IntegrationStandard

    # ------------------------------------------------------------------
    # capability probing
    # ------------------------------------------------------------------
    @abstractmethod
    def supports(self, capability: Capability) -> bool:
        """Return ``True`` when the script implements ``capability``."""

    def capabilities(self) -> FrozenSet[Capability]:
        return frozenset(capability for capability in Capability if self.supports(capability))

    def has_diff_transition(self) -> bool:
        return self.supports(Capability.DIFF_TRANSITION)

    def has_diff_post_transition(self) -> bool:
        return self.supports(Capability.DIFF_POST_TRANSITION)

    def has_integrity_hash(self) -> bool:
        return self.supports(Capability.INTEGRITY_HASH)

    def has_addons_diff_transition(self) -> bool:
        return self.supports(Capability.ADDONS_DIFF_TRANSITION)

    def has_addons_diff_post_transition(self) -> bool:
        return self.supports(Capability.ADDONS_DIFF_POST_TRANSITION)

    # ------------------------------------------------------------------
    # game level
    # ------------------------------------------------------------------
    @abstractmethod
    def get_editions_list(self) -> List[GameEdition]: ...

    @abstractmethod
    def get_card_picture(self, edition: str) -> str: ...

    @abstractmethod
    def get_background_picture(self, edition: str) -> str: ...

    @abstractmethod
    def get_details_style(self, edition: str) -> Optional[str]:
        """Return the details page CSS, or ``None`` when the hook is absent."""

    @abstractmethod
    def is_installed(self, path: str, edition: str) -> bool: ...

    @abstractmethod
    def get_version(self, path: str, edition: str) -> Optional[str]: ...

    @abstractmethod
    def get_download(self, edition: str) -> Download: ...

    @abstractmethod
    def get_diff(self, path: str, edition: str) -> Optional[Diff]:
        """Return ``None`` when the game is not installed."""

    @abstractmethod
    def get_status(self, path: str, edition: str) -> Optional[GameStatus]: ...

    @abstractmethod
    def get_launch_options(self, game_path: str, addons_path: str, edition: str) -> GameLaunchOptions: ...

    @abstractmethod
    def is_process_running(self, game_path: str, edition: str) -> bool: ...

    @abstractmethod
    def kill_process(self, game_path: str, edition: str) -> None: ...

    @abstractmethod
    def get_integrity(self, game_path: str, edition: str) -> List[IntegrityInfo]: ...

    @abstractmethod
    def run_diff_transition(self, transition_path: str, edition: str) -> None: ...

    @abstractmethod
    def run_diff_post_transition(self, game_path: str, edition: str) -> None: ...

    @abstractmethod
    def integrity_hash(self, algorithm: str, data: bytes) -> str: ...

    # ------------------------------------------------------------------
    # addon level
    # ------------------------------------------------------------------
    @abstractmethod
    def get_addons_list(self, edition: str) -> List[AddonsGroup]: ...

    @abstractmethod
    def is_addon_installed(self, group_name: str, addon_name: str, addon_path: str, edition: str) -> bool: ...

    @abstractmethod
    def get_addon_version(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> Optional[str]: ...

    @abstractmethod
    def get_addon_download(self, group_name: str, addon_name: str, edition: str) -> Download: ...

    @abstractmethod
    def get_addon_diff(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> Optional[Diff]: ...

    @abstractmethod
    def get_addon_paths(self, group_name: str, addon_name: str, addon_path: str, edition: str) -> List[str]: ...

    @abstractmethod
    def get_addon_integrity(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> List[IntegrityInfo]: ...

    @abstractmethod
    def run_addons_diff_transition(
        self, group_name: str, addon_name: str, transition_path: str, edition: str
    ) -> None: ...

    @abstractmethod
    def run_addons_diff_post_transition(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> None: ...


__all__ = ["Capability", "Driver"]
