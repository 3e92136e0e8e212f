"""One loaded game integration: manifest, driver, cache and call lock.

A :class:`Game` is the unit the registry stores and the scanners share.  It
adds two things on top of the bare :class:`~game_integrations.driver.Driver`:

* **Serialisation.**  Integration scripts are not thread-safe.  Every call
  into the driver happens while holding the game's own lock, so a script
  context is entered by at most one thread at a time.  Different games run in
  parallel.
* **Memoisation.**  Results that are stable for the whole process lifetime
  (editions, pictures, styles, addon lists) are cached in a
  :class:`~game_integrations.cache.Cache` owned by the game.  Install state,
  versions, diffs and running state are never cached.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from .cache import DEFAULT_CAPACITY, Cache, is_missing
from .driver import Capability, Driver, create_driver
from .host import HostApi, load_script
from .manifest import Manifest
from .standards import (
    AddonsGroup,
    Diff,
    Download,
    GameEdition,
    GameLaunchOptions,
    GameStatus,
    IntegrityInfo,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Game:
    """Thread-safe, memoising façade over one integration driver."""

    def __init__(
        self,
        manifest: Manifest,
        driver: Driver,
        *,
        script_path: Optional[Path] = None,
        cache: Optional[Cache[str, Any]] = None,
    ) -> None:
        if driver.standard is not manifest.script_standard:
            raise ValueError(
                f"Driver standard {driver.standard.value} does not match manifest standard "
                f"{manifest.script_standard.value}."
            )
        self.manifest = manifest
        self.script_path = script_path
        self._driver = driver
        self._cache: Cache[str, Any] = cache if cache is not None else Cache()
        self._lock = RLock()

    @classmethod
    def load(
        cls,
        manifest_path: Path,
        *,
        host: Optional[HostApi] = None,
        cache_capacity: int = DEFAULT_CAPACITY,
    ) -> "Game":
        """Load a manifest, execute its script and bind the matching driver."""

        loaded = load_script(manifest_path, host)
        driver = create_driver(loaded.manifest.script_standard, loaded.context)
        return cls(
            loaded.manifest,
            driver,
            script_path=loaded.script_path,
            cache=Cache(cache_capacity),
        )

    @property
    def name(self) -> str:
        return self.manifest.game_name

    @property
    def title(self) -> str:
        return self.manifest.game_title

    @property
    def developer(self) -> str:
        return self.manifest.game_developer

    @property
    def cache(self) -> Cache[str, Any]:
        return self._cache

    def __repr__(self) -> str:
        return f"Game(name={self.name!r}, standard={self.manifest.script_standard.value!r})"

    # ------------------------------------------------------------------
    # capabilities
    # ------------------------------------------------------------------
    def supports(self, capability: Capability) -> bool:
        return self._invoke(self._driver.supports, capability)

    def has_diff_transition(self) -> bool:
        return self._invoke(self._driver.has_diff_transition)

    def has_diff_post_transition(self) -> bool:
        return self._invoke(self._driver.has_diff_post_transition)

    def has_integrity_hash(self) -> bool:
        return self._invoke(self._driver.has_integrity_hash)

    def has_addons_diff_transition(self) -> bool:
        return self._invoke(self._driver.has_addons_diff_transition)

    def has_addons_diff_post_transition(self) -> bool:
        return self._invoke(self._driver.has_addons_diff_post_transition)

    # ------------------------------------------------------------------
    # cached game operations
    # ------------------------------------------------------------------
    def get_editions_list(self) -> Tuple[GameEdition, ...]:
        return self._cached("editions", lambda: tuple(self._driver.get_editions_list()))

    def get_card_picture(self, edition: str) -> str:
        return self._cached(f"card_picture/{edition}", lambda: self._driver.get_card_picture(edition))

    def get_background_picture(self, edition: str) -> str:
        return self._cached(
            f"background_picture/{edition}", lambda: self._driver.get_background_picture(edition)
        )

    def get_details_style(self, edition: str) -> Optional[str]:
        return self._cached(f"details_style/{edition}", lambda: self._driver.get_details_style(edition))

    def get_addons_list(self, edition: str) -> Tuple[AddonsGroup, ...]:
        return self._cached(f"addons/{edition}", lambda: tuple(self._driver.get_addons_list(edition)))

    # ------------------------------------------------------------------
    # uncached game operations
    # ------------------------------------------------------------------
    def is_installed(self, path: str, edition: str) -> bool:
        return self._invoke(self._driver.is_installed, str(path), edition)

    def get_version(self, path: str, edition: str) -> Optional[str]:
        return self._invoke(self._driver.get_version, str(path), edition)

    def get_download(self, edition: str) -> Download:
        return self._invoke(self._driver.get_download, edition)

    def get_diff(self, path: str, edition: str) -> Optional[Diff]:
        return self._invoke(self._driver.get_diff, str(path), edition)

    def get_status(self, path: str, edition: str) -> Optional[GameStatus]:
        return self._invoke(self._driver.get_status, str(path), edition)

    def get_launch_options(self, game_path: str, addons_path: str, edition: str) -> GameLaunchOptions:
        return self._invoke(self._driver.get_launch_options, str(game_path), str(addons_path), edition)

    def is_process_running(self, game_path: str, edition: str) -> bool:
        return self._invoke(self._driver.is_process_running, str(game_path), edition)

    def kill_process(self, game_path: str, edition: str) -> None:
        self._invoke(self._driver.kill_process, str(game_path), edition)

    def get_integrity(self, game_path: str, edition: str) -> List[IntegrityInfo]:
        return self._invoke(self._driver.get_integrity, str(game_path), edition)

    def run_diff_transition(self, transition_path: str, edition: str) -> None:
        self._invoke(self._driver.run_diff_transition, str(transition_path), edition)

    def run_diff_post_transition(self, game_path: str, edition: str) -> None:
        self._invoke(self._driver.run_diff_post_transition, str(game_path), edition)

    def integrity_hash(self, algorithm: str, data: bytes) -> str:
        return self._invoke(self._driver.integrity_hash, algorithm, data)

    # ------------------------------------------------------------------
    # uncached addon operations
    # ------------------------------------------------------------------
    def is_addon_installed(self, group_name: str, addon_name: str, addon_path: str, edition: str) -> bool:
        return self._invoke(self._driver.is_addon_installed, group_name, addon_name, str(addon_path), edition)

    def get_addon_version(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> Optional[str]:
        return self._invoke(self._driver.get_addon_version, group_name, addon_name, str(addon_path), edition)

    def get_addon_download(self, group_name: str, addon_name: str, edition: str) -> Download:
        return self._invoke(self._driver.get_addon_download, group_name, addon_name, edition)

    def get_addon_diff(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> Optional[Diff]:
        return self._invoke(self._driver.get_addon_diff, group_name, addon_name, str(addon_path), edition)

    def get_addon_paths(self, group_name: str, addon_name: str, addon_path: str, edition: str) -> List[str]:
        return self._invoke(self._driver.get_addon_paths, group_name, addon_name, str(addon_path), edition)

    def get_addon_integrity(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> List[IntegrityInfo]:
        return self._invoke(
            self._driver.get_addon_integrity, group_name, addon_name, str(addon_path), edition
        )

    def run_addons_diff_transition(
        self, group_name: str, addon_name: str, transition_path: str, edition: str
    ) -> None:
        self._invoke(
            self._driver.run_addons_diff_transition, group_name, addon_name, str(transition_path), edition
        )

    def run_addons_diff_post_transition(
        self, group_name: str, addon_name: str, addon_path: str, edition: str
    ) -> None:
        self._invoke(
            self._driver.run_addons_diff_post_transition, group_name, addon_name, str(addon_path), edition
        )

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _invoke(self, operation: Callable[..., T], *args: Any) -> T:
        with self._lock:
            return operation(*args)

    def _cached(self, key: str, compute: Callable[[], T]) -> T:
        # The lock spans lookup and compute so concurrent callers with the
        # same key trigger a single script call.
        with self._lock:
            value = self._cache.lookup(key)
            if not is_missing(value):
                return value
            value = compute()
            self._cache.set(key, value)
            logger.debug("%s: cached %s", self.name, key)
            return value


__all__ = ["Game"]
