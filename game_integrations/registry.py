"""Table of loaded games, built once and then read concurrently.

:class:`GameRegistry` scans an integrations directory.  Every subdirectory
holding a ``manifest.json`` becomes one :class:`~game_integrations.game.Game`
stored under the subdirectory name.  The finished mapping is published in one
step while holding the build lock, so readers either see nothing (and trigger
the build themselves) or the complete table.  After publication the mapping is
immutable; a changed manifest needs a new registry.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional

from .cache import DEFAULT_CAPACITY
from .exceptions import LoadError
from .game import Game
from .host import HostApi
from .manifest import MANIFEST_FILE_NAME

logger = logging.getLogger(__name__)

GameLoader = Callable[[Path], Game]


class GameRegistry:
    """Build-once mapping from game identifiers to loaded games.

    Parameters
    ----------
    integrations_path:
        Directory whose subdirectories each hold one integration.
    host_factory:
        Callable producing the :class:`~game_integrations.host.HostApi`
        injected into each script.  Every game gets a fresh host instance.
    cache_capacity:
        Capacity of each game's memo cache.
    strict:
        When ``True`` the first :class:`~game_integrations.exceptions.LoadError`
        aborts the build.  Otherwise broken integrations are skipped and
        reported through :attr:`load_failures`.
    """

    def __init__(
        self,
        integrations_path: Path,
        *,
        host_factory: Callable[[], HostApi] = HostApi,
        cache_capacity: int = DEFAULT_CAPACITY,
        strict: bool = False,
        loader: Optional[GameLoader] = None,
    ) -> None:
        self._path = Path(integrations_path)
        self._host_factory = host_factory
        self._cache_capacity = cache_capacity
        self._strict = strict
        self._loader = loader or self._load_game
        self._games: Optional[Mapping[str, Game]] = None
        self._failures: Mapping[str, LoadError] = MappingProxyType({})
        self._lock = RLock()

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_built(self) -> bool:
        return self._games is not None

    @property
    def load_failures(self) -> Mapping[str, LoadError]:
        """Integrations skipped during the build, keyed by directory name."""

        return self._failures

    def build(self) -> "GameRegistry":
        """Scan the integrations directory once; later calls are no-ops."""

        with self._lock:
            if self._games is not None:
                return self
            if not self._path.is_dir():
                raise LoadError(f"Integrations directory '{self._path}' does not exist.")
            games: Dict[str, Game] = {}
            failures: Dict[str, LoadError] = {}
            for entry in sorted(self._path.iterdir()):
                if not entry.is_dir():
                    continue
                try:
                    games[entry.name] = self._loader(entry / MANIFEST_FILE_NAME)
                except LoadError as exc:
                    if self._strict:
                        raise
                    logger.warning("Skipping integration '%s': %s", entry.name, exc)
                    failures[entry.name] = exc
            self._failures = MappingProxyType(failures)
            self._games = MappingProxyType(games)
            logger.info("Loaded %d game integration(s) from %s", len(games), self._path)
            return self

    def get(self, name: str) -> Optional[Game]:
        return self.list().get(name)

    def list(self) -> Mapping[str, Game]:
        games = self._games
        if games is None:
            games = self.build()._games
        return games  # type: ignore[return-value]

    def get_unchecked(self, name: str) -> Game:
        """Return the game ``name`` without an existence check.

        Only valid for names taken from :meth:`list` or :meth:`get`; never pass
        unvalidated input here.  Raises ``KeyError`` otherwise.
        """

        return self.list()[name]

    def __contains__(self, name: object) -> bool:
        return name in self.list()

    def __iter__(self) -> Iterator[str]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self.list())

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _load_game(self, manifest_path: Path) -> Game:
        return Game.load(
            manifest_path,
            host=self._host_factory(),
            cache_capacity=self._cache_capacity,
        )


__all__ = ["GameRegistry"]
