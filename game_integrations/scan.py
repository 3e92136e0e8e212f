"""Concurrent scans over every registered game.

The addon scan answers one question for the launcher's loading screen: which
enabled addons of which game editions need to be installed or updated?  It
fans out over a bounded :class:`~concurrent.futures.ThreadPoolExecutor` in
three levels::

    list editions (one task per game)
      -> list addons (one task per edition)
        -> check addon (one task per enabled addon)

Only the orchestrating thread waits on futures.  Workers never block on other
workers, so a small pool cannot deadlock on its own fan-out.  Calls into one
game are serialised by the game's lock while different games proceed in
parallel.

Failure policy: a task raising an
:class:`~game_integrations.exceptions.IntegrationError` drops only its own
subtree.  The failure is logged and returned alongside the results; siblings
keep running.  ``strict=True`` raises
:class:`~game_integrations.exceptions.ScanError` carrying every failure once
all tasks have finished.  Other exceptions are programming errors and
propagate unchanged.
"""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_COMPLETED, Executor, Future, ThreadPoolExecutor, wait
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .config import DEFAULT_WORKERS
from .exceptions import IntegrationError, ScanError
from .game import Game
from .registry import GameRegistry
from .settings import EditionPaths, SettingsStore
from .standards import Addon, AddonsGroup, DiffStatus, GameEdition, is_addon_enabled

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CardInfo:
    """Identity of one game edition as shown on a game card."""

    game_name: str
    game_title: str
    game_developer: str
    edition: str
    picture_uri: str


@dataclass(frozen=True, slots=True)
class AddonsListEntry:
    """An enabled addon that is missing or outdated."""

    game_info: CardInfo
    group: AddonsGroup
    addon: Addon


@dataclass(frozen=True, slots=True)
class GameListEntry:
    game_name: str
    game_title: str
    game_developer: str
    edition: GameEdition
    card_picture: str


@dataclass(frozen=True, slots=True)
class ScanFailure:
    """One failed task and where in the fan-out it happened."""

    stage: str
    game_name: str
    error: IntegrationError
    edition: Optional[str] = None
    group: Optional[str] = None
    addon: Optional[str] = None

    def __str__(self) -> str:
        location = "/".join(part for part in (self.game_name, self.edition, self.group, self.addon) if part)
        return f"{self.stage} failed for {location}: {self.error}"


@dataclass(frozen=True)
class ScanResult:
    entries: FrozenSet[AddonsListEntry] = frozenset()
    failures: Tuple[ScanFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass(frozen=True)
class GamesList:
    installed: Tuple[GameListEntry, ...] = ()
    available: Tuple[GameListEntry, ...] = ()
    failures: Tuple[ScanFailure, ...] = ()


# A follow-up turns a finished task's result into further tasks.
FollowUp = Callable[[Any], Iterable["_Task"]]


@dataclass
class _Task:
    stage: str
    game: Game
    call: Callable[[], Any]
    follow_up: Optional[FollowUp] = None
    edition: Optional[str] = None
    group: Optional[str] = None
    addon: Optional[str] = None

    def failure(self, error: IntegrationError) -> ScanFailure:
        return ScanFailure(
            stage=self.stage,
            game_name=self.game.name,
            error=error,
            edition=self.edition,
            group=self.group,
            addon=self.addon,
        )


class _FanOut:
    """Runs tasks and their follow-ups until none are left."""

    def __init__(self, executor: Executor) -> None:
        self._executor = executor
        self._pending: Dict[Future, _Task] = {}
        self.failures: List[ScanFailure] = []

    def submit(self, task: _Task) -> None:
        self._pending[self._executor.submit(task.call)] = task

    def run(self, tasks: Iterable[_Task]) -> None:
        for task in tasks:
            self.submit(task)
        while self._pending:
            done, _ = wait(tuple(self._pending), return_when=FIRST_COMPLETED)
            for future in done:
                task = self._pending.pop(future)
                try:
                    result = future.result()
                except IntegrationError as exc:
                    failure = task.failure(exc)
                    logger.warning("%s", failure)
                    self.failures.append(failure)
                    continue
                if task.follow_up is not None:
                    for follow_up in task.follow_up(result):
                        self.submit(follow_up)


@contextmanager
def _pool(workers: int, executor: Optional[Executor]) -> Iterator[Executor]:
    if executor is not None:
        yield executor
        return
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="integration-scan") as pool:
        yield pool


def _finish(failures: List[ScanFailure], strict: bool) -> Tuple[ScanFailure, ...]:
    if strict and failures:
        raise ScanError(failures)
    return tuple(failures)


# ---------------------------------------------------------------------------
# addon scan
# ---------------------------------------------------------------------------
def check_addon(game: Game, edition: str, group: AddonsGroup, addon: Addon, addon_path: Path) -> bool:
    """Return ``True`` when the addon is not installed or its diff is outdated."""

    installed = game.is_addon_installed(group.name, addon.name, str(addon_path), edition)
    if not installed:
        return True
    diff = game.get_addon_diff(group.name, addon.name, str(addon_path), edition)
    # TODO: surface DiffStatus.UNAVAILABLE addons once the UI can show them.
    return diff is not None and diff.status is DiffStatus.OUTDATED


class _AddonScan:
    def __init__(self, settings: SettingsStore) -> None:
        self._settings = settings
        self.entries: set[AddonsListEntry] = set()

    def editions_task(self, game: Game) -> _Task:
        return _Task("list editions", game, game.get_editions_list, self._editions_listed(game))

    def _editions_listed(self, game: Game) -> FollowUp:
        def follow_up(editions: Tuple[GameEdition, ...]) -> Iterator[_Task]:
            for edition in editions:
                yield _Task(
                    "list addons",
                    game,
                    lambda edition=edition: self._card_and_addons(game, edition.name),
                    self._addons_listed(game, edition.name),
                    edition=edition.name,
                )

        return follow_up

    @staticmethod
    def _card_and_addons(game: Game, edition: str) -> Tuple[CardInfo, Tuple[AddonsGroup, ...]]:
        info = CardInfo(
            game_name=game.name,
            game_title=game.title,
            game_developer=game.developer,
            edition=edition,
            picture_uri=game.get_card_picture(edition),
        )
        return info, game.get_addons_list(edition)

    def _addons_listed(self, game: Game, edition: str) -> FollowUp:
        game_settings = self._settings.get_game_settings(game.name)
        enabled_addons = game_settings.enabled_addons(edition)
        paths = game_settings.edition_paths(edition)

        def follow_up(result: Tuple[CardInfo, Tuple[AddonsGroup, ...]]) -> Iterator[_Task]:
            info, groups = result
            for group in groups:
                for addon in group.addons:
                    if not is_addon_enabled(enabled_addons, addon, group):
                        continue
                    yield self._check_task(game, info, group, addon, paths)

        return follow_up

    def _check_task(
        self, game: Game, info: CardInfo, group: AddonsGroup, addon: Addon, paths: EditionPaths
    ) -> _Task:
        addon_path = addon.installation_path(group.name, paths)
        entry = AddonsListEntry(game_info=info, group=group, addon=addon)

        def record(needed: bool) -> Tuple[_Task, ...]:
            if needed:
                self.entries.add(entry)
            return ()

        return _Task(
            "check addon",
            game,
            lambda: check_addon(game, info.edition, group, addon, addon_path),
            record,
            edition=info.edition,
            group=group.name,
            addon=addon.name,
        )


def check_addons(
    registry: GameRegistry,
    settings: SettingsStore,
    *,
    workers: int = DEFAULT_WORKERS,
    strict: bool = False,
    executor: Optional[Executor] = None,
) -> ScanResult:
    """Find enabled addons that are missing or outdated across all games."""

    scan = _AddonScan(settings)
    with _pool(workers, executor) as pool:
        fan_out = _FanOut(pool)
        fan_out.run(scan.editions_task(game) for game in registry.list().values())
    return ScanResult(entries=frozenset(scan.entries), failures=_finish(fan_out.failures, strict))


# ---------------------------------------------------------------------------
# games list and styles
# ---------------------------------------------------------------------------
def _game_entries(game: Game, settings: SettingsStore) -> List[Tuple[bool, GameListEntry]]:
    game_settings = settings.get_game_settings(game.name)
    results = []
    for edition in game.get_editions_list():
        entry = GameListEntry(
            game_name=game.name,
            game_title=game.title,
            game_developer=game.developer,
            edition=edition,
            card_picture=game.get_card_picture(edition.name),
        )
        installed = game.is_installed(str(game_settings.edition_paths(edition.name).game), edition.name)
        results.append((installed, entry))
    return results


def get_games_list(
    registry: GameRegistry,
    settings: SettingsStore,
    *,
    workers: int = DEFAULT_WORKERS,
    strict: bool = False,
    executor: Optional[Executor] = None,
) -> GamesList:
    """Split every game edition into installed and available entries.

    Entries are ordered by game name, then by the script's edition order.
    """

    collected: Dict[str, List[Tuple[bool, GameListEntry]]] = {}

    def store(name: str) -> FollowUp:
        def follow_up(entries: List[Tuple[bool, GameListEntry]]) -> Tuple[_Task, ...]:
            collected[name] = entries
            return ()

        return follow_up

    with _pool(workers, executor) as pool:
        fan_out = _FanOut(pool)
        fan_out.run(
            _Task("list games", game, lambda game=game: _game_entries(game, settings), store(name))
            for name, game in registry.list().items()
        )

    ordered = [pair for name in sorted(collected) for pair in collected[name]]
    return GamesList(
        installed=tuple(entry for installed, entry in ordered if installed),
        available=tuple(entry for installed, entry in ordered if not installed),
        failures=_finish(fan_out.failures, strict),
    )


def _game_styles(name: str, game: Game) -> List[str]:
    styles = []
    for edition in game.get_editions_list():
        style = game.get_details_style(edition.name)
        if style is not None:
            styles.append(f".game-details--{name}--{edition.name} {{ {style} }}")
    return styles


def collect_details_styles(
    registry: GameRegistry,
    *,
    workers: int = DEFAULT_WORKERS,
    strict: bool = False,
    executor: Optional[Executor] = None,
) -> str:
    """Build one stylesheet from every edition's details background style."""

    collected: Dict[str, List[str]] = {}

    def store(name: str) -> FollowUp:
        def follow_up(styles: List[str]) -> Tuple[_Task, ...]:
            collected[name] = styles
            return ()

        return follow_up

    with _pool(workers, executor) as pool:
        fan_out = _FanOut(pool)
        fan_out.run(
            _Task("collect styles", game, lambda name=name, game=game: _game_styles(name, game), store(name))
            for name, game in registry.list().items()
        )
    _finish(fan_out.failures, strict)
    return "\n".join(style for name in sorted(collected) for style in collected[name])


def addon_uninstall_paths(
    game: Game, group: AddonsGroup, addon: Addon, paths: EditionPaths, edition: str
) -> List[Path]:
    """Return every path the script reports for the installed addon."""

    addon_path = addon.installation_path(group.name, paths)
    return [Path(path) for path in game.get_addon_paths(group.name, addon.name, str(addon_path), edition)]


__all__ = [
    "AddonsListEntry",
    "CardInfo",
    "GameListEntry",
    "GamesList",
    "ScanFailure",
    "ScanResult",
    "addon_uninstall_paths",
    "check_addon",
    "check_addons",
    "collect_details_styles",
    "get_games_list",
]
