import threading
import time
from types import SimpleNamespace

import pytest

from game_integrations.driver import V1Driver
from game_integrations.game import Game
from game_integrations.manifest import Manifest
from game_integrations.standards import GameEdition
from tests.stubs import FakeContext


def _manifest(name="genshin"):
    return Manifest.from_mapping(
        {
            "game": {"name": name, "title": "Genshin Impact", "developer": "miHoYo"},
            "script": {"path": "integration.py", "standard": "v1"},
        }
    )


def _game(functions):
    context = FakeContext(functions)
    return Game(_manifest(), V1Driver(context)), context


def test_metadata_comes_from_manifest():
    game, _ = _game({})
    assert (game.name, game.title, game.developer) == ("genshin", "Genshin Impact", "miHoYo")
    assert "genshin" in repr(game)


def test_card_picture_is_cached_per_edition():
    game, context = _game({"v1_visual_get_card_picture": lambda edition: f"https://cdn/{edition}.png"})

    assert game.get_card_picture("global") == "https://cdn/global.png"
    assert game.get_card_picture("global") == "https://cdn/global.png"
    assert game.get_card_picture("china") == "https://cdn/china.png"
    assert context.calls["v1_visual_get_card_picture"] == 2


def test_editions_list_is_cached_and_immutable():
    game, context = _game({"v1_game_get_editions_list": lambda: [{"name": "global", "title": "Global"}]})
    assert game.get_editions_list() == (GameEdition("global", "Global"),)
    game.get_editions_list()
    assert context.calls["v1_game_get_editions_list"] == 1
    assert "editions" in game.cache


def test_missing_details_style_is_cached_as_none():
    game, context = _game({})
    assert game.get_details_style("global") is None
    assert game.get_details_style("global") is None
    assert "details_style/global" in game.cache


def test_install_state_is_never_cached():
    state = {"installed": False}
    game, context = _game({"v1_game_is_installed": lambda path, edition: state["installed"]})

    assert game.is_installed("/games/genshin", "global") is False
    state["installed"] = True
    assert game.is_installed("/games/genshin", "global") is True
    assert context.calls["v1_game_is_installed"] == 2


def test_paths_are_passed_as_strings(tmp_path):
    seen = []
    game, _ = _game({"v1_game_get_version": lambda path, edition: seen.append(path) or "1.0"})
    assert game.get_version(tmp_path, "global") == "1.0"
    assert seen == [str(tmp_path)]


def test_script_calls_are_serialised_per_game():
    def slow_status(path, edition):
        time.sleep(0.01)
        return True

    game, context = _game({"v1_game_is_running": slow_status})
    threads = [threading.Thread(target=game.is_process_running, args=("/games", "global")) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert context.calls["v1_game_is_running"] == 8
    assert context.max_active == 1


def test_concurrent_cached_lookups_call_script_once():
    def slow_picture(edition):
        time.sleep(0.01)
        return "https://cdn/card.png"

    game, context = _game({"v1_visual_get_card_picture": slow_picture})
    threads = [threading.Thread(target=game.get_card_picture, args=("global",)) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert context.calls["v1_visual_get_card_picture"] == 1


def test_standard_mismatch_is_rejected():
    class OtherDriver(V1Driver):
        standard = SimpleNamespace(value="v0")  # type: ignore[assignment]

    with pytest.raises(ValueError):
        Game(_manifest(), OtherDriver(FakeContext()))


def test_load_executes_script(make_integration):
    game = Game.load(make_integration("genshin"), cache_capacity=4)
    assert [edition.name for edition in game.get_editions_list()] == ["global", "china"]
    assert game.cache.capacity == 4
    assert game.script_path.name == "integration.py"
    launch = game.get_launch_options("/games/genshin", "/addons/genshin", "global")
    assert launch.executable == "/games/genshin/game.exe"
    assert launch.env == {"ADDONS": "/addons/genshin"}
