import json

import pytest

from game_integrations import cli
from game_integrations.app import AppContext
from game_integrations.config import IntegrationsConfig
from game_integrations.settings import SettingsStore
from tests.stubs import DEFAULT_STATE


@pytest.fixture()
def config_file(tmp_path, integrations_dir):
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        "games:\n  genshin:\n    addons:\n      global:\n        - {group: voice-packs, name: en}\n",
        encoding="utf8",
    )
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "integrations_path": str(integrations_dir),
                "games_root": str(tmp_path / "games"),
                "addons_root": str(tmp_path / "addons"),
                "settings_file": str(settings),
                "workers": 2,
            }
        ),
        encoding="utf8",
    )
    return path


def test_app_context_from_config(config_file, make_integration):
    make_integration("genshin")
    context = AppContext.from_config(IntegrationsConfig.load(config_file))
    assert isinstance(context.settings, SettingsStore)
    assert context.settings.games() == ("genshin",)
    assert list(context.registry.list()) == ["genshin"]


def test_app_context_without_settings_file(tmp_path, integrations_dir):
    config = IntegrationsConfig(integrations_dir, tmp_path / "games", tmp_path / "addons")
    context = AppContext.from_config(config)
    assert context.settings.games() == ()


def test_games_command(config_file, make_integration, capsys):
    make_integration("genshin")
    assert cli.main(["--config", str(config_file), "games"]) == 0
    out = capsys.readouterr().out
    assert "Installed:\n  genshin/global" in out
    assert "genshin/china" in out


def test_editions_command(config_file, make_integration, capsys):
    make_integration("genshin")
    assert cli.main(["--config", str(config_file), "editions", "genshin"]) == 0
    assert capsys.readouterr().out.splitlines() == ["global\tGlobal", "china\tChina"]


def test_editions_of_unknown_game(config_file, make_integration, capsys):
    make_integration("genshin")
    assert cli.main(["--config", str(config_file), "editions", "honkai"]) == 1
    assert "unknown game 'honkai'" in capsys.readouterr().err


def test_check_addons_command(config_file, make_integration, capsys):
    make_integration("genshin")
    assert cli.main(["--config", str(config_file), "check-addons"]) == 0
    assert capsys.readouterr().out.strip() == "genshin/global: voice-packs/en (1.1)"


def test_check_addons_strict_failure(config_file, make_integration, capsys):
    state = dict(DEFAULT_STATE, fail_addons=["global"])
    make_integration("genshin", state)
    assert cli.main(["--config", str(config_file), "check-addons", "--strict"]) == 1
    assert "Scan finished with 1 failure(s)" in capsys.readouterr().err


def test_check_addons_partial_failure_exit_code(config_file, make_integration, capsys):
    make_integration("genshin")
    make_integration("honkai", dict(DEFAULT_STATE, fail_addons=["global"]))
    assert cli.main(["--config", str(config_file), "check-addons"]) == 1
    assert capsys.readouterr().out.strip() == "genshin/global: voice-packs/en (1.1)"


def test_games_command_partial_failure_exit_code(config_file, make_integration, capsys):
    make_integration("genshin")
    make_integration("honkai", source="def v1_game_get_editions_list():\n    raise RuntimeError('offline')\n")
    assert cli.main(["--config", str(config_file), "games"]) == 1
    assert "genshin/global" in capsys.readouterr().out


def test_styles_command_reads_environment(monkeypatch, tmp_path, integrations_dir, make_integration, capsys):
    make_integration("genshin", extra="\ndef v1_visual_get_details_background_css(edition):\n    return 'color: red;'\n")
    monkeypatch.setenv("GAME_INTEGRATIONS_PATH", str(integrations_dir))
    assert cli.main(["styles"]) == 0
    assert ".game-details--genshin--global { color: red; }" in capsys.readouterr().out


def test_missing_configuration(monkeypatch, capsys):
    monkeypatch.delenv("GAME_INTEGRATIONS_PATH", raising=False)
    assert cli.main(["games"]) == 1
    assert "GAME_INTEGRATIONS_PATH" in capsys.readouterr().err


def test_command_is_required(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2
