import json
from pathlib import Path

import pytest

from game_integrations.exceptions import ConfigurationError
from game_integrations.settings import EditionPaths, EnabledAddon, SettingsStore


YAML_SETTINGS = """
games:
  genshin:
    paths:
      global:
        game: /games/genshin
        addons: /games/genshin-addons
    addons:
      global:
        - group: voice-packs
          name: en
"""


def test_yaml_settings(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(YAML_SETTINGS, encoding="utf8")
    store = SettingsStore.load(path, games_root=tmp_path / "games", addons_root=tmp_path / "addons")

    settings = store.get_game_settings("genshin")
    assert settings.edition_paths("global") == EditionPaths(Path("/games/genshin"), Path("/games/genshin-addons"))
    assert settings.enabled_addons("global") == (EnabledAddon("voice-packs", "en"),)
    assert store.games() == ("genshin",)


def test_json_settings_and_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"games": {"honkai": {"addons": {}}}}), encoding="utf8")
    store = SettingsStore.load(path, games_root=tmp_path / "games", addons_root=tmp_path / "addons")

    settings = store.get_game_settings("honkai")
    assert settings.edition_paths("global") == EditionPaths(
        tmp_path / "games" / "honkai" / "global", tmp_path / "addons" / "honkai" / "global"
    )
    assert settings.enabled_addons("global") == ()


def test_unknown_game_gets_default_settings(tmp_path):
    store = SettingsStore(games_root=tmp_path / "games", addons_root=tmp_path / "addons")
    settings = store.get_game_settings("genshin")
    assert settings.edition_paths("china").game == tmp_path / "games" / "genshin" / "china"


def test_empty_yaml_document(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text("", encoding="utf8")
    store = SettingsStore.load(path, games_root=tmp_path, addons_root=tmp_path)
    assert store.games() == ()


@pytest.mark.parametrize(
    "document",
    [
        {"games": []},
        {"games": "genshin"},
        {"games": {"genshin": {"paths": ["/games/genshin"]}}},
        {"games": {"genshin": {"addons": [{"group": "voice-packs", "name": "en"}]}}},
        {"games": {"genshin": {"paths": {"global": {"game": "/g"}}}}},
        {"games": {"genshin": {"addons": {"global": {"group": "voice-packs"}}}}},
        {"games": {"genshin": {"addons": {"global": [{"group": "voice-packs"}]}}}},
    ],
)
def test_invalid_documents(tmp_path, document):
    with pytest.raises(ConfigurationError):
        SettingsStore(document, games_root=tmp_path, addons_root=tmp_path)


def test_unparseable_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("games: [unclosed", encoding="utf8")
    with pytest.raises(ConfigurationError, match="Unable to parse"):
        SettingsStore.load(path, games_root=tmp_path, addons_root=tmp_path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SettingsStore.load(tmp_path / "settings.json", games_root=tmp_path, addons_root=tmp_path)
