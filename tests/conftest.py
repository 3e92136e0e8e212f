from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from game_integrations.settings import SettingsStore
from tests.stubs import FakeContext, render_script


@pytest.fixture()
def integrations_dir(tmp_path: Path) -> Path:
    path = tmp_path / "integrations"
    path.mkdir()
    return path


@pytest.fixture()
def make_integration(integrations_dir: Path) -> Callable[..., Path]:
    """Return a factory writing ``<integrations>/<name>/{manifest.json,integration.py}``."""

    def factory(
        name: str,
        state: Optional[Dict[str, Any]] = None,
        *,
        extra: str = "",
        source: Optional[str] = None,
        standard: str = "v1",
    ) -> Path:
        directory = integrations_dir / name
        directory.mkdir()
        manifest = {
            "manifest_version": 1,
            "game": {"name": name, "title": name.title(), "developer": "Example Studio"},
            "script": {"path": "integration.py", "standard": standard},
        }
        (directory / "manifest.json").write_text(json.dumps(manifest), encoding="utf8")
        script = render_script(state, extra) if source is None else source
        (directory / "integration.py").write_text(script, encoding="utf8")
        return directory / "manifest.json"

    return factory


@pytest.fixture()
def settings_store(tmp_path: Path) -> SettingsStore:
    document = {
        "games": {
            "genshin": {
                "addons": {"global": [{"group": "voice-packs", "name": "en"}]},
            }
        }
    }
    return SettingsStore(document, games_root=tmp_path / "games", addons_root=tmp_path / "addons")


@pytest.fixture()
def fake_context() -> FakeContext:
    return FakeContext()
