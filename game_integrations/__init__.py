"""Per-game integration runtime.

Each supported game ships an integration directory holding a ``manifest.json``
and a Python script.  The runtime loads every script into an isolated context,
binds a versioned driver to it and exposes the result through
:class:`GameRegistry`.  :mod:`game_integrations.scan` runs concurrent scans
over all registered games.
"""

from __future__ import annotations

from .app import AppContext
from .cache import Cache
from .config import IntegrationsConfig
from .driver import Capability, Driver, V1Driver, create_driver
from .exceptions import (
    ConfigurationError,
    IntegrationError,
    IntegrityError,
    LoadError,
    MarshalError,
    ScanError,
    ScriptCallError,
)
from .game import Game
from .host import HostApi, PythonScriptContext, ScriptContext, load_script
from .manifest import Manifest
from .registry import GameRegistry
from .scan import (
    AddonsListEntry,
    ScanFailure,
    ScanResult,
    addon_uninstall_paths,
    check_addons,
    collect_details_styles,
    get_games_list,
)
from .settings import SettingsStore

__all__ = [
    "AddonsListEntry",
    "AppContext",
    "Cache",
    "Capability",
    "ConfigurationError",
    "Driver",
    "Game",
    "GameRegistry",
    "HostApi",
    "IntegrationError",
    "IntegrationsConfig",
    "IntegrityError",
    "LoadError",
    "Manifest",
    "MarshalError",
    "PythonScriptContext",
    "ScanError",
    "ScanFailure",
    "ScanResult",
    "ScriptCallError",
    "ScriptContext",
    "SettingsStore",
    "V1Driver",
    "addon_uninstall_paths",
    "check_addons",
    "collect_details_styles",
    "create_driver",
    "get_games_list",
    "load_script",
]
