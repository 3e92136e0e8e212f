"""Host bridge between the launcher and integration scripts.

The bridge has two halves:

* :class:`HostApi` collects the fixed set of host functions injected into
  every script before it runs.  The defaults are ``v1_network_http_get``
  (blocking HTTP GET returning raw bytes) and ``v1_json_decode`` (JSON text to
  native values).  Additional host objects can be exposed by name before a
  context is created, mirroring how the rest of the launcher publishes objects
  to plugins.
* :class:`ScriptContext` is the isolated execution context a script lives in.
  The concrete :class:`PythonScriptContext` executes the script's top level
  once inside a fresh module namespace.  Scripts register their callable entry
  points by naming convention (``<version>_<domain>_<operation>``); the host
  probes for and invokes them through :meth:`ScriptContext.probe` and
  :meth:`ScriptContext.call`.

:func:`load_script` ties both halves together: it reads the manifest, resolves
and reads the script, binds the host API and executes it.  Any failure along
the way raises :class:`~game_integrations.exceptions.LoadError`; no partially
initialised context is ever returned.
"""

from __future__ import annotations

import builtins
import json
import logging
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType, ModuleType
from typing import Any, Callable, Dict, Optional

from .exceptions import LoadError, ScriptCallError
from .manifest import Manifest

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 30.0


class HostApi:
    """Registry of host objects exposed to integration scripts."""

    def __init__(self, *, http_timeout: float = DEFAULT_HTTP_TIMEOUT) -> None:
        self._http_timeout = http_timeout
        self._exposed: Dict[str, Any] = {}
        self.expose("v1_network_http_get", self.http_get)
        self.expose("v1_json_decode", self.json_decode)

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    @property
    def exposed(self) -> MappingProxyType:
        """Immutable view of every object injected into scripts."""

        return MappingProxyType(self._exposed)

    def expose(self, name: str, obj: Any) -> None:
        """Expose ``obj`` to scripts as the global ``name``.

        Existing entries are overwritten so embedders can replace a default
        host function (tests swap the network function this way).
        """

        if not name or not name.isidentifier():
            raise ValueError(f"Exposed host names must be identifiers, got {name!r}.")
        self._exposed[name] = obj

    def http_get(self, uri: str) -> bytes:
        """Perform a blocking HTTP GET and return the raw response body."""

        logger.debug("script http get: %s", uri)
        with urllib.request.urlopen(str(uri), timeout=self._http_timeout) as response:
            return response.read()

    @staticmethod
    def json_decode(text: Any) -> Any:
        """Decode JSON text (``str`` or ``bytes``) into native values."""

        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf8")
        return json.loads(text)


class ScriptContext(ABC):
    """Isolated execution context hosting one integration script."""

    @abstractmethod
    def probe(self, name: str) -> bool:
        """Return ``True`` when the script defines a callable ``name``."""

    @abstractmethod
    def call(self, name: str, *args: Any) -> Any:
        """Invoke the script entry point ``name`` with positional ``args``."""


class PythonScriptContext(ScriptContext):
    """Runs a Python integration script inside its own module namespace.

    The module is never registered in :data:`sys.modules`; two games loading
    scripts with identical function names cannot see each other.  The context
    is not internally synchronised, callers serialise access per game.
    """

    def __init__(self, source: str, script_path: Path, host: HostApi, *, module_name: str) -> None:
        self.script_path = Path(script_path)
        self._module = ModuleType(module_name)
        namespace = self._module.__dict__
        namespace["__file__"] = str(self.script_path)
        namespace["__builtins__"] = builtins
        namespace.update(host.exposed)
        try:
            code = compile(source, str(self.script_path), "exec")
            exec(code, namespace)
        except (Exception, SystemExit) as exc:
            raise LoadError(
                f"Integration script '{self.script_path}' failed to execute: "
                f"{type(exc).__name__}: {exc}"
            ) from exc

    @property
    def namespace(self) -> MappingProxyType:
        return MappingProxyType(self._module.__dict__)

    def probe(self, name: str) -> bool:
        return callable(self._module.__dict__.get(name))

    def call(self, name: str, *args: Any) -> Any:
        target = self._module.__dict__.get(name)
        if target is None:
            raise ScriptCallError(name, "entry point is not defined by the script")
        if not callable(target):
            raise ScriptCallError(name, f"entry point is not callable (got {type(target).__name__})")
        try:
            return target(*args)
        except (Exception, SystemExit) as exc:
            raise ScriptCallError(name, f"{type(exc).__name__}: {exc}") from exc


ContextFactory = Callable[..., ScriptContext]


@dataclass(frozen=True)
class LoadedScript:
    """Outcome of :func:`load_script`."""

    manifest: Manifest
    script_path: Path
    context: ScriptContext


def load_script(
    manifest_path: Path,
    host: Optional[HostApi] = None,
    *,
    context_factory: ContextFactory = PythonScriptContext,
) -> LoadedScript:
    """Load ``manifest_path`` and execute the integration script it names."""

    manifest_path = Path(manifest_path)
    manifest = Manifest.load(manifest_path)
    script_path = manifest.resolve_script_path(manifest_path.parent)
    try:
        source = script_path.read_text(encoding="utf8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Unable to read integration script '{script_path}': {exc}") from exc

    host = host or HostApi()
    context = context_factory(
        source,
        script_path,
        host,
        module_name=f"game_integrations.scripts.{manifest.game_name}",
    )
    logger.debug("loaded %s integration script from %s", manifest.game_name, script_path)
    return LoadedScript(manifest=manifest, script_path=script_path, context=context)


__all__ = [
    "DEFAULT_HTTP_TIMEOUT",
    "HostApi",
    "LoadedScript",
    "PythonScriptContext",
    "ScriptContext",
    "load_script",
]
