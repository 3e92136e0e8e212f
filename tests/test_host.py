import json

import pytest

from game_integrations import host as host_module
from game_integrations.exceptions import LoadError, ScriptCallError
from game_integrations.host import HostApi, PythonScriptContext, load_script


class _Response:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


def test_default_host_functions_are_exposed():
    host = HostApi()
    assert set(host.exposed) == {"v1_network_http_get", "v1_json_decode"}
    with pytest.raises(TypeError):
        host.exposed["extra"] = 1  # type: ignore[index]


def test_expose_rejects_non_identifiers():
    with pytest.raises(ValueError):
        HostApi().expose("not a name", object())


def test_json_decode_accepts_bytes_and_text():
    assert HostApi.json_decode(b'{"a": [1, 2]}') == {"a": [1, 2]}
    assert HostApi.json_decode("[true, null]") == [True, None]


def test_http_get_uses_configured_timeout(monkeypatch):
    seen = {}

    def fake_urlopen(uri, timeout):
        seen["uri"] = uri
        seen["timeout"] = timeout
        return _Response(b"payload")

    monkeypatch.setattr(host_module.urllib.request, "urlopen", fake_urlopen)
    assert HostApi(http_timeout=5).http_get("https://example.com/versions.json") == b"payload"
    assert seen == {"uri": "https://example.com/versions.json", "timeout": 5}


def test_script_sees_host_functions(tmp_path):
    host = HostApi()
    host.expose("v1_network_http_get", lambda uri: json.dumps({"latest": "2.0", "uri": uri}).encode())
    source = (
        "def v1_game_get_version(path, edition):\n"
        "    return v1_json_decode(v1_network_http_get('https://example.com/' + edition))['latest']\n"
    )
    context = PythonScriptContext(source, tmp_path / "integration.py", host, module_name="test.script")

    assert context.probe("v1_game_get_version")
    assert not context.probe("v1_game_get_status")
    assert context.call("v1_game_get_version", "/games", "global") == "2.0"
    assert context.namespace["__file__"] == str(tmp_path / "integration.py")


def test_contexts_do_not_share_globals(tmp_path):
    host = HostApi()
    first = PythonScriptContext("VALUE = 1\ndef get():\n    return VALUE\n", tmp_path / "a.py", host, module_name="a")
    second = PythonScriptContext("VALUE = 2\ndef get():\n    return VALUE\n", tmp_path / "b.py", host, module_name="b")
    assert first.call("get") == 1
    assert second.call("get") == 2


def test_script_errors_during_execution_raise_load_error(tmp_path):
    with pytest.raises(LoadError, match="ZeroDivisionError"):
        PythonScriptContext("1 / 0\n", tmp_path / "broken.py", HostApi(), module_name="broken")
    with pytest.raises(LoadError, match="SyntaxError"):
        PythonScriptContext("def broken(:\n", tmp_path / "broken.py", HostApi(), module_name="broken")


def test_call_errors_name_the_entry_point(tmp_path):
    source = "NOT_CALLABLE = 3\ndef fails():\n    raise ValueError('boom')\n"
    context = PythonScriptContext(source, tmp_path / "s.py", HostApi(), module_name="s")

    with pytest.raises(ScriptCallError) as missing:
        context.call("v1_game_get_editions_list")
    assert missing.value.entry_point == "v1_game_get_editions_list"

    with pytest.raises(ScriptCallError, match="not callable"):
        context.call("NOT_CALLABLE")

    with pytest.raises(ScriptCallError, match="ValueError: boom") as failed:
        context.call("fails")
    assert failed.value.entry_point == "fails"


def test_load_script_binds_manifest(make_integration):
    loaded = load_script(make_integration("genshin"))
    assert loaded.manifest.game_name == "genshin"
    assert loaded.script_path.name == "integration.py"
    assert loaded.context.probe("v1_game_get_editions_list")


def test_load_script_reports_missing_script(make_integration):
    manifest_path = make_integration("genshin")
    (manifest_path.parent / "integration.py").unlink()
    with pytest.raises(LoadError, match="Unable to read integration script"):
        load_script(manifest_path)


def test_script_exit_is_contained(tmp_path):
    with pytest.raises(LoadError, match="SystemExit"):
        PythonScriptContext("import sys\nsys.exit(3)\n", tmp_path / "exits.py", HostApi(), module_name="exits")

    context = PythonScriptContext("def quit_now():\n    raise SystemExit(1)\n", tmp_path / "q.py", HostApi(), module_name="q")
    with pytest.raises(ScriptCallError, match="SystemExit") as failed:
        context.call("quit_now")
    assert failed.value.entry_point == "quit_now"


def test_load_script_rejects_undecodable_script(make_integration):
    manifest_path = make_integration("genshin")
    (manifest_path.parent / "integration.py").write_bytes(b"# \xff\xfe bad\n")
    with pytest.raises(LoadError, match="Unable to read integration script"):
        load_script(manifest_path)
