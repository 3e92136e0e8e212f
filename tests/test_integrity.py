import hashlib
import zlib

import pytest

from game_integrations.driver import V1Driver
from game_integrations.exceptions import IntegrityError
from game_integrations.game import Game
from game_integrations.integrity import compute_digest, verify_file
from game_integrations.manifest import Manifest
from game_integrations.standards import IntegrityFile, IntegrityInfo
from tests.stubs import FakeContext


def _game(functions):
    manifest = Manifest.from_mapping(
        {
            "game": {"name": "genshin", "title": "Genshin Impact", "developer": "miHoYo"},
            "script": {"path": "integration.py", "standard": "v1"},
        }
    )
    return Game(manifest, V1Driver(FakeContext(functions)))


@pytest.mark.parametrize("algorithm", ["md5", "sha1", "sha256", "SHA512"])
def test_builtin_hashlib_algorithms(algorithm):
    assert compute_digest(algorithm, b"data") == hashlib.new(algorithm.lower(), b"data").hexdigest()


def test_crc32_is_zero_padded_hex():
    assert compute_digest("crc32", b"") == "00000000"
    assert compute_digest("crc32", b"data") == format(zlib.crc32(b"data"), "08x")


def test_unknown_algorithm_is_delegated_to_script():
    game = _game({"v1_integrity_hash": lambda algorithm, data: "ABCD"})
    assert compute_digest("xxh64", b"data", game) == "abcd"


def test_unknown_algorithm_without_hook_fails():
    with pytest.raises(IntegrityError):
        compute_digest("xxh64", b"data")
    with pytest.raises(IntegrityError):
        compute_digest("xxh64", b"data", _game({}))


def _info(path, data, value=None):
    return IntegrityInfo(
        hash="md5",
        value=value or hashlib.md5(data).hexdigest().upper(),
        file=IntegrityFile(path=path, size=len(data), uri="https://cdn.example.com/" + path),
    )


def test_verify_file(tmp_path):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "pak.bin").write_bytes(b"payload")

    assert verify_file(_info("data/pak.bin", b"payload"), tmp_path)
    assert not verify_file(_info("data/pak.bin", b"payload", value="0" * 32), tmp_path)
    assert not verify_file(_info("data/pak.bin", b"longer payload"), tmp_path)
    assert not verify_file(_info("data/missing.bin", b"payload"), tmp_path)
