"""Integrity checks for installed game and addon files."""

from __future__ import annotations

import hashlib
import logging
import zlib
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .exceptions import IntegrityError
from .standards import IntegrityInfo

if TYPE_CHECKING:  # pragma: no cover
    from .game import Game

logger = logging.getLogger(__name__)

BUILTIN_ALGORITHMS = ("md5", "sha1", "sha256", "sha512", "crc32")


def compute_digest(algorithm: str, data: bytes, game: Optional["Game"] = None) -> str:
    """Return the lowercase hex digest of ``data``.

    Unknown algorithms are delegated to the game script's ``integrity_hash``
    hook when it defines one.
    """

    name = algorithm.lower()
    if name == "crc32":
        return format(zlib.crc32(data) & 0xFFFFFFFF, "08x")
    if name in BUILTIN_ALGORITHMS:
        return hashlib.new(name, data).hexdigest()
    if game is not None and game.has_integrity_hash():
        return game.integrity_hash(algorithm, data).lower()
    raise IntegrityError(f"Unsupported integrity algorithm '{algorithm}'.")


def verify_file(info: IntegrityInfo, root: Path, game: Optional["Game"] = None) -> bool:
    path = Path(root) / info.file.path
    if not path.is_file():
        logger.debug("Integrity: %s is missing", path)
        return False
    data = path.read_bytes()
    if len(data) != info.file.size:
        logger.debug("Integrity: %s has size %d, expected %d", path, len(data), info.file.size)
        return False
    return compute_digest(info.hash, data, game) == info.value.lower()


__all__ = ["BUILTIN_ALGORITHMS", "compute_digest", "verify_file"]
