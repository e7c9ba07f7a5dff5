"""Content fingerprints used to detect changed files."""

import hashlib
import os
from pathlib import Path
from typing import Union

from ..utils import HASH_CHUNK_SIZE, PSEUDO_HASH_PREFIX_SIZE
from .modes import HashMode

PathLike = Union[str, Path]


def compute_hash(path: PathLike) -> str:
    """Compute the SHA-256 hex digest of a file's full content.

    The file is streamed in fixed-size chunks, so memory use does not
    depend on file size.

    Args:
        path: File to hash

    Returns:
        64 character lowercase hex digest

    Raises:
        OSError: If the file cannot be read
    """
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        while True:
            chunk = f.read(HASH_CHUNK_SIZE)
            if not chunk:
                break
            hasher.update(chunk)
    return hasher.hexdigest()


def compute_pseudo_hash(path: PathLike) -> str:
    """Compute a cheap fingerprint from name, size and leading content.

    The digest covers the file's base name, its size as an 8-byte
    big-endian integer and at most the first 1024 bytes of content (files
    shorter than that contribute only what they hold). Two files agreeing
    on all three collide even when their tails differ.

    Args:
        path: File to fingerprint

    Returns:
        64 character lowercase hex digest

    Raises:
        OSError: If the file cannot be read
    """
    path = Path(path)
    size = path.stat().st_size
    with open(path, "rb") as f:
        prefix = f.read(PSEUDO_HASH_PREFIX_SIZE)

    hasher = hashlib.sha256()
    hasher.update(os.fsencode(path.name))
    hasher.update(size.to_bytes(8, "big"))
    hasher.update(prefix)
    return hasher.hexdigest()


def fingerprint(path: PathLike, mode: HashMode) -> str:
    """Fingerprint a file with the given mode."""
    if mode == HashMode.PSEUDO:
        return compute_pseudo_hash(path)
    return compute_hash(path)
