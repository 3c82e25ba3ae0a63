from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Iterable

_CHUNK_SIZE = 1 << 16


def md5_hex(data: bytes) -> str:
    return hashlib.md5(data, usedforsecurity=False).hexdigest()


def file_revision(path: str | Path) -> str:
    """
    Revision token for a file: MD5 over its raw bytes, as 32 lowercase hex chars.

    MD5 is used as a cache-busting fingerprint, not for security.
    """
    h = hashlib.md5(usedforsecurity=False)
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def combine_revisions(revisions: Iterable[str]) -> str:
    """
    combine_revisions([r1, ..., rn]) = md5(r1 || ... || rn). Order-sensitive.
    """
    return md5_hex("".join(revisions).encode("utf-8"))
