from __future__ import annotations

import glob
import os
from pathlib import Path, PurePath
from typing import Iterable, Sequence

from precache_manifest.entries.models import FileDetails
from precache_manifest.hashing import file_revision


def _under_root(root: Path, match: str) -> str | None:
    # Root-relative POSIX path of a glob match, or None if it falls outside root.
    abs_root = Path(os.path.abspath(root))
    abs_match = Path(os.path.abspath(root / match))
    if abs_match == abs_root or not abs_match.is_relative_to(abs_root):
        return None
    return PurePath(abs_match.relative_to(abs_root)).as_posix()


def _glob_relpaths(root: Path, pattern: str) -> set[str]:
    out: set[str] = set()
    for m in glob.glob(pattern, root_dir=str(root), recursive=True):
        rel = _under_root(root, m)
        if rel is not None:
            out.add(rel)
    return out


def resolve_ignored(root_directory: str | os.PathLike[str], glob_ignores: Iterable[str]) -> frozenset[str]:
    """Root-relative paths matched by any of glob_ignores."""
    root = Path(root_directory)
    ignored: set[str] = set()
    for ignore in glob_ignores:
        ignored |= _glob_relpaths(root, ignore)
    return frozenset(ignored)


def get_file_details(
    root_directory: str | os.PathLike[str],
    glob_pattern: str,
    glob_ignores: Sequence[str] | None = None,
    *,
    ignored: frozenset[str] | None = None,
) -> list[FileDetails]:
    """
    Resolve one include pattern under root_directory.

    Paths matched by any ignore pattern are dropped, as are directories and
    anything outside the root (``../`` or absolute patterns). The result is
    sorted by relative POSIX path, which doubles as the entry url. Callers
    resolving many patterns pass ``ignored`` from resolve_ignored() instead of
    glob_ignores. Unreadable files raise OSError.
    """
    root = Path(root_directory)
    if ignored is None:
        ignored = resolve_ignored(root, glob_ignores or [])

    details: list[FileDetails] = []
    for rel in sorted(_glob_relpaths(root, glob_pattern) - ignored):
        p = root / rel
        if not p.is_file():
            continue
        details.append(
            FileDetails(
                file=rel,
                url=rel,
                revision=file_revision(p),
                size=p.stat().st_size,
            )
        )
    return details
