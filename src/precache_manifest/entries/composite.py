from __future__ import annotations

from typing import Sequence

from precache_manifest.entries.models import FileDetails, ManifestEntry
from precache_manifest.hashing import combine_revisions


def get_composite_details(url: str, dependency_details: Sequence[FileDetails]) -> ManifestEntry:
    """
    Build the entry for a server rendered url.

    The revision hashes the dependencies' revisions in the order given, so it
    moves whenever any dependency's content does, or the dependency list is
    reordered. Dependencies matched more than once count once per match.
    """
    return ManifestEntry(url=url, revision=combine_revisions(d.revision for d in dependency_details))
