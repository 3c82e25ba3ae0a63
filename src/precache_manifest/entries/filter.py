from __future__ import annotations

from typing import Sequence

from precache_manifest.entries.models import FileDetails, ManifestEntry
from precache_manifest.errors import ManifestError
from precache_manifest.io.logging import JsonlLogger

# 2 MiB
DEFAULT_MAXIMUM_FILE_SIZE = 2 * 1024 * 1024


def filter_entries(
    entries: Sequence[FileDetails | ManifestEntry],
    *,
    maximum_file_size: int = DEFAULT_MAXIMUM_FILE_SIZE,
    logger: JsonlLogger | None = None,
) -> list[ManifestEntry]:
    out: list[ManifestEntry] = []
    seen_urls: set[str] = set()
    for entry in entries:
        if not entry.url or not entry.revision:
            raise ManifestError("invalid-manifest-entry", f"url={entry.url!r} revision={entry.revision!r}")

        if isinstance(entry, FileDetails):
            if entry.size > maximum_file_size:
                if logger is not None:
                    logger.log(
                        "file_too_large",
                        {"url": entry.url, "size": entry.size, "maximum_file_size": maximum_file_size},
                    )
                continue
            entry = entry.to_entry()

        if entry.url in seen_urls:
            raise ManifestError("duplicate-manifest-url", entry.url)
        seen_urls.add(entry.url)
        out.append(entry)
    return out
