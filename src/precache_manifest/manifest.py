from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

from precache_manifest.entries.composite import get_composite_details
from precache_manifest.entries.file_details import get_file_details, resolve_ignored
from precache_manifest.entries.filter import DEFAULT_MAXIMUM_FILE_SIZE, filter_entries
from precache_manifest.entries.models import FileDetails, ManifestEntry
from precache_manifest.errors import InvalidInputError, ManifestError
from precache_manifest.io.logging import JsonlLogger


@dataclass(frozen=True)
class ManifestConfig:
    root_directory: str
    glob_patterns: tuple[str, ...]
    glob_ignores: tuple[str, ...] = ()
    server_rendered_urls: Mapping[str, Sequence[str]] | None = None
    maximum_file_size: int = DEFAULT_MAXIMUM_FILE_SIZE


def _is_str_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


def parse_input(options: Any) -> ManifestConfig:
    """
    Validate the options passed to build_manifest().

    A ManifestConfig is re-validated field by field, so a hand-built instance
    gets the same checks as a mapping. server_rendered_urls is kept as given
    and checked while composites are resolved, after file urls are known.
    """
    if isinstance(options, ManifestConfig):
        options = {
            "root_directory": options.root_directory,
            "glob_patterns": options.glob_patterns,
            "glob_ignores": options.glob_ignores,
            "server_rendered_urls": options.server_rendered_urls,
            "maximum_file_size": options.maximum_file_size,
        }
    if not isinstance(options, Mapping):
        raise InvalidInputError(f"got {type(options).__name__}")

    root_directory = options.get("root_directory")
    if isinstance(root_directory, os.PathLike):
        root_directory = os.fspath(root_directory)
    if not isinstance(root_directory, str) or not root_directory:
        raise ManifestError("invalid-root-directory")
    if not Path(root_directory).is_dir():
        raise ManifestError("invalid-root-directory", f"not a directory: {root_directory}")

    glob_patterns = options.get("glob_patterns")
    if not _is_str_list(glob_patterns):
        raise ManifestError("invalid-glob-patterns")

    glob_ignores = options.get("glob_ignores")
    if glob_ignores is None:
        glob_ignores = ()
    elif not _is_str_list(glob_ignores):
        raise ManifestError("invalid-glob-ignores")

    maximum_file_size = options.get("maximum_file_size")
    if maximum_file_size is None:
        maximum_file_size = DEFAULT_MAXIMUM_FILE_SIZE
    elif isinstance(maximum_file_size, bool) or not isinstance(maximum_file_size, int) or maximum_file_size <= 0:
        raise ManifestError("invalid-maximum-file-size")

    return ManifestConfig(
        root_directory=root_directory,
        glob_patterns=tuple(glob_patterns),
        glob_ignores=tuple(glob_ignores),
        server_rendered_urls=options.get("server_rendered_urls"),
        maximum_file_size=maximum_file_size,
    )


def _resolve_file_entries(config: ManifestConfig, ignored: frozenset[str]) -> list[FileDetails]:
    # First pattern to match a file wins; later matches of it are dropped.
    seen_files: set[str] = set()
    file_details: list[FileDetails] = []
    for pattern in config.glob_patterns:
        for details in get_file_details(config.root_directory, pattern, ignored=ignored):
            if details.file in seen_files:
                continue
            seen_files.add(details.file)
            file_details.append(details)
    return file_details


def _resolve_composite_entries(
    config: ManifestConfig, file_urls: set[str], ignored: frozenset[str]
) -> list[ManifestEntry]:
    server_rendered_urls = config.server_rendered_urls
    if server_rendered_urls is None:
        return []
    if not isinstance(server_rendered_urls, Mapping):
        raise ManifestError("invalid-server-rendered-urls", f"got {type(server_rendered_urls).__name__}")

    composites: list[ManifestEntry] = []
    for url, dependency_globs in server_rendered_urls.items():
        if url in file_urls:
            raise ManifestError("server-rendered-url-matches-glob", str(url))
        if not isinstance(url, str) or not _is_str_list(dependency_globs):
            raise ManifestError("invalid-server-rendered-urls", f"url {url!r}")

        dependency_details: list[FileDetails] = []
        for pattern in dependency_globs:
            dependency_details.extend(get_file_details(config.root_directory, pattern, ignored=ignored))
        composites.append(get_composite_details(url, dependency_details))
    return composites


def build_manifest(options: Any, *, logger: JsonlLogger | None = None) -> list[ManifestEntry]:
    """
    Build the precache manifest: one entry per matched file, then one entry per
    server rendered url, in discovery order.

    Raises InvalidInputError if options is not a mapping, ManifestError for
    invalid fields or conflicting urls, and OSError if a matched file cannot
    be read. Nothing is returned on failure.
    """
    config = parse_input(options)
    ignored = resolve_ignored(config.root_directory, config.glob_ignores)
    file_details = _resolve_file_entries(config, ignored)
    composites = _resolve_composite_entries(config, {d.url for d in file_details}, ignored)

    candidates: list[FileDetails | ManifestEntry] = [*file_details, *composites]
    entries = filter_entries(candidates, maximum_file_size=config.maximum_file_size, logger=logger)

    if logger is not None:
        logger.log(
            "manifest_built",
            {
                "file_entries": len(entries) - len(composites),
                "composite_entries": len(composites),
                "total_entries": len(entries),
            },
        )
    return entries
