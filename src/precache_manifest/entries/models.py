from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ManifestEntry:
    url: str
    revision: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "revision": self.revision}


@dataclass(frozen=True)
class FileDetails:
    """A file matched under the root directory, before filtering."""

    file: str
    url: str
    revision: str
    size: int

    def to_entry(self) -> ManifestEntry:
        return ManifestEntry(url=self.url, revision=self.revision)
