from __future__ import annotations

import json
from pathlib import Path

import pytest

from precache_manifest.entries.filter import filter_entries
from precache_manifest.entries.models import FileDetails, ManifestEntry
from precache_manifest.errors import ManifestError
from precache_manifest.io.logging import JsonlLogger


def test_keeps_order_and_converts_file_details() -> None:
    entries = filter_entries(
        [
            FileDetails(file="b.js", url="b.js", revision="r1", size=3),
            FileDetails(file="a.js", url="a.js", revision="r2", size=3),
            ManifestEntry(url="/page", revision="r3"),
        ]
    )
    assert entries == [
        ManifestEntry(url="b.js", revision="r1"),
        ManifestEntry(url="a.js", revision="r2"),
        ManifestEntry(url="/page", revision="r3"),
    ]


def test_duplicate_url_is_rejected() -> None:
    with pytest.raises(ManifestError) as excinfo:
        filter_entries(
            [
                FileDetails(file="a.js", url="a.js", revision="r1", size=1),
                ManifestEntry(url="a.js", revision="r2"),
            ]
        )
    assert excinfo.value.code == "duplicate-manifest-url"
    assert "a.js" in str(excinfo.value)


@pytest.mark.parametrize("entry", [ManifestEntry(url="", revision="r"), ManifestEntry(url="/x", revision="")])
def test_entry_without_url_or_revision_is_rejected(entry: ManifestEntry) -> None:
    with pytest.raises(ManifestError) as excinfo:
        filter_entries([entry])
    assert excinfo.value.code == "invalid-manifest-entry"


def test_oversized_files_are_dropped_and_logged(tmp_path: Path) -> None:
    logger = JsonlLogger(path=tmp_path / "events.jsonl", run_id="test")
    entries = filter_entries(
        [
            FileDetails(file="big.bin", url="big.bin", revision="r1", size=11),
            FileDetails(file="ok.bin", url="ok.bin", revision="r2", size=10),
        ],
        maximum_file_size=10,
        logger=logger,
    )
    assert [e.url for e in entries] == ["ok.bin"]

    events = [json.loads(line) for line in (tmp_path / "events.jsonl").read_text(encoding="utf-8").splitlines()]
    assert len(events) == 1
    assert events[0]["event_type"] == "file_too_large"
    assert events[0]["url"] == "big.bin"
    assert events[0]["run_id"] == "test"
