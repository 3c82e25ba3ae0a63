from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

LOG_SCHEMA_VERSION = 1


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _utc_compact() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


@dataclass
class JsonlLogger:
    """
    Appends one JSON object per manifest event to ``path``.

    Every record names the run and, when known, the config file and root
    directory the manifest was built from, so logs from several sites can
    share one file.
    """

    path: Path
    run_id: str
    config_path: str | None = None
    root_directory: str | None = None
    schema_version: int = LOG_SCHEMA_VERSION

    def log(self, event_type: str, payload: dict[str, Any]) -> None:
        record: dict[str, Any] = {
            "event_type": event_type,
            "timestamp_utc": now_utc_iso(),
            "run_id": self.run_id,
            "schema_version": self.schema_version,
        }
        if self.config_path is not None:
            record["config_path"] = self.config_path
        if self.root_directory is not None:
            record["root_directory"] = self.root_directory
        record.update(payload)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")


def make_logger(
    *,
    log_path: Path,
    run_id: str | None = None,
    config_path: str | None = None,
    root_directory: str | None = None,
) -> JsonlLogger:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return JsonlLogger(
        path=log_path,
        run_id=run_id or f"manifest_{_utc_compact()}",
        config_path=config_path,
        root_directory=root_directory,
    )
