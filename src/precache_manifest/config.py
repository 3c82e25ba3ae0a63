from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

CONFIG_SCHEMA_VERSION = 1


class ConfigError(RuntimeError):
    pass


def load_config(config_path: str) -> dict[str, Any]:
    """
    Load build_manifest() options from a YAML file.

    A relative root_directory is taken relative to the config file, not the
    working directory.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config not found: {config_path}")
    obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(obj, dict):
        raise ConfigError(f"Config {config_path} did not parse as a mapping")

    schema_version = obj.pop("schema_version", None)
    if schema_version is not None and int(schema_version) != CONFIG_SCHEMA_VERSION:
        raise ConfigError(
            f"Config schema_version mismatch: got {schema_version}, expected {CONFIG_SCHEMA_VERSION}"
        )

    root_directory = obj.get("root_directory")
    if isinstance(root_directory, str) and root_directory and not Path(root_directory).is_absolute():
        obj["root_directory"] = str(path.parent / root_directory)
    return obj
