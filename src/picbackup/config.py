from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import json
import yaml

from picbackup.errors import ConfigError


@dataclass(slots=True)
class BackupConfig:
    destination: Path
    sources: list[Path]
    ignore_extension_case: bool = False
    additional_extensions: list[str] = field(default_factory=list)
    additional_excludes: list[str] = field(default_factory=list)
    dry_run: bool = False


def _as_path(value: Any, field_name: str) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{field_name} must be a non-empty string path")
    return Path(value).expanduser()


def _as_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    raise ConfigError(f"{field_name} must be a boolean")


def _as_list_of_strings(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or any(not isinstance(item, str) for item in value):
        raise ConfigError(f"{field_name} must be a list of strings")
    return [item for item in value if item.strip()]


_PARSERS = {
    ".yml": yaml.safe_load,
    ".yaml": yaml.safe_load,
    ".json": json.loads,
}


def _load_raw_config(config_path: Path) -> dict[str, Any]:
    parse = _PARSERS.get(config_path.suffix.lower())
    if parse is None:
        raise ConfigError("Config file must be .yaml/.yml or .json")
    if not config_path.exists():
        raise ConfigError(f"Config file does not exist: {config_path}")
    if not config_path.is_file():
        raise ConfigError(f"Config path is not a file: {config_path}")

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {config_path}: {exc}") from exc

    try:
        loaded = parse(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot parse {config_path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError("Config root must be an object")
    return loaded


def load_config(config_path: Path) -> BackupConfig:
    raw = _load_raw_config(config_path)

    destination = _as_path(raw.get("destination"), "destination")

    raw_sources = raw.get("sources")
    if not isinstance(raw_sources, list) or not raw_sources:
        raise ConfigError("Config must contain non-empty 'sources' list")
    sources = [_as_path(item, f"sources[{index}]") for index, item in enumerate(raw_sources)]

    return BackupConfig(
        destination=destination,
        sources=sources,
        ignore_extension_case=_as_bool(
            raw.get("ignoreExtensionCase"), "ignoreExtensionCase", default=False
        ),
        additional_extensions=_as_list_of_strings(
            raw.get("additionalExtensions"), "additionalExtensions"
        ),
        additional_excludes=_as_list_of_strings(raw.get("additionalExcludes"), "additionalExcludes"),
        dry_run=_as_bool(raw.get("dryRun"), "dryRun", default=False),
    )
