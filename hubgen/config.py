"""Configuration loading for hubgen (.hubgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_NAME = ".hubgen.yml"

# PascalCase keys accepted from older JSON configuration files.
_LEGACY_KEYS = {
    "TargetNamespace": "target_namespace",
    "TargetClassName": "target_class_name",
    "TargetFilePath": "target_file_path",
    "TypeSourceCsPath": "type_source_path",
    "SourceAssemblyPath": "contract_source",
}

_VISIBILITIES = {"public", "protected", "internal", "private", "protected internal"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GeneratorConfig:
    """Settings for one generation run."""

    root: Path
    target_namespace: str
    target_class_name: str
    target_file_path: Path
    contract_source: str
    type_source_path: Optional[Path] = None
    connection_property: str = "HubConnection"
    member_visibility: str = "protected"
    client_method_suffix: str = "On"


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from a file or a directory holding ``.hubgen.yml``."""
    config_file = _resolve_config_path(Path(config_path))
    if not config_file.is_file():
        raise ConfigError(f"Configuration file not found: {config_file}")
    root = config_file.parent.resolve()
    return config_from_mapping(_read_config(config_file), root=root)


def config_from_mapping(data: Dict[str, Any], *, root: Path) -> GeneratorConfig:
    """Build a :class:`GeneratorConfig` from already-parsed settings."""
    values = _normalise_keys(data)

    missing = [
        key
        for key in ("target_namespace", "target_class_name", "target_file_path", "contract_source")
        if not _as_str(values.get(key))
    ]
    if missing:
        raise ConfigError(f"Missing required settings: {', '.join(missing)}")

    visibility = _as_str(values.get("member_visibility")) or "protected"
    if visibility not in _VISIBILITIES:
        raise ConfigError(f"Unsupported member_visibility '{visibility}'")

    type_source = _as_str(values.get("type_source_path"))
    return GeneratorConfig(
        root=root,
        target_namespace=str(values["target_namespace"]),
        target_class_name=str(values["target_class_name"]),
        target_file_path=_resolve_path(root, str(values["target_file_path"])),
        contract_source=_resolve_source(root, str(values["contract_source"])),
        type_source_path=_resolve_path(root, type_source) if type_source else None,
        connection_property=_as_str(values.get("connection_property")) or "HubConnection",
        member_visibility=visibility,
        client_method_suffix=_as_str(values.get("client_method_suffix")) or "On",
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / DEFAULT_CONFIG_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        raise ConfigError(f"{path.name} is empty")
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _normalise_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key, value in data.items():
        values[_LEGACY_KEYS.get(str(key), str(key))] = value
    return values


def _resolve_path(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else (root / path)


def _resolve_source(root: Path, value: str) -> str:
    # Dotted module names stay as-is; file paths resolve against the config.
    if value.endswith((".py", ".yml", ".yaml", ".json")) or "/" in value or "\\" in value:
        return str(_resolve_path(root, value))
    return value


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


__all__ = ["ConfigError", "GeneratorConfig", "config_from_mapping", "load_config"]
