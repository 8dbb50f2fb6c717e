"""Configuration loading for modulegen (.modulegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ModuleGenError

CONFIG_FILENAME = ".modulegen.yml"
OUTPUT_STYLES = ("pretty", "minimized")


class ConfigError(ModuleGenError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class LayoutNames:
    """Reserved file and directory names of the module layout."""

    root_marker: str = "_"
    module: str = "module"
    types: str = "types"
    contents: str = "contents"
    rendering: str = "rendering"


DEFAULT_LAYOUT = LayoutNames()


@dataclass
class OutputConfig:
    """Where and how built modules are written."""

    name: str = "module"
    style: str = "pretty"


@dataclass
class ValidationConfig:
    """Location of the external module schema."""

    schema: Optional[str] = None
    timeout: float = 30.0


@dataclass
class ModuleGenConfig:
    """Represents the settings defined in .modulegen.yml."""

    root: Path
    layout: LayoutNames = DEFAULT_LAYOUT
    output: OutputConfig = field(default_factory=OutputConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)


def load_config(config_path: Path) -> ModuleGenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ModuleGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    layout = DEFAULT_LAYOUT
    layout_data = _as_dict(data.get("layout"), "layout")
    if layout_data:
        overrides = {}
        for key in ("root_marker", "module", "types", "contents", "rendering"):
            value = _as_str(layout_data.get(key))
            if value is not None:
                if not value or "/" in value:
                    raise ConfigError(f"layout.{key} must be a plain file name, got {value!r}")
                overrides[key] = value
        layout = replace(DEFAULT_LAYOUT, **overrides)

    output = OutputConfig()
    output_data = _as_dict(data.get("output"), "output")
    if output_data:
        output.name = _as_str(output_data.get("name")) or output.name
        style = _as_str(output_data.get("style"))
        if style is not None:
            if style not in OUTPUT_STYLES:
                raise ConfigError(
                    f"output.style must be one of {', '.join(OUTPUT_STYLES)}, got {style!r}"
                )
            output.style = style

    validation = ValidationConfig()
    validation_data = _as_dict(data.get("validation"), "validation")
    if validation_data:
        validation.schema = _as_str(validation_data.get("schema"))
        raw_timeout = validation_data.get("timeout")
        if raw_timeout is not None:
            timeout = _as_float(raw_timeout)
            if timeout is None or timeout <= 0:
                raise ConfigError(f"validation.timeout must be a positive number, got {raw_timeout!r}")
            validation.timeout = timeout

    return ModuleGenConfig(root=root, layout=layout, output=output, validation=validation)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any, key: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"`{key}` in {CONFIG_FILENAME} must be a mapping")
    return value


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None
