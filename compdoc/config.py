"""Configuration loading for compdoc (.compdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".compdoc.yml"
DEFAULT_COMPONENTS_DIR = "src/components"
DEFAULT_OUTPUT = "docs/components.json"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CompDocConfig:
    """Represents the settings defined in .compdoc.yml."""

    root: Path
    components_dir: str = DEFAULT_COMPONENTS_DIR
    output: str = DEFAULT_OUTPUT
    exclude_paths: List[str] = field(default_factory=list)
    log_file: Optional[Path] = None

    @property
    def components_path(self) -> Path:
        return (self.root / self.components_dir).resolve()

    @property
    def output_path(self) -> Path:
        return (self.root / self.output).resolve()

    def import_path(self, component_name: str) -> str:
        """Return the import specifier documented for a component."""
        prefix = self.components_dir.strip("/")
        if prefix.startswith("./"):
            prefix = prefix[2:]
        return f"./{prefix}/{component_name}" if prefix else f"./{component_name}"


def load_config(config_path: Path) -> CompDocConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CompDocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    components_dir = _as_str(data.get("components_dir")) or DEFAULT_COMPONENTS_DIR
    output = _as_str(data.get("output")) or DEFAULT_OUTPUT
    log_file_str = _as_str(data.get("log_file"))

    return CompDocConfig(
        root=root,
        components_dir=components_dir,
        output=output,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        log_file=root / log_file_str if log_file_str else None,
    )


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


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CompDocConfig",
    "ConfigError",
    "load_config",
]
