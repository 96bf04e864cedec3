"""Configuration loading for spelcpp (.spelcpp.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".spelcpp.yml"

OUTPUT_FORMATS = ("text", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PassConfig:
    """Traversal pass enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    """How observations are written."""

    format: str = "text"


@dataclass
class SpelcppConfig:
    """Represents the settings defined in .spelcpp.yml."""

    root: Path
    verbose: bool = False
    log_file: Optional[Path] = None
    build_dir: Optional[Path] = None
    exclude_paths: List[str] = field(default_factory=list)
    extra_args: List[str] = field(default_factory=list)
    passes: PassConfig = field(default_factory=PassConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Path) -> SpelcppConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SpelcppConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    build_dir_str = _as_str(data.get("build_dir"))
    build_dir = root / build_dir_str if build_dir_str else None
    log_file_str = _as_str(data.get("log_file"))
    log_file = root / log_file_str if log_file_str else None

    passes = PassConfig()
    passes_data = _as_dict(data.get("passes"))
    if passes_data:
        passes.enabled = _as_str_list(passes_data.get("enabled"))

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        fmt = _as_str(output_data.get("format"))
        if fmt is not None:
            fmt = fmt.lower()
            if fmt not in OUTPUT_FORMATS:
                raise ConfigError(
                    f"Unsupported output format '{fmt}' (expected one of: {', '.join(OUTPUT_FORMATS)})"
                )
            output.format = fmt

    return SpelcppConfig(
        root=root,
        verbose=_as_bool(data.get("verbose")) or False,
        log_file=log_file,
        build_dir=build_dir,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        extra_args=_as_str_list(data.get("extra_args")),
        passes=passes,
        output=output,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
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


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
