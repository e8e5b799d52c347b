"""
config.py - Runtime settings for analysis runs and the graph view

Settings come from dataclass defaults, then an optional YAML file, then
INSIGHTGRAPH_* environment variables (``.env`` is honoured via dotenv).
The scoring coefficients are fixed and deliberately absent here.
"""

import os
import pathlib
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from insightgraph.core.errors import ConfigError
from insightgraph.utils.logging_helper import get_logger
from insightgraph.utils.paths import DEFAULT_CONFIG

load_dotenv()

log = get_logger()


@dataclass(frozen=True)
class AnalysisSettings:
    lang: str = "en"
    # seconds to sleep at each checkpoint; 0 still yields to the event loop
    stage_pause: float = 0.0


@dataclass(frozen=True)
class LayoutSettings:
    width: float = 700.0
    height: float = 520.0
    max_ticks: int = 300
    dpi: int = 100


@dataclass(frozen=True)
class Settings:
    analysis: AnalysisSettings = field(default_factory=AnalysisSettings)
    layout: LayoutSettings = field(default_factory=LayoutSettings)


def _coerce(current, value):
    """Convert *value* to the type of the default, refusing lossy ints."""
    if isinstance(current, int):
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(value)
    return type(current)(value)


def _merge_section(defaults, raw: Any, section: str):
    if not isinstance(raw, dict):
        raise ConfigError(f"'{section}' must be a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(defaults)}
    unknown = set(raw) - known
    if unknown:
        raise ConfigError(f"Unknown keys in '{section}': {', '.join(sorted(map(str, unknown)))}")

    values = {}
    for key, value in raw.items():
        try:
            values[key] = _coerce(getattr(defaults, key), value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid value for {section}.{key}: {value!r}") from exc
    return replace(defaults, **values)


def load_settings(path: Optional[pathlib.Path] = None) -> Settings:
    """Load settings from YAML (if present) and the environment.

    Args:
        path: Explicit config file. When omitted, ``config/insightgraph.yaml``
            under the project root is used if it exists.

    Returns:
        Frozen Settings instance

    Raises:
        ConfigError: If an explicit file is missing or the YAML is invalid
    """
    settings = Settings()

    if path is not None and not pathlib.Path(path).exists():
        raise ConfigError(f"Config file not found: {path}")
    config_path = pathlib.Path(path) if path is not None else DEFAULT_CONFIG

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Could not parse {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping")

        unknown = set(data) - {"analysis", "layout"}
        if unknown:
            raise ConfigError(f"Unknown sections in {config_path}: {', '.join(sorted(unknown))}")

        settings = Settings(
            analysis=_merge_section(settings.analysis, data.get("analysis") or {}, "analysis"),
            layout=_merge_section(settings.layout, data.get("layout") or {}, "layout"),
        )
        log.info(f"Loaded settings from {config_path}")

    env_lang = os.getenv("INSIGHTGRAPH_LANG")
    if env_lang:
        settings = replace(settings, analysis=replace(settings.analysis, lang=env_lang))

    return settings
