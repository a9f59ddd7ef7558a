"""Configuration dataclasses and an OmegaConf-backed loader."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from omegaconf import OmegaConf

DEBUG_ENV_VAR = "LAPWATCH_DEBUG"


def _debug_from_env() -> bool:
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class LoggerSettings:
    """Formatting options for :class:`lapwatch.utils.logging.Logger`."""

    colored: bool = True
    timed: bool = False
    relative_time: bool = False
    scientific: bool = False
    initial_precision: int = 3
    name_padding: int = 20
    time_format: str = "%H:%M:%S"
    debug: bool = field(default_factory=_debug_from_env)


@dataclass
class RenderConfig:
    """Layout of the nested timer report."""

    name_width: int = 30
    width_step: int = 2


@dataclass
class LapwatchConfig:
    logging: LoggerSettings = field(default_factory=LoggerSettings)
    render: RenderConfig = field(default_factory=RenderConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None


def load_config(path: Optional[Path] = None, overrides: Optional[Iterable[str]] = None) -> LapwatchConfig:
    """Build a :class:`LapwatchConfig` from defaults, a YAML file and overrides.

    Args:
        path: Optional YAML file merged over the defaults.
        overrides: Dotlist entries such as ``"render.name_width=40"``.
    Returns:
        The merged configuration as plain dataclasses.
    """

    cfg = OmegaConf.structured(LapwatchConfig)
    if path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(Path(path)))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    return OmegaConf.to_object(cfg)


__all__ = ["LoggerSettings", "RenderConfig", "LapwatchConfig", "load_config", "DEBUG_ENV_VAR"]
