"""Configuration helpers for the engine stages."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional


@dataclass
class EngineConfig:
    """Numeric thresholds shared by every stage.

    ``miter_guard`` is an absolute length: a mitered offset whose scale factor
    exceeds it falls back to the unscaled bisector.  It is not dimensionless,
    so networks drawn in very large units may trigger it earlier.
    """

    miter_guard: float = 100.0
    touch_tolerance: float = 1e-3
    straight_angle_epsilon: float = 0.01


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    _ENGINE_CONFIG = copy.deepcopy(config)


def resolve_config(config: Optional[EngineConfig]) -> EngineConfig:
    """Return ``config`` or the process-wide default when ``None``."""

    if config is None:
        return get_engine_config()
    return config
