from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import yaml

from .filters.heading_smoother import SmoothingParams
from .filters.orientation import FusionParams


def _np3i(x: List[int]) -> np.ndarray:
    a = np.asarray(x, dtype=int).reshape(3)
    return a


def _block(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    b = raw.get(key, {}) or {}
    if not isinstance(b, dict):
        raise ValueError(f"config: '{key}' must be a mapping")
    return b


@dataclass
class SensorAxisConfig:
    axis_map: np.ndarray = field(default_factory=lambda: np.array([0, 1, 2], dtype=int))
    axis_sign: np.ndarray = field(default_factory=lambda: np.array([1, 1, 1], dtype=int))


@dataclass
class SensorsConfig:
    accelerometer: SensorAxisConfig = field(default_factory=SensorAxisConfig)
    magnetometer: SensorAxisConfig = field(default_factory=SensorAxisConfig)


@dataclass
class ScreenConfig:
    enable: bool = True
    width: int = 480
    height: int = 480


@dataclass
class LoggingConfig:
    save_csv: bool = True
    out_dir: str = "runs"
    level: str = "INFO"


@dataclass
class ProjectConfig:
    sample_rate_hz: float = 50.0
    sensors: SensorsConfig = field(default_factory=SensorsConfig)
    fusion: FusionParams = field(default_factory=FusionParams)
    smoothing: SmoothingParams = field(default_factory=SmoothingParams)
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config() -> ProjectConfig:
    return ProjectConfig()


def _axis_config(s: Optional[Dict[str, Any]], name: str) -> SensorAxisConfig:
    s = s or {}
    axis_map = _np3i(s.get("axis_map", [0, 1, 2]))
    axis_sign = _np3i(s.get("axis_sign", [1, 1, 1]))
    if sorted(axis_map.tolist()) != [0, 1, 2]:
        raise ValueError(f"config: sensors.{name}.axis_map must be a permutation of [0, 1, 2]")
    if not all(v in (-1, 1) for v in axis_sign.tolist()):
        raise ValueError(f"config: sensors.{name}.axis_sign entries must be 1 or -1")
    return SensorAxisConfig(axis_map=axis_map, axis_sign=axis_sign)


def config_from_dict(raw: Optional[Dict[str, Any]]) -> ProjectConfig:
    raw = raw or {}
    defaults = ProjectConfig()

    sample_rate_hz = float(raw.get("sample_rate_hz", defaults.sample_rate_hz))
    if not sample_rate_hz > 0.0:
        raise ValueError("config: sample_rate_hz must be > 0")

    sn = _block(raw, "sensors")
    sensors = SensorsConfig(
        accelerometer=_axis_config(sn.get("accelerometer"), "accelerometer"),
        magnetometer=_axis_config(sn.get("magnetometer"), "magnetometer"),
    )

    fu = _block(raw, "fusion")
    fusion = FusionParams(
        min_gravity_norm=float(fu.get("min_gravity_norm", defaults.fusion.min_gravity_norm)),
        min_field_norm=float(fu.get("min_field_norm", defaults.fusion.min_field_norm)),
        min_cross_norm=float(fu.get("min_cross_norm", defaults.fusion.min_cross_norm)),
    )
    for name in ("min_gravity_norm", "min_field_norm", "min_cross_norm"):
        if not getattr(fusion, name) > 0.0:
            raise ValueError(f"config: fusion.{name} must be > 0")

    sm = _block(raw, "smoothing")
    smoothing = SmoothingParams(
        transition_s=float(sm.get("transition_s", defaults.smoothing.transition_s)),
        initial_heading=float(sm.get("initial_heading", defaults.smoothing.initial_heading)),
    )
    if not smoothing.transition_s > 0.0:
        raise ValueError("config: smoothing.transition_s must be > 0")

    sc = _block(raw, "screen")
    screen = ScreenConfig(
        enable=bool(sc.get("enable", defaults.screen.enable)),
        width=int(sc.get("width", defaults.screen.width)),
        height=int(sc.get("height", defaults.screen.height)),
    )

    lg = _block(raw, "logging")
    logging = LoggingConfig(
        save_csv=bool(lg.get("save_csv", defaults.logging.save_csv)),
        out_dir=str(lg.get("out_dir", defaults.logging.out_dir)),
        level=str(lg.get("level", defaults.logging.level)).upper(),
    )

    return ProjectConfig(
        sample_rate_hz=sample_rate_hz,
        sensors=sensors,
        fusion=fusion,
        smoothing=smoothing,
        screen=screen,
        logging=logging,
    )


def load_config(path: str) -> ProjectConfig:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return config_from_dict(raw)
