from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import numpy as np


class SensorKind(str, Enum):
    ACCELEROMETER = "acc"
    MAGNETIC = "mag"

    @classmethod
    def parse(cls, name: str) -> "SensorKind":
        key = str(name).strip().lower()
        if key in ("acc", "accel", "accelerometer", "gravity"):
            return cls.ACCELEROMETER
        if key in ("mag", "magnetic", "magnetometer", "magnetic_field"):
            return cls.MAGNETIC
        raise ValueError(f"unknown sensor kind: {name!r}")


def as_vector3(v: Iterable[float]) -> np.ndarray:
    """Read-only float (3,) copy of v. Rejects anything that is not three finite numbers."""
    a = np.array(v, dtype=float)
    if a.shape != (3,):
        raise ValueError(f"expected 3 components, got shape {a.shape}")
    if not np.all(np.isfinite(a)):
        raise ValueError(f"non-finite component in {a.tolist()}")
    a.flags.writeable = False
    return a


@dataclass(frozen=True, eq=False)
class SensorSample:
    t: float
    kind: SensorKind
    vec: np.ndarray  # (3,) read-only; acc in m/s^2, mag in uT

    @classmethod
    def of(cls, t: float, kind, vec: Iterable[float]) -> "SensorSample":
        k = kind if isinstance(kind, SensorKind) else SensorKind.parse(kind)
        return cls(t=float(t), kind=k, vec=as_vector3(vec))
