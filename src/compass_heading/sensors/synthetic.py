from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from ..filters.orientation import STANDARD_GRAVITY
from ..rotation import wrap_deg180
from .samples import SensorKind, SensorSample, as_vector3


@dataclass
class SyntheticCompassParams:
    sample_rate_hz: float = 50.0
    duration_s: float = 5.0
    heading0_deg: float = 0.0  # device y axis bearing, clockwise from north
    yaw_rate_deg_s: float = 30.0
    field_horizontal_uT: float = 20.0
    field_vertical_uT: float = 40.0  # downward (northern hemisphere)
    acc_noise: float = 0.0  # std, m/s^2
    mag_noise: float = 0.0  # std, uT
    seed: Optional[int] = None


class SyntheticCompass:
    """
    Flat device (screen up) turning at a constant rate.
    Emits accelerometer and magnetometer samples alternately at sample_rate_hz.
    """

    def __init__(self, params: Optional[SyntheticCompassParams] = None):
        self.params = params or SyntheticCompassParams()
        if self.params.sample_rate_hz <= 0.0:
            raise ValueError("sample_rate_hz must be > 0")
        self._rng = np.random.default_rng(self.params.seed)

    def device_heading(self, t: float) -> float:
        p = self.params
        return p.heading0_deg + p.yaw_rate_deg_s * float(t)

    def true_azimuth(self, t: float) -> float:
        return wrap_deg180(-self.device_heading(t))

    def gravity(self) -> np.ndarray:
        return np.array([0.0, 0.0, STANDARD_GRAVITY], dtype=float)

    def magnetic(self, t: float) -> np.ndarray:
        p = self.params
        psi = math.radians(self.device_heading(t))
        # north expressed in device axes, plus the downward dip component
        return np.array([
            -p.field_horizontal_uT * math.sin(psi),
            p.field_horizontal_uT * math.cos(psi),
            -p.field_vertical_uT,
        ], dtype=float)

    def _noisy(self, v: np.ndarray, std: float) -> np.ndarray:
        if std <= 0.0:
            return v
        return v + self._rng.normal(0.0, std, 3)

    def samples(self) -> Iterator[SensorSample]:
        p = self.params
        n = int(round(p.duration_s * p.sample_rate_hz))
        dt = 1.0 / p.sample_rate_hz
        for k in range(n):
            t = k * dt
            if k % 2 == 0:
                v = self._noisy(self.gravity(), p.acc_noise)
                yield SensorSample(t=t, kind=SensorKind.ACCELEROMETER, vec=as_vector3(v))
            else:
                v = self._noisy(self.magnetic(t), p.mag_noise)
                yield SensorSample(t=t, kind=SensorKind.MAGNETIC, vec=as_vector3(v))
