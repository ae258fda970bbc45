from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from .samples import SensorKind, SensorSample, as_vector3


class SampleStore:
    """
    Latest accelerometer and magnetometer readings.
    Each side is overwritten independently; no timestamp pairing.
    """

    def __init__(self) -> None:
        self._gravity: Optional[np.ndarray] = None
        self._magnetic: Optional[np.ndarray] = None

    def set_accelerometer(self, v: Iterable[float]) -> None:
        self._gravity = as_vector3(v)

    def set_magnetometer(self, v: Iterable[float]) -> None:
        self._magnetic = as_vector3(v)

    def update(self, sample: SensorSample) -> None:
        if sample.kind is SensorKind.ACCELEROMETER:
            self.set_accelerometer(sample.vec)
        else:
            self.set_magnetometer(sample.vec)

    def latest(self) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        return self._gravity, self._magnetic

    @property
    def is_ready(self) -> bool:
        return self._gravity is not None and self._magnetic is not None

    def clear(self) -> None:
        self._gravity = None
        self._magnetic = None
