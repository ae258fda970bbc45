from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional

from .config import ProjectConfig
from .filters.heading_smoother import HeadingSmoother
from .filters.orientation import FusionError, MissingSampleError, OrientationEstimator
from .sensors.sample_store import SampleStore
from .sensors.samples import SensorKind, SensorSample

log = logging.getLogger(__name__)


@dataclass
class PipelineStats:
    received: int = 0
    dropped_inactive: int = 0
    fused: int = 0
    skipped: int = 0


class CompassPipeline:
    """
    Ingestion + query surface of the compass core.

    The environment pushes samples in; a renderer polls display_heading().
    Both may run on different threads: store and smoother are only touched
    under self._lock.
    """

    def __init__(self,
                 estimator: OrientationEstimator,
                 smoother: HeadingSmoother,
                 store: Optional[SampleStore] = None):
        self.estimator = estimator
        self.smoother = smoother
        self.store = store or SampleStore()
        self.stats = PipelineStats()
        self._active = False
        self._lock = threading.RLock()

    @property
    def is_active(self) -> bool:
        return self._active

    def activate(self) -> None:
        with self._lock:
            if not self._active:
                self._active = True
                log.info("compass pipeline active")

    def deactivate(self) -> None:
        # in-flight ramp keeps running to its target; store is kept
        with self._lock:
            if self._active:
                self._active = False
                log.info("compass pipeline inactive (fused=%d skipped=%d)",
                         self.stats.fused, self.stats.skipped)

    def push(self, sample: SensorSample) -> Optional[float]:
        """Apply one sample. Returns the raw azimuth, or None if this cycle was skipped."""
        with self._lock:
            self.stats.received += 1
            if not self._active:
                self.stats.dropped_inactive += 1
                log.debug("dropped %s sample at t=%.3f: inactive", sample.kind.value, sample.t)
                return None

            self.store.update(sample)
            try:
                azimuth = self._fuse()
            except FusionError as e:
                self.stats.skipped += 1
                log.debug("skipped fusion at t=%.3f: %s", sample.t, e)
                return None

            self.smoother.on_raw_heading(azimuth, sample.t)
            self.stats.fused += 1
            return azimuth

    def push_vector(self, kind, vec: Iterable[float], t: float) -> Optional[float]:
        return self.push(SensorSample.of(t, kind, vec))

    def _fuse(self) -> float:
        gravity, magnetic = self.store.latest()
        if gravity is None or magnetic is None:
            missing = SensorKind.ACCELEROMETER if gravity is None else SensorKind.MAGNETIC
            raise MissingSampleError(f"no {missing.value} sample yet")
        return self.estimator.estimate(gravity, magnetic)

    def display_heading(self, now: float) -> float:
        with self._lock:
            return self.smoother.current_display_heading(now)

    def rounded_heading(self, now: float) -> int:
        with self._lock:
            return self.smoother.rounded_heading(now)

    def heading_text(self, now: float) -> str:
        with self._lock:
            return self.smoother.heading_text(now)


def build_pipeline(cfg: ProjectConfig) -> CompassPipeline:
    return CompassPipeline(
        estimator=OrientationEstimator(cfg.fusion),
        smoother=HeadingSmoother(cfg.smoothing),
    )
