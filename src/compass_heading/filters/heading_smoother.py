from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..rotation import shortest_arc, wrap_deg360


@dataclass
class SmoothingParams:
    transition_s: float = 0.25
    initial_heading: float = 0.0


@dataclass
class HeadingState:
    start_heading: float
    target_heading: float
    start_time: float
    duration: float

    def fraction(self, now: float) -> float:
        f = (float(now) - self.start_time) / self.duration
        return min(1.0, max(0.0, f))

    def heading_at(self, now: float) -> float:
        f = self.fraction(now)
        if f >= 1.0:
            return self.target_heading
        return self.start_heading + (self.target_heading - self.start_heading) * f


class HeadingSmoother:
    """
    Raw azimuth -> continuous display heading.

    Every raw azimuth starts a fixed-length linear ramp from wherever the
    display currently is, taking the short way round. A new raw value
    arriving mid-ramp restarts the ramp, so at high sample rates the display
    tracks the input almost linearly instead of in discrete hops.

    The display heading is unbounded (crossing north from 5 to 355 ends at -5).
    rounded_heading()/heading_text() report it in [0, 360).
    """

    def __init__(self, params: Optional[SmoothingParams] = None):
        self.params = params or SmoothingParams()
        if not self.params.transition_s > 0.0:
            raise ValueError("transition_s must be > 0")
        self.state: Optional[HeadingState] = None

    def reset(self) -> None:
        self.state = None

    def current_display_heading(self, now: float) -> float:
        if self.state is None:
            return float(self.params.initial_heading)
        return self.state.heading_at(now)

    def on_raw_heading(self, target: float, now: float) -> HeadingState:
        current = self.current_display_heading(now)
        delta = shortest_arc(current, target)
        self.state = HeadingState(
            start_heading=current,
            target_heading=current + delta,
            start_time=float(now),
            duration=float(self.params.transition_s),
        )
        return self.state

    def rounded_heading(self, now: float) -> int:
        # half-up, so 0.5 -> 1 and -0.5 -> 0
        r = int(math.floor(self.current_display_heading(now) + 0.5))
        return int(wrap_deg360(r))

    def heading_text(self, now: float) -> str:
        return f"{self.rounded_heading(now)}°"
