from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..rotation import (
    basis_from_gravity_field,
    rotation_from_basis,
    v_cross,
    v_norm,
    wrap_deg180,
    yaw_from_rotation,
)

STANDARD_GRAVITY = 9.80665  # m/s^2


class FusionError(Exception):
    """Orientation could not be determined for this cycle. Never fatal."""


class DegenerateInputError(FusionError):
    pass


class MissingSampleError(FusionError):
    pass


@dataclass
class FusionParams:
    min_gravity_norm: float = 0.980665  # 0.1 g; below this: free fall
    min_field_norm: float = 1e-6
    min_cross_norm: float = 0.1  # |mag x grav|, below this: collinear / near a pole


class OrientationEstimator:
    """
    Gravity + magnetic field -> azimuth, one reading pair at a time.
    No filter state: the same two vectors always give the same answer.

    Azimuth sign: device flat, y axis forward.
      pointing north -> 0, east -> -90, south -> 180, west -> +90
    i.e. the angle to rotate a north-up compass rose by.
    """

    def __init__(self, params: Optional[FusionParams] = None):
        self.params = params or FusionParams()

    def check(self, gravity: np.ndarray, magnetic: np.ndarray) -> None:
        p = self.params
        # finite inputs can still overflow the norms
        with np.errstate(over="ignore", invalid="ignore"):
            g_norm = v_norm(gravity)
            m_norm = v_norm(magnetic)
            h_norm = v_norm(v_cross(magnetic, gravity))
        if not (math.isfinite(g_norm) and math.isfinite(m_norm) and math.isfinite(h_norm)):
            raise DegenerateInputError("reading out of range (norm overflow)")
        if g_norm < p.min_gravity_norm:
            raise DegenerateInputError(f"gravity too small (|g|={g_norm:.4g})")
        if m_norm < p.min_field_norm:
            raise DegenerateInputError(f"magnetic field too small (|m|={m_norm:.4g})")
        if h_norm < p.min_cross_norm:
            raise DegenerateInputError(f"gravity and magnetic field collinear (|m x g|={h_norm:.4g})")

    def rotation_matrix(self, gravity: np.ndarray, magnetic: np.ndarray) -> np.ndarray:
        self.check(gravity, magnetic)
        try:
            east, north, up = basis_from_gravity_field(gravity, magnetic)
        except ValueError as e:
            raise DegenerateInputError(str(e)) from e
        return rotation_from_basis(east, north, up)

    def estimate(self, gravity: np.ndarray, magnetic: np.ndarray) -> float:
        R = self.rotation_matrix(gravity, magnetic)
        yaw_deg = math.degrees(yaw_from_rotation(R))
        return wrap_deg180(-yaw_deg)
