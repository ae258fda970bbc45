from __future__ import annotations

import math
from typing import Tuple

import numpy as np


# Rotation convention in this project:
# - rotation matrix ndarray shape (3, 3)
# - rows: [east, north, up], each expressed in device coordinates
# - so R @ v_device gives v in the (east, north, up) world frame
# - angles are degrees unless the name says _rad


def v_norm(v: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(v, dtype=float).reshape(3)))


def v_normalize(v: np.ndarray) -> np.ndarray:
    v = np.asarray(v, dtype=float).reshape(3)
    n = float(np.linalg.norm(v))
    if n <= 0.0:
        raise ValueError("cannot normalize a zero vector")
    return v / n


def v_cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    a = np.asarray(a, dtype=float).reshape(3)
    b = np.asarray(b, dtype=float).reshape(3)
    return np.cross(a, b)


def basis_from_gravity_field(gravity: np.ndarray, magnetic: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Orthonormal (east, north, up) basis from a gravity and a magnetic field reading.
    Caller must have rejected zero or collinear inputs.
    """
    east = v_normalize(v_cross(magnetic, gravity))
    north = v_normalize(v_cross(gravity, east))
    up = v_normalize(gravity)
    return east, north, up


def rotation_from_basis(east: np.ndarray, north: np.ndarray, up: np.ndarray) -> np.ndarray:
    return np.vstack([
        np.asarray(east, dtype=float).reshape(3),
        np.asarray(north, dtype=float).reshape(3),
        np.asarray(up, dtype=float).reshape(3),
    ])


def yaw_from_rotation(R: np.ndarray) -> float:
    """Yaw in radians: angle of the device y axis from magnetic north."""
    R = np.asarray(R, dtype=float).reshape(3, 3)
    return math.atan2(float(R[0, 1]), float(R[1, 1]))


def wrap_deg180(angle_deg: float) -> float:
    """Wrap into (-180, 180]."""
    wrapped = (float(angle_deg) + 180.0) % 360.0 - 180.0
    if wrapped == -180.0:
        return 180.0
    return wrapped


def wrap_deg360(angle_deg: float) -> float:
    """Wrap into [0, 360)."""
    wrapped = float(angle_deg) % 360.0
    # -1e-17 % 360 == 360.0
    if wrapped >= 360.0:
        return 0.0
    return wrapped


def shortest_arc(from_deg: float, to_deg: float) -> float:
    """Signed delta that takes from_deg to to_deg the short way round."""
    return wrap_deg180(float(to_deg) - float(from_deg))
