from __future__ import annotations

import numpy as np

from ..sensors.samples import SensorSample, as_vector3


def remap_vec3(v: np.ndarray, axis_map: np.ndarray, axis_sign: np.ndarray) -> np.ndarray:
    """
    v: (3,) in the chip's axis order
    axis_map: output axis i takes input axis axis_map[i]; [1,0,2] swaps x/y
    axis_sign: e.g. [1,-1,1] flips y after the swap

    returns: read-only (3,) in device axes (x right, y forward, z out of screen)
    """
    vv = np.asarray(v, dtype=float).reshape(3)
    am = np.asarray(axis_map, dtype=int).reshape(3)
    sg = np.asarray(axis_sign, dtype=int).reshape(3)
    return as_vector3(vv[am] * sg)


def remap_sample(sample: SensorSample, axis_map: np.ndarray, axis_sign: np.ndarray) -> SensorSample:
    return SensorSample(t=sample.t, kind=sample.kind, vec=remap_vec3(sample.vec, axis_map, axis_sign))
