"""Tests for the synthetic turning-device source."""

from __future__ import annotations

import numpy as np
import pytest

from compass_heading.filters.orientation import OrientationEstimator
from compass_heading.rotation import shortest_arc
from compass_heading.sensors.samples import SensorKind
from compass_heading.sensors.synthetic import SyntheticCompass, SyntheticCompassParams


def test_alternates_sensors_at_rate():
    src = SyntheticCompass(SyntheticCompassParams(sample_rate_hz=10.0, duration_s=1.0))
    samples = list(src.samples())
    assert len(samples) == 10
    assert [s.kind for s in samples[:4]] == [
        SensorKind.ACCELEROMETER, SensorKind.MAGNETIC, SensorKind.ACCELEROMETER, SensorKind.MAGNETIC,
    ]
    assert samples[3].t == pytest.approx(0.3)


@pytest.mark.parametrize("heading", [0.0, 45.0, 90.0, 135.0, 200.0, 270.0, 359.0])
def test_fields_match_pinned_sign_convention(heading):
    src = SyntheticCompass(SyntheticCompassParams(heading0_deg=heading, yaw_rate_deg_s=0.0))
    azimuth = OrientationEstimator().estimate(src.gravity(), src.magnetic(0.0))
    assert abs(shortest_arc(src.true_azimuth(0.0), azimuth)) < 1e-6
    assert abs(shortest_arc(-heading, azimuth)) < 1e-6


def test_seeded_noise_is_reproducible():
    p = SyntheticCompassParams(duration_s=0.5, acc_noise=0.1, mag_noise=0.5, seed=7)
    a = [s.vec for s in SyntheticCompass(p).samples()]
    b = [s.vec for s in SyntheticCompass(p).samples()]
    assert all(np.array_equal(x, y) for x, y in zip(a, b))
    assert not np.array_equal(a[0], SyntheticCompass(SyntheticCompassParams()).gravity())


def test_rejects_bad_rate():
    with pytest.raises(ValueError):
        SyntheticCompass(SyntheticCompassParams(sample_rate_hz=0.0))
