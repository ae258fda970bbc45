"""Tests for CSV replay of sensor samples."""

from __future__ import annotations

import os

import pytest

from compass_heading.sensors.csv_reader import CSVReplay, write_samples_csv
from compass_heading.sensors.samples import SensorKind
from compass_heading.sensors.synthetic import SyntheticCompass, SyntheticCompassParams

SAMPLE_CSV = os.path.join(os.path.dirname(__file__), "..", "data", "samples", "sample.csv")


def test_long_format(tmp_path):
    path = tmp_path / "long.csv"
    path.write_text(
        "t,sensor,x,y,z\n"
        "0.0,acc,0,0,9.81\n"
        "0.01,magnetometer,0,20,-40\n",
        encoding="utf-8",
    )
    replay = CSVReplay(str(path))
    assert replay.mode == "long"
    samples = list(replay.samples())
    assert [s.kind for s in samples] == [SensorKind.ACCELEROMETER, SensorKind.MAGNETIC]
    assert samples[1].t == pytest.approx(0.01)
    assert samples[1].vec.tolist() == [0.0, 20.0, -40.0]


def test_wide_format_skips_blank_triplets(tmp_path):
    path = tmp_path / "wide.csv"
    path.write_text(
        "t,ax,ay,az,mx,my,mz\n"
        "0.0,0,0,9.81,0,20,-40\n"
        "0.02,0,0,9.81,,,\n",
        encoding="utf-8",
    )
    replay = CSVReplay(str(path))
    assert replay.mode == "wide"
    samples = list(replay.samples())
    assert [(s.t, s.kind) for s in samples] == [
        (0.0, SensorKind.ACCELEROMETER),
        (0.0, SensorKind.MAGNETIC),
        (0.02, SensorKind.ACCELEROMETER),
    ]


def test_bad_row_reports_line(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("t,sensor,x,y,z\n0.0,acc,0,0,9.81\n0.1,acc,zero,0,9.81\n", encoding="utf-8")
    with pytest.raises(ValueError, match="row 3"):
        list(CSVReplay(str(path)).samples())


@pytest.mark.parametrize("content", ["t,sensor,x,y,z\n", "time,x,y,z\n0,1,2,3\n", "t,foo\n0,1\n"])
def test_rejects_empty_or_unknown_layout(tmp_path, content):
    path = tmp_path / "x.csv"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        CSVReplay(str(path))


def test_written_samples_replay(tmp_path):
    src = SyntheticCompass(SyntheticCompassParams(sample_rate_hz=20.0, duration_s=1.0))
    original = list(src.samples())
    path = str(tmp_path / "synthetic.csv")
    assert write_samples_csv(path, original) == len(original)

    replayed = list(CSVReplay(path).samples())
    assert len(replayed) == len(original)
    assert replayed[5].kind is original[5].kind
    assert replayed[5].vec.tolist() == pytest.approx(original[5].vec.tolist())


def test_shipped_sample_file():
    samples = list(CSVReplay(SAMPLE_CSV).samples())
    assert len(samples) == 14
    assert samples[0].kind is SensorKind.ACCELEROMETER


def test_wide_format_rejects_partial_triplet(tmp_path):
    path = tmp_path / "partial.csv"
    path.write_text(
        "t,ax,ay,az,mx,my,mz\n"
        "0.0,0,0,9.81,0,20,-40\n"
        "0.02,0,,9.81,0,20,-40\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="row 3"):
        list(CSVReplay(str(path)).samples())


def test_wide_format_with_magnetometer_only(tmp_path):
    path = tmp_path / "mag_only.csv"
    path.write_text("t,mx,my,mz\n0.0,0,20,-40\n", encoding="utf-8")
    samples = list(CSVReplay(str(path)).samples())
    assert [s.kind for s in samples] == [SensorKind.MAGNETIC]
