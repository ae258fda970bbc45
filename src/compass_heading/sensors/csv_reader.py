from __future__ import annotations

import csv
from typing import Dict, Iterator, List

from .samples import SensorKind, SensorSample


_WIDE_COLS = {
    SensorKind.ACCELEROMETER: ("ax", "ay", "az"),
    SensorKind.MAGNETIC: ("mx", "my", "mz"),
}


class CSVReplay:
    """
    CSV replay with auto-detection.

    Supported formats:

    (A) long format, one sensor reading per row:
        t,sensor,x,y,z
        0.000,acc,0.0,0.0,9.81
        0.010,mag,0.0,22.0,-40.0

    (B) wide format, both readings on one row (blank triplet = no reading):
        t,ax,ay,az,mx,my,mz

    Units expected:
        - acc: m/s^2
        - mag: uT
        - t: seconds
    """

    def __init__(self, csv_path: str):
        self.csv_path = csv_path
        self._rows = self._load_rows()
        if not self._rows:
            raise ValueError(f"CSV is empty: {csv_path}")
        self._mode = self._detect_mode(self._rows[0].keys())

    def _load_rows(self) -> List[Dict[str, str]]:
        with open(self.csv_path, "r", newline="", encoding="utf-8") as f:
            r = csv.DictReader(f)
            return [row for row in r]

    @staticmethod
    def _detect_mode(keys) -> str:
        keys = set(keys)
        if "t" not in keys:
            raise ValueError("CSV must contain a 't' column.")
        if {"sensor", "x", "y", "z"} <= keys:
            return "long"
        if set(_WIDE_COLS[SensorKind.ACCELEROMETER]) <= keys or set(_WIDE_COLS[SensorKind.MAGNETIC]) <= keys:
            return "wide"
        raise ValueError("CSV must have either sensor,x,y,z or ax..az / mx..mz columns.")

    @property
    def mode(self) -> str:
        return self._mode

    def samples(self) -> Iterator[SensorSample]:
        if self._mode == "long":
            yield from self._samples_long()
        else:
            yield from self._samples_wide()

    def _row_error(self, lineno: int, e: Exception) -> ValueError:
        return ValueError(f"{self.csv_path}: bad row {lineno}: {e}")

    def _samples_long(self) -> Iterator[SensorSample]:
        # header is line 1
        for i, row in enumerate(self._rows, start=2):
            try:
                sample = SensorSample.of(
                    t=float(row["t"]),
                    kind=row["sensor"],
                    vec=[float(row["x"]), float(row["y"]), float(row["z"])],
                )
            except (TypeError, ValueError) as e:
                raise self._row_error(i, e) from e
            yield sample

    def _samples_wide(self) -> Iterator[SensorSample]:
        for i, row in enumerate(self._rows, start=2):
            try:
                t = float(row["t"])
                found = []
                for kind, cols in _WIDE_COLS.items():
                    cells = [(row.get(c) or "").strip() for c in cols]
                    if all(c == "" for c in cells):
                        continue
                    if "" in cells:
                        raise ValueError(f"incomplete {kind.value} triplet {cols}")
                    found.append(SensorSample.of(t=t, kind=kind, vec=[float(c) for c in cells]))
            except (TypeError, ValueError) as e:
                raise self._row_error(i, e) from e
            yield from found


def write_samples_csv(path: str, samples) -> int:
    """Write samples in long format. Returns the number of rows written."""
    n = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["t", "sensor", "x", "y", "z"])
        for s in samples:
            w.writerow([f"{s.t:.6f}", s.kind.value, float(s.vec[0]), float(s.vec[1]), float(s.vec[2])])
            n += 1
    return n
