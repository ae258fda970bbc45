from __future__ import annotations

import csv
import os
import time
from typing import Optional

from ..sensors.samples import SensorSample

TRACE_COLUMNS = ["t", "sensor", "x", "y", "z", "azimuth", "display", "rounded"]


def trace_path(out_dir: str, prefix: str) -> str:
    return os.path.join(out_dir, f"{prefix}_{time.strftime('%Y%m%d_%H%M%S')}.csv")


class HeadingLogger:
    """
    One CSV row per ingested sample: the raw reading, the azimuth it fused to
    (blank when the cycle was skipped) and what the display showed at that time.
    """

    def __init__(self, out_dir: str, prefix: str = "run"):
        os.makedirs(out_dir, exist_ok=True)
        self.csv_path = trace_path(out_dir, prefix)
        self._f = open(self.csv_path, "w", newline="", encoding="utf-8")
        self._w = csv.DictWriter(self._f, fieldnames=TRACE_COLUMNS)
        self._w.writeheader()

    def __enter__(self) -> "HeadingLogger":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def write_sample(self,
                     sample: SensorSample,
                     azimuth: Optional[float],
                     display: float,
                     rounded: int) -> None:
        x, y, z = (float(c) for c in sample.vec)
        self._w.writerow({
            "t": float(sample.t),
            "sensor": sample.kind.value,
            "x": x, "y": y, "z": z,
            "azimuth": "" if azimuth is None else float(azimuth),
            "display": float(display),
            "rounded": int(rounded),
        })

    def close(self) -> None:
        self._f.close()
