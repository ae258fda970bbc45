from __future__ import annotations

import argparse
import logging
from typing import Iterable, Optional

from ..config import ProjectConfig, load_config
from ..pipeline import CompassPipeline, build_pipeline
from ..sensors.csv_reader import CSVReplay
from ..sensors.samples import SensorKind, SensorSample
from ..utils.axis import remap_sample
from ..utils.logger import HeadingLogger

log = logging.getLogger(__name__)


def remap_for_config(sample: SensorSample, cfg: ProjectConfig) -> SensorSample:
    ax = cfg.sensors.accelerometer if sample.kind is SensorKind.ACCELEROMETER else cfg.sensors.magnetometer
    return remap_sample(sample, ax.axis_map, ax.axis_sign)


def run_samples(pipeline: CompassPipeline,
                samples: Iterable[SensorSample],
                cfg: ProjectConfig,
                logger: Optional[HeadingLogger] = None,
                viewer=None) -> int:
    """Push every sample through an active pipeline. Returns the number of samples consumed."""
    n = 0
    pipeline.activate()
    try:
        for raw in samples:
            s = remap_for_config(raw, cfg)
            azimuth = pipeline.push(s)
            n += 1

            if logger is not None:
                logger.write_sample(s, azimuth, pipeline.display_heading(s.t), pipeline.rounded_heading(s.t))

            if viewer is not None:
                viewer.draw(pipeline.display_heading(s.t), pipeline.heading_text(s.t))
                if not viewer.is_running:
                    break
    finally:
        pipeline.deactivate()
    return n


def main() -> None:
    ap = argparse.ArgumentParser(description="Replay an accelerometer/magnetometer CSV through the compass pipeline.")
    ap.add_argument("--config", type=str, default="config/config.yaml")
    ap.add_argument("--csv", type=str, required=True)
    ap.add_argument("--no-view", action="store_true")
    ap.add_argument("--out-dir", type=str, default=None)
    args = ap.parse_args()

    cfg = load_config(args.config)
    logging.basicConfig(level=cfg.logging.level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    replay = CSVReplay(args.csv)
    log.info("replaying %s (%s format)", args.csv, replay.mode)
    pipeline = build_pipeline(cfg)

    viewer = None
    if cfg.screen.enable and (not args.no_view):
        # lazy import: --no-view works without pygame
        from .visualize_pygame import CompassViewer
        viewer = CompassViewer(cfg.screen.width, cfg.screen.height, title="Compass Replay")

    logger: Optional[HeadingLogger] = None
    if cfg.logging.save_csv:
        out_dir = args.out_dir if args.out_dir is not None else cfg.logging.out_dir
        logger = HeadingLogger(out_dir, prefix="replay")

    try:
        n = run_samples(pipeline, replay.samples(), cfg, logger=logger, viewer=viewer)
        st = pipeline.stats
        log.info("%d samples, %d fused, %d skipped", n, st.fused, st.skipped)
        last_t = max((s.t for s in replay.samples()), default=0.0)
        print(f"final heading: {pipeline.heading_text(last_t + cfg.smoothing.transition_s)}")
    finally:
        if logger is not None:
            logger.close()
            print(f"saved: {logger.csv_path}")
        if viewer is not None:
            viewer.close()


if __name__ == "__main__":
    main()
