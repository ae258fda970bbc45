from __future__ import annotations

import argparse
import logging
import time
from typing import Optional

from ..config import load_config
from ..pipeline import build_pipeline
from ..rotation import shortest_arc
from ..sensors.csv_reader import write_samples_csv
from ..sensors.synthetic import SyntheticCompass, SyntheticCompassParams
from ..utils.logger import HeadingLogger
from .replay_csv import run_samples

log = logging.getLogger(__name__)


def main() -> None:
    ap = argparse.ArgumentParser(description="Drive the compass pipeline with a synthetic turning device.")
    ap.add_argument("--config", type=str, default="config/config.yaml")
    ap.add_argument("--seconds", type=float, default=5.0)
    ap.add_argument("--heading0", type=float, default=0.0, help="start bearing, deg clockwise from north")
    ap.add_argument("--yaw-rate", type=float, default=30.0, help="deg/s, clockwise positive")
    ap.add_argument("--noise", type=float, default=0.0, help="sensor noise std (m/s^2 and uT)")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--no-view", action="store_true")
    ap.add_argument("--write-samples", type=str, default=None, help="also save raw samples as replayable CSV")
    args = ap.parse_args()

    cfg = load_config(args.config)
    logging.basicConfig(level=cfg.logging.level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    source = SyntheticCompass(SyntheticCompassParams(
        sample_rate_hz=cfg.sample_rate_hz,
        duration_s=args.seconds,
        heading0_deg=args.heading0,
        yaw_rate_deg_s=args.yaw_rate,
        acc_noise=args.noise,
        mag_noise=args.noise,
        seed=args.seed,
    ))
    samples = list(source.samples())
    if not samples:
        raise SystemExit("no samples: --seconds too short for sample_rate_hz")

    if args.write_samples:
        n = write_samples_csv(args.write_samples, samples)
        print(f"saved: {args.write_samples} ({n} samples)")

    pipeline = build_pipeline(cfg)

    viewer = None
    if cfg.screen.enable and (not args.no_view):
        from .visualize_pygame import CompassViewer
        viewer = CompassViewer(cfg.screen.width, cfg.screen.height, title="Compass Simulation")

    logger: Optional[HeadingLogger] = None
    if cfg.logging.save_csv:
        logger = HeadingLogger(cfg.logging.out_dir, prefix="sim")

    try:
        t0 = time.time()
        run_samples(pipeline, samples, cfg, logger=logger, viewer=viewer)
        dt = time.time() - t0

        t_end = samples[-1].t
        display = pipeline.display_heading(t_end)
        err = shortest_arc(source.true_azimuth(t_end), display)
        st = pipeline.stats
        log.info("%d samples in %.3fs, %d fused, %d skipped", st.received, dt, st.fused, st.skipped)
        print(f"t={t_end:.2f}s true={source.true_azimuth(t_end):.1f} display={display:.1f} "
              f"({pipeline.heading_text(t_end)}) err={err:+.2f} deg")
    finally:
        if logger is not None:
            logger.close()
            print(f"saved: {logger.csv_path}")
        if viewer is not None:
            viewer.close()


if __name__ == "__main__":
    main()
