"""Command-line entrypoint for flight trail animation runs."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import TRAIL_MODES, load_config
from .simulation.engine import FlightAnimator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flight trail animation core")
    parser.add_argument("--data", required=True, help="Path to location data JSON")
    parser.add_argument("--config", default=None, help="Path to config JSON")
    parser.add_argument("--output-dir", default=None, help="Output directory override")
    parser.add_argument("--max-ticks", type=int, default=None, help="Stop after this many ticks")
    parser.add_argument("--step", type=float, default=None, help="Virtual seconds per tick override")
    parser.add_argument("--trail-mode", choices=TRAIL_MODES, default=None, help="Trail descriptor format")
    parser.add_argument("--no-densify", action="store_true", help="Disable great-circle densification")
    parser.add_argument("--skip-npz", action="store_true", help="Do not write the per-tick frame archive")
    parser.add_argument("--plot", action="store_true", help="Write matplotlib diagnostic plots")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config)
    if args.output_dir is not None:
        cfg.output.output_dir = args.output_dir
    if args.step is not None:
        cfg.clock.step_s = args.step
    if args.trail_mode is not None:
        cfg.trail.mode = args.trail_mode
    if args.no_densify:
        cfg.densify.enabled = False
    if args.skip_npz:
        cfg.output.write_npz = False
    if args.plot:
        cfg.output.enable_matplotlib = True
    cfg.validate()

    output_dir = Path(cfg.output.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    animator = FlightAnimator(cfg)
    context, result = animator.run_from_location_file(args.data, max_ticks=args.max_ticks)

    summary_path = output_dir / "animation_summary.json"
    result.save_json_summary(summary_path)
    print(f"[done] summary: {summary_path}")

    if cfg.output.write_npz:
        npz_path = output_dir / "animation_frames.npz"
        result.save_npz(npz_path)
        print(f"[done] frames:  {npz_path}")

    if result.excluded:
        print(f"[warn] excluded {len(result.excluded)} flight(s):")
        for fid, reason in result.excluded.items():
            print(f"  - {fid}: {reason}")

    if cfg.output.enable_matplotlib:
        from .visualization import render_matplotlib_bundle

        try:
            generated = render_matplotlib_bundle(result, context, output_dir)
        except ImportError as exc:
            print(f"[warn] matplotlib backend failed: {exc}")
        else:
            print("[done] generated visual outputs:")
            for key, path in generated.items():
                print(f"  - matplotlib:{key} -> {path}")

    return 0


if __name__ == "__main__":
    main()
