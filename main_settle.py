from __future__ import annotations

import argparse
from pathlib import Path

from brickfall.cascade import falling_set
from brickfall.pipeline import BrickfallRun
from brickfall.scenarios import format_snapshot, sample_snapshot
from brickfall.snapshot import load_snapshot
from brickfall.utils.config import load_config
from brickfall.utils.logging import JsonlLogger, ensure_dir, flush, log_event
from brickfall.utils.rng import make_rng, set_global_seed


def cli_overrides(args: argparse.Namespace) -> dict:
    """Config patch built from the flags that were actually given."""
    patch: dict = {}
    if args.out:
        patch.setdefault("log", {})["out"] = args.out
    if args.workers is not None:
        patch.setdefault("cascade", {})["workers"] = args.workers
    if args.render or args.png:
        patch.setdefault("render", {})["enabled"] = True
    if args.highlight is not None:
        patch.setdefault("render", {})["highlight"] = args.highlight
    return patch


def main() -> None:
    ap = argparse.ArgumentParser()
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", help="Snapshot file, one x1,y1,z1~x2,y2,z2 brick per line")
    src.add_argument("--random", type=int, metavar="N", help="Settle N random bricks seeded from run.seed")
    ap.add_argument("--base", default="config.yaml", help="Base config")
    ap.add_argument("--exp", default="", help="Experiment overlay (optional)")
    ap.add_argument("--out", default="", help="Log output dir (overrides log.out)")
    ap.add_argument("--workers", type=int, default=None, help="Cascade worker threads (overrides cascade.workers)")
    ap.add_argument("--render", action="store_true", help="Show the settled stack")
    ap.add_argument("--highlight", type=int, default=None, help="Brick id whose cascade is drawn")
    ap.add_argument("--png", default="", help="Save the rendered frame here and exit instead of keeping the window open")
    args = ap.parse_args()

    # The default base config is optional; an explicit one must exist.
    base = args.base if args.base != "config.yaml" or Path(args.base).exists() else None
    cfg = load_config(base, args.exp or None, overrides=cli_overrides(args))

    run_name = cfg["run"].get("name") or (Path(args.input).stem if args.input else "random")
    seed = int(cfg["run"]["seed"])
    set_global_seed(seed)

    out_dir = Path(cfg["log"]["out"]) / run_name
    ensure_dir(out_dir)
    logger = JsonlLogger(out_dir / "run.jsonl", run_name=run_name)
    print(f"[RUN] {run_name}: log -> {logger.path}")

    try:
        if args.random is not None:
            if args.random < 0:
                raise ValueError(f"--random must be >= 0, got {args.random}")
            pairs = sample_snapshot(make_rng(seed), n_bricks=args.random)
            snapshot_path = out_dir / "snapshot.txt"
            snapshot_path.write_text(format_snapshot(pairs), encoding="utf-8")
            print(f"[RUN] generated {len(pairs)} bricks (seed={seed}) -> {snapshot_path}")
            log_event("input", {"path": str(snapshot_path), "n_bricks": len(pairs), "seed": seed})
        else:
            pairs = load_snapshot(args.input)
            log_event("input", {"path": str(args.input), "n_bricks": len(pairs)})

        sim = BrickfallRun(pairs, workers=int(cfg["cascade"]["workers"]))
        report = sim.run()

        print(f"Part 1: {report.safe_count}")
        print(f"Part 2: {report.total_cascade}")

        if cfg["render"]["enabled"]:
            _show(sim, cfg["render"], args.png)
    finally:
        flush()
        logger.close()


def _show(sim: BrickfallRun, render_cfg: dict, png: str) -> None:
    from brickfall.renderer import Renderer

    highlight = render_cfg.get("highlight")
    if highlight is None:
        highlight = sim.report.most_critical()
    falling = falling_set(sim.graph, int(highlight)) if highlight is not None else frozenset()

    renderer = Renderer(
        width=int(render_cfg["width"]),
        height=int(render_cfg["height"]),
        cell_px=int(render_cfg["cell_px"]),
    )
    info = sim.report.summary()
    try:
        renderer.render(sim.stack, falling=falling, removed=highlight, info=info)
        if png:
            renderer.save(png)
            print(f"[RENDER] saved -> {png}")
            return
        while True:
            renderer.render(sim.stack, falling=falling, removed=highlight, info=info)
    except SystemExit:
        pass
    finally:
        renderer.close()


if __name__ == "__main__":
    main()
