"""Module entry point for `python -m pathlattice`."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console

from pathlattice.app import run_search
from pathlattice.db.trace_log import TRACE_LOG_NAME, read_grid_spec, read_step_records
from pathlattice.log import configure_logging
from pathlattice.render.report import render_outcome
from pathlattice.sim.contracts import GridSpec
from pathlattice.sim.map_loader import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    blank_grid_spec,
    load_map,
    resolve_map_path,
)

DEFAULT_TRACE_DIR = Path("traces")

logger = logging.getLogger("pathlattice.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a stepwise A* search over an obstacle grid."
    )
    parser.add_argument(
        "--map",
        type=Path,
        default=None,
        help="ASCII map file (# obstacle, S start, E end). "
        "Defaults to $PATHLATTICE_MAP.",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help="Grid width when no map is given.",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_HEIGHT,
        help="Grid height when no map is given.",
    )
    parser.add_argument(
        "--start", type=parse_point, default=None, help="Start point as X,Y."
    )
    parser.add_argument(
        "--end", type=parse_point, default=None, help="End point as X,Y."
    )
    parser.add_argument(
        "--obstacle",
        type=parse_point,
        action="append",
        default=[],
        help="Obstacle cell as X,Y (repeatable).",
    )
    parser.add_argument(
        "--trace-dir",
        type=Path,
        default=None,
        help="Write a step trace run folder under this directory.",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="Print the outcome stored in a saved run folder.",
    )
    parser.add_argument(
        "--replay-latest",
        action="store_true",
        help="Print the newest run folder under --trace-dir (default: traces).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    return parser


def parse_point(value: str) -> tuple[int, int]:
    parts = value.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got {value!r}.")
    try:
        x, y = (int(part.strip()) for part in parts)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Coordinates must be integers: {value!r}."
        ) from exc
    if x < 0 or y < 0:
        raise argparse.ArgumentTypeError(f"Coordinates must be >= 0: {value!r}.")
    return x, y


def build_grid_spec(args: argparse.Namespace) -> GridSpec:
    map_path = resolve_map_path(args.map)
    if map_path is None:
        return blank_grid_spec(
            args.width,
            args.height,
            start=args.start,
            end=args.end,
            obstacles=args.obstacle,
        )
    spec = load_map(map_path)
    logger.info("Loaded %dx%d map from %s", spec.width, spec.height, map_path)
    return GridSpec(
        width=spec.width,
        height=spec.height,
        obstacles=[*spec.obstacles, *args.obstacle],
        start=args.start or spec.start,
        end=args.end or spec.end,
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    console = Console()

    if args.replay is not None or args.replay_latest:
        run_folder = args.replay
        if run_folder is None:
            run_folder = _latest_run_folder(args.trace_dir or DEFAULT_TRACE_DIR)
        if run_folder is None:
            raise SystemExit("No run folder found. Run a search with --trace-dir.")
        _replay_run(console, run_folder)
        return

    try:
        spec = build_grid_spec(args)
    except (ValueError, FileNotFoundError) as exc:
        parser.error(str(exc))

    outcome = run_search(spec, trace_dir=args.trace_dir)
    console.print(render_outcome(spec, outcome.last_step))
    if outcome.run_dir is not None:
        console.print(f"Trace saved to {outcome.run_dir}")


def _latest_run_folder(base_dir: Path) -> Path | None:
    if not base_dir.exists():
        return None
    run_dirs = [path for path in base_dir.iterdir() if path.is_dir()]
    if not run_dirs:
        return None
    return sorted(run_dirs)[-1]


def _replay_run(console: Console, run_folder: Path) -> None:
    log_path = run_folder / TRACE_LOG_NAME
    if not log_path.exists():
        raise SystemExit(f"No trace log found in {run_folder}.")
    spec = read_grid_spec(log_path)
    if spec is None:
        raise SystemExit(f"Trace log {log_path} has no grid header.")
    records = list(read_step_records(log_path))
    console.print(render_outcome(spec, records[-1] if records else None))


if __name__ == "__main__":
    main()
