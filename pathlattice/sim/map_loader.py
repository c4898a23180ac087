"""Load grid setups from ASCII maps or from plain dimensions."""

from __future__ import annotations

import math
import os
from pathlib import Path

from pathlattice.sim.contracts import GridSpec

MAP_ENV_VAR = "PATHLATTICE_MAP"
DEFAULT_WIDTH = 5
DEFAULT_HEIGHT = 5

OBSTACLE_TILE = "#"
START_TILE = "S"
END_TILE = "E"


def resolve_map_path(value: Path | None) -> Path | None:
    if value is not None:
        return value
    env_value = os.getenv(MAP_ENV_VAR)
    if env_value:
        return Path(env_value)
    return None


def default_endpoints(
    width: int, height: int
) -> tuple[tuple[int, int], tuple[int, int]]:
    start = (_round_half_up(width * 0.25), _round_half_up(height * 0.25))
    end = (_round_half_up(width * 0.75) - 1, _round_half_up(height * 0.75) - 1)
    return start, end


def blank_grid_spec(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    *,
    start: tuple[int, int] | None = None,
    end: tuple[int, int] | None = None,
    obstacles: list[tuple[int, int]] | None = None,
) -> GridSpec:
    default_start, default_end = default_endpoints(width, height)
    return GridSpec(
        width=width,
        height=height,
        obstacles=list(obstacles or []),
        start=start or default_start,
        end=end or default_end,
    )


def load_map(path: Path) -> GridSpec:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Missing map file: {path}") from exc
    return parse_map(text.splitlines(), source=str(path))


def parse_map(lines: list[str], *, source: str = "<map>") -> GridSpec:
    rows = [line.rstrip("\n") for line in lines]
    while rows and not rows[0].strip():
        rows.pop(0)
    while rows and not rows[-1].strip():
        rows.pop()
    if not rows:
        raise ValueError(f"Map {source} is empty.")
    width = len(rows[0])
    obstacles: list[tuple[int, int]] = []
    starts: list[tuple[int, int]] = []
    ends: list[tuple[int, int]] = []
    for y, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(
                f"Map {source} row {y} has width {len(row)}, expected {width}."
            )
        for x, tile in enumerate(row):
            if tile == OBSTACLE_TILE:
                obstacles.append((x, y))
            elif tile == START_TILE:
                starts.append((x, y))
            elif tile == END_TILE:
                ends.append((x, y))
    if len(starts) != 1:
        raise ValueError(f"Map {source} needs exactly one {START_TILE!r} tile.")
    if len(ends) != 1:
        raise ValueError(f"Map {source} needs exactly one {END_TILE!r} tile.")
    return GridSpec(
        width=width,
        height=len(rows),
        obstacles=obstacles,
        start=starts[0],
        end=ends[0],
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
