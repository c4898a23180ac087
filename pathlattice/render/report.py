"""Rich summary of a finished (or partial) search."""

from __future__ import annotations

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pathlattice.sim.contracts import GridSpec, SearchStatus, StepRecord

TILE_STYLES = {
    "#": "bright_magenta",
    ".": "grey50",
    "o": "yellow",
    "x": "blue",
    "*": "bold bright_green",
    "@": "bold bright_cyan",
    "S": "bold bright_cyan",
    "E": "bold red",
}

STATUS_STYLES = {
    SearchStatus.IDLE: "grey70",
    SearchStatus.RUNNING: "yellow",
    SearchStatus.SUCCEEDED: "bold green",
    SearchStatus.FAILED: "bold red",
}


def render_outcome(grid: GridSpec, record: StepRecord | None) -> RenderableType:
    summary = _render_summary(record)
    lines = render_grid_lines(grid, record)
    layout = Columns(
        [
            Panel(summary, title="Search"),
            Panel(Group(*lines), title=f"Grid {grid.width}x{grid.height}"),
        ]
    )
    return layout


def render_grid_lines(grid: GridSpec, record: StepRecord | None) -> list[Text]:
    tiles = [["."] * grid.width for _ in range(grid.height)]
    layers: list[tuple[list[tuple[int, int]], str]] = [(grid.obstacles, "#")]
    if record is not None:
        layers.append((record.closed, "x"))
        layers.append(([vertex.coords for vertex in record.fringe], "o"))
        layers.append((record.path, "*"))
        if record.head is not None:
            layers.append(([record.head.coords], "@"))
    layers.append(([grid.start], "S"))
    layers.append(([grid.end], "E"))

    for points, symbol in layers:
        for x, y in points:
            if 0 <= y < grid.height and 0 <= x < grid.width:
                tiles[y][x] = symbol

    lines: list[Text] = []
    for row in tiles:
        line = Text()
        for tile in row:
            line.append(tile, style=TILE_STYLES.get(tile, "grey70"))
        lines.append(line)
    return lines


def _render_summary(record: StepRecord | None) -> RenderableType:
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    if record is None:
        table.add_row("Status", Text("no steps", style="grey70"))
        return table

    table.add_row(
        "Status", Text(record.status.value, style=STATUS_STYLES[record.status])
    )
    table.add_row("Steps", str(record.step))
    if record.path:
        table.add_row("Path cost", str(len(record.path) - 1))
        table.add_row("Path", _format_points(record.path))
    else:
        table.add_row("Path cost", "-")
        table.add_row("Path", "None")
    table.add_row("Closed", str(len(record.closed)))
    table.add_row("Fringe", str(len(record.fringe)))
    return table


def _format_points(points: list[tuple[int, int]]) -> str:
    return " ".join(f"({x},{y})" for x, y in points)
