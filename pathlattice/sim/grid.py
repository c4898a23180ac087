"""Grid dimensions and the obstacle set."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pathlattice.sim.signals import Signal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class Coords:
    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, value: tuple[int, int] | list[int]) -> "Coords":
        x, y = value
        return cls(int(x), int(y))


class Grid:
    """Fixed-size grid whose obstacle set is edited by the driver.

    `add_obstacle` does not check bounds. An obstacle outside the grid is
    inert: adjacency is bounds-filtered from the queried cell, so it never
    surfaces.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Grid width and height must be positive.")
        self.width = width
        self.height = height
        self._obstacles: set[Coords] = set()
        self._obstacle_changed = Signal("obstacle_changed")

    @property
    def obstacles(self) -> frozenset[Coords]:
        return frozenset(self._obstacles)

    def in_bounds(self, coords: Coords) -> bool:
        return 0 <= coords.x < self.width and 0 <= coords.y < self.height

    def contains_obstacle(self, coords: Coords) -> bool:
        return coords in self._obstacles

    def get_adjacent(self, coords: Coords) -> list[Coords]:
        x, y = coords.x, coords.y
        candidates = [
            Coords(x, y - 1),
            Coords(x + 1, y),
            Coords(x, y + 1),
            Coords(x - 1, y),
        ]
        return [
            pos
            for pos in candidates
            if self.in_bounds(pos) and pos not in self._obstacles
        ]

    def add_obstacle(self, coords: Coords) -> None:
        if coords in self._obstacles:
            return
        self._obstacles.add(coords)
        logger.debug("Obstacle added at %s", coords)
        self._obstacle_changed.emit(self.obstacles)

    def remove_obstacle(self, coords: Coords) -> None:
        if coords not in self._obstacles:
            return
        self._obstacles.discard(coords)
        logger.debug("Obstacle removed at %s", coords)
        self._obstacle_changed.emit(self.obstacles)

    def clear(self) -> None:
        self._obstacles = set()
        self._obstacle_changed.emit(self.obstacles)

    def on_obstacle_change(
        self, fn: Callable[[frozenset[Coords]], None]
    ) -> Callable[[frozenset[Coords]], None]:
        self._obstacle_changed.connect(fn)
        return fn
