"""Stepwise A* search over a Grid.

The run is an explicit state machine: each `advance()` call performs the
work up to the next suspension point and returns the engine state, so a
driver can interleave steps with whatever it needs to do in between.

Step units of one run:
    initialize   create the start vertex and make it the head
    expand       discover or relax the head's open neighbors
    select       close the head and pick the cheapest fringe vertex
    arrive       the head is on the end point; nothing changes
    reconstruct  walk predecessors back to the start and publish the path
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Iterator

from pathlattice.sim.errors import InvalidSearchState
from pathlattice.sim.grid import Coords, Grid
from pathlattice.sim.signals import Signal
from pathlattice.sim.vertex import Vertex, VertexArena

logger = logging.getLogger(__name__)


class SearchState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SearchState.SUCCEEDED, SearchState.FAILED)


class _Phase(str, Enum):
    INITIALIZE = "initialize"
    EXPAND = "expand"
    SELECT = "select"
    ARRIVE = "arrive"
    RECONSTRUCT = "reconstruct"


class SearchEngine:
    def __init__(self, grid: Grid, start_point: Coords, end_point: Coords) -> None:
        self._grid = grid
        self._start_point = start_point
        self._end_point = end_point
        self._arena = VertexArena()
        self._fringe: list[Vertex] = []
        self._closed: dict[Coords, Vertex] = {}
        self._head: Vertex | None = None
        self._path: list[Coords] = []
        self._state = SearchState.IDLE
        self._phase: _Phase | None = None
        self._step_count = 0

        self._head_changed = Signal("head_changed")
        self._fringe_changed = Signal("fringe_changed")
        self._closed_changed = Signal("closed_changed")
        self._start_point_changed = Signal("start_point_changed")
        self._end_point_changed = Signal("end_point_changed")
        self._path_changed = Signal("path_changed")
        self._failed = Signal("failed")

    # -------------------- read access --------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def head(self) -> Vertex | None:
        return self._head

    @property
    def fringe(self) -> tuple[Vertex, ...]:
        return tuple(self._fringe)

    @property
    def closed(self) -> tuple[Vertex, ...]:
        return tuple(self._closed.values())

    @property
    def path(self) -> list[Coords]:
        return list(self._path)

    @property
    def start_point(self) -> Coords:
        return self._start_point

    @property
    def end_point(self) -> Coords:
        return self._end_point

    @property
    def step_count(self) -> int:
        return self._step_count

    def heuristic(self, coords: Coords) -> int:
        return abs(self._end_point.x - coords.x) + abs(self._end_point.y - coords.y)

    # -------------------- endpoints --------------------

    def set_start_point(self, coords: Coords) -> bool:
        self._require_idle("move the start point")
        if self._grid.contains_obstacle(coords) or coords == self._end_point:
            logger.debug("Start point move to %s rejected", coords)
            return False
        self._start_point = coords
        self._start_point_changed.emit(self._start_point)
        return True

    def set_end_point(self, coords: Coords) -> bool:
        self._require_idle("move the end point")
        if self._grid.contains_obstacle(coords) or coords == self._start_point:
            logger.debug("End point move to %s rejected", coords)
            return False
        self._end_point = coords
        self._end_point_changed.emit(self._end_point)
        return True

    # -------------------- run control --------------------

    def start(self) -> None:
        if self._state != SearchState.IDLE:
            raise InvalidSearchState(
                f"Cannot start a run while the search is {self._state.value}."
            )
        self._state = SearchState.RUNNING
        self._phase = _Phase.INITIALIZE
        self._step_count = 0
        logger.info(
            "Search started from %s to %s", self._start_point, self._end_point
        )

    def advance(self) -> SearchState:
        if self._state != SearchState.RUNNING or self._phase is None:
            raise InvalidSearchState(
                f"Cannot advance while the search is {self._state.value}."
            )
        phase = self._phase
        if phase == _Phase.INITIALIZE:
            self._initialize()
        elif phase == _Phase.EXPAND:
            self._expand()
        elif phase == _Phase.SELECT:
            self._select()
        elif phase == _Phase.ARRIVE:
            self._phase = _Phase.RECONSTRUCT
        else:
            self._reconstruct()
        self._step_count += 1
        logger.debug(
            "Step %d (%s) -> %s", self._step_count, phase.value, self._state.value
        )
        return self._state

    def steps(self) -> Iterator[SearchState]:
        """Start a run and yield the state after every step until it ends."""
        self.start()
        while True:
            state = self.advance()
            yield state
            if state.is_terminal:
                return

    def clear(self) -> None:
        self._set_fringe([])
        self._set_closed({})
        self._set_path([])
        self._set_head(None)
        self._arena.clear()
        self._state = SearchState.IDLE
        self._phase = None
        self._step_count = 0

    # -------------------- step units --------------------

    def _initialize(self) -> None:
        start = self._arena.create(
            self._start_point,
            distance=0,
            heuristic=self.heuristic(self._start_point),
        )
        self._set_head(start)
        self._phase = self._phase_after_head()

    def _expand(self) -> None:
        head = self._require_head()
        neighbors = [
            coords
            for coords in self._grid.get_adjacent(head.coords)
            if coords not in self._closed
        ]
        for coords in neighbors:
            existing = self._find_in_fringe(coords)
            candidate = head.distance + 1
            if existing is not None:
                if candidate < existing.distance:
                    existing.distance = candidate
                    existing.predecessor = head.index
                continue
            vertex = self._arena.create(
                coords,
                distance=candidate,
                heuristic=self.heuristic(coords),
                predecessor=head,
            )
            self._fringe.append(vertex)
        self._fringe_changed.emit(self.fringe)
        self._phase = _Phase.SELECT

    def _select(self) -> None:
        head = self._require_head()
        selected = self._cheapest_open()
        if selected is None:
            self._state = SearchState.FAILED
            self._phase = None
            logger.info(
                "No path from %s to %s after closing %d cells",
                self._start_point,
                self._end_point,
                len(self._closed) + 1,
            )
            self._failed.emit()
            return

        closed = dict(self._closed)
        closed[head.coords] = head
        self._set_closed(closed)
        self._set_fringe([vertex for vertex in self._fringe if vertex is not selected])
        self._set_head(selected)
        self._phase = self._phase_after_head()

    def _reconstruct(self) -> None:
        head = self._require_head()
        path = self._arena.trace_back(head)
        self._state = SearchState.SUCCEEDED
        self._phase = None
        logger.info("Path found with cost %d", len(path) - 1)
        self._set_path(path)

    # -------------------- helpers --------------------

    def _phase_after_head(self) -> _Phase:
        head = self._require_head()
        if head.coords == self._end_point:
            return _Phase.ARRIVE
        return _Phase.EXPAND

    def _cheapest_open(self) -> Vertex | None:
        best: Vertex | None = None
        for vertex in self._fringe:
            if vertex.coords in self._closed:
                continue
            if best is None or vertex.payload < best.payload:
                best = vertex
        return best

    def _find_in_fringe(self, coords: Coords) -> Vertex | None:
        for vertex in self._fringe:
            if vertex.coords == coords:
                return vertex
        return None

    def _require_head(self) -> Vertex:
        if self._head is None:
            raise InvalidSearchState("The search has no head vertex.")
        return self._head

    def _require_idle(self, action: str) -> None:
        if self._state != SearchState.IDLE:
            raise InvalidSearchState(
                f"Cannot {action} while the search is {self._state.value}."
            )

    def _set_head(self, vertex: Vertex | None) -> None:
        self._head = vertex
        self._head_changed.emit(self._head)

    def _set_fringe(self, vertices: list[Vertex]) -> None:
        self._fringe = vertices
        self._fringe_changed.emit(self.fringe)

    def _set_closed(self, closed: dict[Coords, Vertex]) -> None:
        self._closed = closed
        self._closed_changed.emit(self.closed)

    def _set_path(self, path: list[Coords]) -> None:
        self._path = path
        self._path_changed.emit(self.path)

    # -------------------- listeners --------------------

    def on_head_change(self, fn: Callable[[Vertex | None], Any]) -> None:
        self._head_changed.connect(fn)

    def on_fringe_change(self, fn: Callable[[tuple[Vertex, ...]], Any]) -> None:
        self._fringe_changed.connect(fn)

    def on_closed_change(self, fn: Callable[[tuple[Vertex, ...]], Any]) -> None:
        self._closed_changed.connect(fn)

    def on_start_point_change(self, fn: Callable[[Coords], Any]) -> None:
        self._start_point_changed.connect(fn)

    def on_end_point_change(self, fn: Callable[[Coords], Any]) -> None:
        self._end_point_changed.connect(fn)

    def on_path_change(self, fn: Callable[[list[Coords]], Any]) -> None:
        self._path_changed.connect(fn)

    def on_fail(self, fn: Callable[[], Any]) -> None:
        self._failed.connect(fn)
