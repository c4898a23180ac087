"""Driver that routes edit and search commands to the grid and the engine."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable

from pathlattice.sim.contracts import StepRecord
from pathlattice.sim.errors import InvalidSearchState
from pathlattice.sim.grid import Coords, Grid
from pathlattice.sim.search import SearchEngine, SearchState
from pathlattice.sim.signals import Signal

logger = logging.getLogger(__name__)


class SearchMode(str, Enum):
    PREPARING = "preparing"
    IN_PROGRESS = "in_progress"
    WAITING_FOR_NEW = "waiting_for_new"


class SearchSession:
    """Owns the search mode and blocks edits while a search is on display."""

    def __init__(self, grid: Grid, engine: SearchEngine) -> None:
        self.grid = grid
        self.engine = engine
        self._mode = SearchMode.PREPARING
        self._mode_changed = Signal("mode_changed")
        self._stepped = Signal("stepped")

        self.engine.on_path_change(self._handle_path_change)
        self.engine.on_fail(self._handle_fail)

    @property
    def mode(self) -> SearchMode:
        return self._mode

    # -------------------- edits --------------------

    def add_obstacle(self, coords: Coords) -> bool:
        self._require_preparing("add an obstacle")
        if coords in (self.engine.start_point, self.engine.end_point):
            logger.debug("Obstacle on endpoint %s declined", coords)
            return False
        self.grid.add_obstacle(coords)
        return True

    def remove_obstacle(self, coords: Coords) -> None:
        self._require_preparing("remove an obstacle")
        self.grid.remove_obstacle(coords)

    def clear_grid(self) -> None:
        self._require_preparing("clear the grid")
        self.grid.clear()

    def set_start_point(self, coords: Coords) -> bool:
        self._require_preparing("move the start point")
        return self.engine.set_start_point(coords)

    def set_end_point(self, coords: Coords) -> bool:
        self._require_preparing("move the end point")
        return self.engine.set_end_point(coords)

    # -------------------- search --------------------

    def start_search(self) -> None:
        self._require_preparing("start a search")
        self.engine.start()
        self._set_mode(SearchMode.IN_PROGRESS)

    def advance_search_step(self) -> SearchState:
        state = self.engine.advance()
        self._stepped.emit(StepRecord.capture(self.engine))
        return state

    def run_to_completion(self) -> SearchState:
        if self._mode == SearchMode.PREPARING:
            self.start_search()
        state = self.engine.state
        while not state.is_terminal:
            state = self.advance_search_step()
        return state

    def clear_search(self) -> None:
        """Drop the current run but keep the obstacles."""
        self.engine.clear()
        self._set_mode(SearchMode.PREPARING)

    def new_search(self) -> None:
        self.grid.clear()
        self.engine.clear()
        self._set_mode(SearchMode.PREPARING)

    # -------------------- listeners --------------------

    def on_mode_change(self, fn: Callable[[SearchMode], Any]) -> None:
        self._mode_changed.connect(fn)

    def on_step(self, fn: Callable[[StepRecord], Any]) -> None:
        self._stepped.connect(fn)

    def _handle_path_change(self, path: list[Coords]) -> None:
        if path:
            self._set_mode(SearchMode.WAITING_FOR_NEW)

    def _handle_fail(self) -> None:
        self._set_mode(SearchMode.WAITING_FOR_NEW)

    def _set_mode(self, mode: SearchMode) -> None:
        if mode == self._mode:
            return
        self._mode = mode
        self._mode_changed.emit(mode)

    def _require_preparing(self, action: str) -> None:
        if self._mode != SearchMode.PREPARING:
            raise InvalidSearchState(
                f"Cannot {action} while the session is {self._mode.value}."
            )
