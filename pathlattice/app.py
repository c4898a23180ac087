"""Application entry for running a search to completion."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pathlattice.db.trace_log import (
    append_step_record,
    create_run_folder,
    write_header,
)
from pathlattice.sim.contracts import GridSpec, StepRecord
from pathlattice.sim.grid import Coords
from pathlattice.sim.search import SearchEngine, SearchState
from pathlattice.sim.session import SearchSession


@dataclass(frozen=True)
class SearchOutcome:
    state: SearchState
    last_step: StepRecord | None
    run_dir: Path | None = None


def build_session(spec: GridSpec) -> SearchSession:
    grid = spec.build_grid()
    engine = SearchEngine(
        grid,
        start_point=Coords.from_tuple(spec.start),
        end_point=Coords.from_tuple(spec.end),
    )
    return SearchSession(grid, engine)


def run_search(
    spec: GridSpec,
    *,
    trace_dir: Path | None = None,
    timestamp: str | None = None,
) -> SearchOutcome:
    session = build_session(spec)
    steps: list[StepRecord] = []
    session.on_step(steps.append)

    run_dir = None
    if trace_dir is not None:
        run_dir, log_path = create_run_folder(trace_dir, timestamp=timestamp)
        write_header(log_path, grid=spec, metadata={"run_id": run_dir.name})
        session.on_step(lambda record: append_step_record(log_path, record))

    state = session.run_to_completion()
    return SearchOutcome(
        state=state,
        last_step=steps[-1] if steps else None,
        run_dir=run_dir,
    )
