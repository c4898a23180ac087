"""Grid model, stepwise A* engine and search session."""

from pathlattice.sim.contracts import GridSpec, SearchStatus, StepRecord, VertexView
from pathlattice.sim.errors import InvalidSearchState
from pathlattice.sim.grid import Coords, Grid
from pathlattice.sim.search import SearchEngine, SearchState
from pathlattice.sim.session import SearchMode, SearchSession
from pathlattice.sim.vertex import Vertex, VertexArena

__all__ = [
    "Coords",
    "Grid",
    "GridSpec",
    "InvalidSearchState",
    "SearchEngine",
    "SearchMode",
    "SearchSession",
    "SearchState",
    "SearchStatus",
    "StepRecord",
    "Vertex",
    "VertexArena",
    "VertexView",
]
