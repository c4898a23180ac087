"""Serializable snapshots of the grid and of search steps."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pathlattice.sim.grid import Coords, Grid
from pathlattice.sim.search import SearchEngine
from pathlattice.sim.vertex import Vertex

Point = tuple[int, int]


class SearchStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class GridSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    obstacles: list[Point] = Field(default_factory=list)
    start: Point
    end: Point

    @model_validator(mode="after")
    def validate_endpoints(self) -> "GridSpec":
        blocked = set(self.obstacles)
        if self.start in blocked or self.end in blocked:
            raise ValueError("start and end cannot be obstacles")
        return self

    def build_grid(self) -> Grid:
        grid = Grid(self.width, self.height)
        for point in self.obstacles:
            grid.add_obstacle(Coords.from_tuple(point))
        return grid

    @classmethod
    def from_engine(cls, engine: SearchEngine) -> "GridSpec":
        grid = engine.grid
        return cls(
            width=grid.width,
            height=grid.height,
            obstacles=[coords.as_tuple() for coords in sorted(grid.obstacles)],
            start=engine.start_point.as_tuple(),
            end=engine.end_point.as_tuple(),
        )


class VertexView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    coords: Point
    distance: int
    heuristic: int
    payload: int

    @classmethod
    def from_vertex(cls, vertex: Vertex) -> "VertexView":
        return cls(
            coords=vertex.coords.as_tuple(),
            distance=vertex.distance,
            heuristic=vertex.heuristic,
            payload=vertex.payload,
        )


class StepRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    step: int
    status: SearchStatus
    head: VertexView | None = None
    fringe: list[VertexView] = Field(default_factory=list)
    closed: list[Point] = Field(default_factory=list)
    path: list[Point] = Field(default_factory=list)

    @classmethod
    def capture(cls, engine: SearchEngine) -> "StepRecord":
        head = engine.head
        return cls(
            step=engine.step_count,
            status=SearchStatus(engine.state.value),
            head=VertexView.from_vertex(head) if head is not None else None,
            fringe=[VertexView.from_vertex(vertex) for vertex in engine.fringe],
            closed=[vertex.coords.as_tuple() for vertex in engine.closed],
            path=[coords.as_tuple() for coords in engine.path],
        )
