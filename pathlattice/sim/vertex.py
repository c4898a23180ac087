"""Search vertices and the arena that owns them."""

from __future__ import annotations

from dataclasses import dataclass

from pathlattice.sim.grid import Coords


@dataclass
class Vertex:
    """A node of the explored space.

    `predecessor` is the arena index of the vertex this one was reached
    from (`None` for the start vertex). `heuristic` is fixed at creation.
    """

    index: int
    coords: Coords
    distance: int
    heuristic: int
    predecessor: int | None = None

    @property
    def payload(self) -> int:
        return self.distance + self.heuristic


class VertexArena:
    """Append-only store of every vertex created during one run."""

    def __init__(self) -> None:
        self._vertices: list[Vertex] = []

    def create(
        self,
        coords: Coords,
        *,
        distance: int,
        heuristic: int,
        predecessor: Vertex | None = None,
    ) -> Vertex:
        vertex = Vertex(
            index=len(self._vertices),
            coords=coords,
            distance=distance,
            heuristic=heuristic,
            predecessor=predecessor.index if predecessor is not None else None,
        )
        self._vertices.append(vertex)
        return vertex

    def get(self, index: int) -> Vertex:
        return self._vertices[index]

    def trace_back(self, vertex: Vertex) -> list[Coords]:
        """Return the coordinates from the root vertex to `vertex`, inclusive."""
        path: list[Coords] = []
        current: Vertex | None = vertex
        while current is not None:
            path.append(current.coords)
            if current.predecessor is None:
                current = None
            else:
                current = self._vertices[current.predecessor]
        path.reverse()
        return path

    def clear(self) -> None:
        self._vertices = []

    def __len__(self) -> int:
        return len(self._vertices)
