from pathlattice.sim.grid import Coords, Grid
from pathlattice.sim.signals import Signal


def test_adjacent_order_and_bounds() -> None:
    grid = Grid(5, 5)

    assert grid.get_adjacent(Coords(2, 2)) == [
        Coords(2, 1),
        Coords(3, 2),
        Coords(2, 3),
        Coords(1, 2),
    ]
    assert grid.get_adjacent(Coords(0, 0)) == [Coords(1, 0), Coords(0, 1)]
    assert grid.get_adjacent(Coords(4, 4)) == [Coords(4, 3), Coords(3, 4)]


def test_adjacent_never_returns_obstacles_or_out_of_bounds() -> None:
    grid = Grid(4, 3)
    for point in [(1, 0), (2, 1), (0, 2), (3, 2)]:
        grid.add_obstacle(Coords(*point))

    for x in range(-1, grid.width + 1):
        for y in range(-1, grid.height + 1):
            for neighbor in grid.get_adjacent(Coords(x, y)):
                assert grid.in_bounds(neighbor)
                assert not grid.contains_obstacle(neighbor)


def test_add_remove_round_trip_is_idempotent() -> None:
    grid = Grid(5, 5)
    events: list[frozenset[Coords]] = []
    grid.on_obstacle_change(events.append)
    cell = Coords(1, 1)

    grid.add_obstacle(cell)
    grid.add_obstacle(cell)
    assert grid.contains_obstacle(cell)
    assert len(events) == 1

    grid.remove_obstacle(cell)
    grid.remove_obstacle(cell)
    assert not grid.contains_obstacle(cell)
    assert len(events) == 2
    assert events[-1] == frozenset()


def test_change_events_carry_full_set() -> None:
    grid = Grid(5, 5)
    events: list[frozenset[Coords]] = []
    grid.on_obstacle_change(events.append)

    grid.add_obstacle(Coords(0, 1))
    grid.add_obstacle(Coords(3, 3))
    grid.remove_obstacle(Coords(0, 1))

    assert events == [
        frozenset({Coords(0, 1)}),
        frozenset({Coords(0, 1), Coords(3, 3)}),
        frozenset({Coords(3, 3)}),
    ]


def test_clear_emits_once_with_empty_set() -> None:
    grid = Grid(5, 5)
    grid.add_obstacle(Coords(1, 1))
    grid.add_obstacle(Coords(2, 2))
    events: list[frozenset[Coords]] = []
    grid.on_obstacle_change(events.append)

    grid.clear()

    assert events == [frozenset()]
    assert grid.obstacles == frozenset()


def test_out_of_bounds_obstacle_is_inert() -> None:
    grid = Grid(3, 3)
    grid.add_obstacle(Coords(7, 7))

    assert grid.contains_obstacle(Coords(7, 7))
    assert grid.get_adjacent(Coords(2, 2)) == [Coords(2, 1), Coords(1, 2)]


def test_signal_disconnect_stops_delivery() -> None:
    signal = Signal("changed")
    received: list[int] = []
    signal.connect(received.append)
    signal.emit(1)
    signal.disconnect(received.append)
    signal.emit(2)

    assert received == [1]
