import pytest

from config import ConfigurationError
from maze import CellState, DisjointSet, Grid, Point, describe_stats


# ---------------------------------------------------------------------------
# Point / CellState
# ---------------------------------------------------------------------------
def test_point_helpers():
    a, b = Point(1, 1), Point(4, 5)
    assert a.offset(2, 0) == Point(3, 1)
    assert a.manhattan(b) == 7
    assert a.euclidean(b) == pytest.approx(5.0)
    assert Point(1, 1).midpoint(Point(3, 1)) == Point(2, 1)
    assert Point.from_list([2, 3]) == Point(2, 3)
    assert Point.from_list({"x": 2, "y": 3}) == Point(2, 3)
    assert sorted([Point(2, 0), Point(1, 5)])[0] == Point(1, 5)


def test_cell_state_codes_round_trip():
    for state in CellState:
        assert CellState.from_code(state.code) is state
    assert CellState.START.is_endpoint and CellState.END.is_endpoint
    assert CellState.VISITED.is_annotation and CellState.CURRENT.is_annotation
    assert not CellState.WALL.is_open


# ---------------------------------------------------------------------------
# Grid basics
# ---------------------------------------------------------------------------
def test_default_endpoints_and_size_floor():
    grid = Grid(11)
    assert grid.start == Point(1, 1)
    assert grid.end == Point(9, 9)
    with pytest.raises(ConfigurationError):
        Grid(2)


def test_neighbours_are_open_in_bounds_and_ordered(corridor_grid):
    # down, right, up, left
    assert corridor_grid.neighbours(Point(1, 2)) == [Point(1, 3), Point(2, 2), Point(1, 1), Point(0, 2)]
    assert corridor_grid.neighbours(Point(0, 0)) == [Point(0, 1), Point(1, 0)]
    assert Point(2, 1) not in corridor_grid.neighbours(Point(1, 1))


def test_flood_fill_and_connectivity(open_grid):
    assert open_grid.is_connected()
    open_grid[Point(7, 6)] = CellState.WALL
    open_grid[Point(6, 7)] = CellState.WALL
    assert open_grid.end not in open_grid.flood_fill()
    assert not open_grid.is_connected()


def test_validate_rejects_walled_and_coincident_endpoints(open_grid):
    open_grid.validate()

    walled = open_grid.copy()
    walled[walled.end] = CellState.WALL
    with pytest.raises(ConfigurationError):
        walled.validate()

    same = Grid(5, fill=CellState.PATH, start=Point(1, 1), end=Point(1, 1))
    with pytest.raises(ConfigurationError):
        same.validate()


# ---------------------------------------------------------------------------
# Annotations
# ---------------------------------------------------------------------------
def test_markers_never_overwrite_endpoints(open_grid):
    open_grid.mark_visited(open_grid.start)
    open_grid.mark_path([open_grid.start, Point(2, 1), open_grid.end])
    assert open_grid[open_grid.start] is CellState.START
    assert open_grid[open_grid.end] is CellState.END
    assert open_grid[Point(2, 1)] is CellState.CURRENT


def test_reset_path_clears_annotations_and_is_idempotent(open_grid):
    clean = open_grid.copy()
    open_grid.mark_visited(Point(3, 3))
    open_grid.mark_path([Point(4, 4), Point(4, 5)])
    open_grid[open_grid.start] = CellState.VISITED

    open_grid.reset_path()
    assert open_grid == clean
    open_grid.reset_path()
    assert open_grid == clean
    assert not any(s.is_annotation for row in open_grid.cells for s in row)


def test_annotate_rebuilds_visited_and_path(open_grid):
    open_grid.annotate(visited=[Point(2, 2), Point(1, 1)], path=[Point(1, 1), Point(1, 2), Point(1, 3)])
    assert open_grid[Point(2, 2)] is CellState.VISITED
    assert open_grid[Point(1, 2)] is CellState.CURRENT
    assert open_grid[Point(1, 1)] is CellState.START


def test_rows_round_trip_keeps_states_and_endpoints(corridor_grid):
    corridor_grid.mark_visited(Point(1, 1))
    rebuilt = Grid.from_rows(corridor_grid.to_rows())
    assert rebuilt == corridor_grid
    assert rebuilt.start == Point(0, 2) and rebuilt.end == Point(4, 2)
    assert rebuilt.to_bytes() == corridor_grid.to_bytes()


def test_from_rows_rejects_bad_input():
    with pytest.raises(ConfigurationError):
        Grid.from_rows([["wall", "wall"], ["wall"]])
    with pytest.raises(ConfigurationError):
        Grid.from_rows([["wall"] * 3, ["wall", "lava", "wall"], ["wall"] * 3])


def test_render_text(corridor_grid):
    lines = corridor_grid.render_text().splitlines()
    assert len(lines) == 5
    assert lines[2] == "S...E"


# ---------------------------------------------------------------------------
# DisjointSet
# ---------------------------------------------------------------------------
def test_disjoint_set_union_find():
    cells = [Point(1, 1), Point(3, 1), Point(5, 1), Point(1, 3)]
    ds = DisjointSet(cells)
    assert ds.count() == 4
    assert ds.union(cells[0], cells[1])
    assert ds.union(cells[1], cells[2])
    assert not ds.union(cells[0], cells[2])
    assert ds.connected(cells[0], cells[2])
    assert not ds.connected(cells[0], cells[3])
    assert ds.count() == 2


def test_disjoint_set_for_lattice_covers_odd_cells():
    ds = DisjointSet.for_lattice(7)
    assert len(ds) == 9
    assert Point(5, 5) in ds
    assert Point(2, 1) not in ds


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------
def test_describe_stats_on_corridor(corridor_grid):
    stats = describe_stats(corridor_grid, 0.5)
    assert stats.time_to_generate == 0.5
    assert stats.open_cells == 21
    assert 0.0 <= stats.symmetry_score <= 1.0
    assert stats.symmetry_score == 1.0
    assert stats.to_dict()["open_cells"] == 21
