from collections import deque

import pytest

from config import ConfigurationError
from maze import Grid, Point
from generators import MazeAlgorithm, generate
from algorithms import (
    REGISTRY,
    SearchAlgorithm,
    algorithms_by_tag,
    get_algorithm,
    list_algorithms,
    resolve_algorithm,
)
from algorithms.theta_star import line_cells, line_of_sight

SHORTEST = [
    SearchAlgorithm.BFS,
    SearchAlgorithm.DIJKSTRA,
    SearchAlgorithm.ASTAR,
    SearchAlgorithm.BIDIRECTIONAL,
    SearchAlgorithm.IDA_STAR,
    SearchAlgorithm.FRINGE,
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _final(algorithm, grid: Grid):
    steps = list(REGISTRY[algorithm].fn(grid, grid.start, grid.end))
    assert steps[-1].is_final
    assert not any(s.is_final for s in steps[:-1])
    return steps[-1]


def _bfs_length(grid: Grid) -> int:
    """Independent hop-count BFS; -1 when END is unreachable."""
    dist = {grid.start: 0}
    queue = deque([grid.start])
    while queue:
        cur = queue.popleft()
        if cur == grid.end:
            return dist[cur]
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nxt = Point(cur.x + dx, cur.y + dy)
            if grid.in_bounds(nxt) and not grid.is_wall(nxt) and nxt not in dist:
                dist[nxt] = dist[cur] + 1
                queue.append(nxt)
    return -1


def _assert_valid_path(grid: Grid, path):
    assert path[0] == grid.start
    assert path[-1] == grid.end
    for a, b in zip(path, path[1:]):
        assert a.manhattan(b) == 1, (a, b)
    assert all(not grid.is_wall(p) for p in path)


# ---------------------------------------------------------------------------
# Fixed scenario
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("algorithm", SHORTEST + [SearchAlgorithm.THETA_STAR], ids=lambda a: a.value)
def test_corridor_gap_gives_straight_path(algorithm, corridor_grid):
    final = _final(algorithm, corridor_grid)
    assert final.path == tuple(Point(x, 2) for x in range(5))


@pytest.mark.parametrize("algorithm", list(SearchAlgorithm), ids=lambda a: a.value)
def test_search_never_writes_to_grid(algorithm, corridor_grid):
    before = corridor_grid.copy()
    _final(algorithm, corridor_grid)
    assert corridor_grid == before


# ---------------------------------------------------------------------------
# Generated mazes
# ---------------------------------------------------------------------------
MAZES = [
    (15, MazeAlgorithm.KRUSKAL, 1),
    (15, MazeAlgorithm.PRIM, 7),
    (12, MazeAlgorithm.WILSON, 8),
    (15, MazeAlgorithm.RECURSIVE_DIVISION, 2),
    (15, MazeAlgorithm.BRAIDED, 3),
    (16, MazeAlgorithm.CELLULAR, 4),
    (12, MazeAlgorithm.HUNT_AND_KILL, 5),
    (13, MazeAlgorithm.SPIRAL_BACKTRACKER, 6),
]


@pytest.mark.parametrize("maze", MAZES, ids=lambda m: f"{m[1].value}-{m[0]}")
@pytest.mark.parametrize("algorithm", SHORTEST, ids=lambda a: a.value)
def test_shortest_algorithms_match_bfs_length(algorithm, maze):
    grid = generate(*maze)
    final = _final(algorithm, grid)
    _assert_valid_path(grid, final.path)
    assert len(final.path) - 1 == _bfs_length(grid)


@pytest.mark.parametrize("maze", MAZES, ids=lambda m: f"{m[1].value}-{m[0]}")
@pytest.mark.parametrize("algorithm", [SearchAlgorithm.DFS, SearchAlgorithm.GREEDY_BFS],
                         ids=lambda a: a.value)
def test_uninformed_and_greedy_paths_are_valid(algorithm, maze):
    grid = generate(*maze)
    final = _final(algorithm, grid)
    _assert_valid_path(grid, final.path)
    assert len(final.path) - 1 >= _bfs_length(grid)


@pytest.mark.parametrize("maze", MAZES, ids=lambda m: f"{m[1].value}-{m[0]}")
def test_theta_star_path_is_contiguous_and_no_longer_than_bfs(maze):
    grid = generate(*maze)
    final = _final(SearchAlgorithm.THETA_STAR, grid)
    _assert_valid_path(grid, final.path)
    assert final.waypoints[0] == grid.start and final.waypoints[-1] == grid.end
    assert set(final.waypoints) <= set(final.path)
    waypoint_length = sum(a.euclidean(b) for a, b in zip(final.waypoints, final.waypoints[1:]))
    assert waypoint_length <= _bfs_length(grid) + 1e-9


def test_theta_star_cuts_corners_in_open_room(open_grid):
    final = _final(SearchAlgorithm.THETA_STAR, open_grid)
    waypoint_length = sum(a.euclidean(b) for a, b in zip(final.waypoints, final.waypoints[1:]))
    assert waypoint_length <= _bfs_length(open_grid)
    assert waypoint_length < 12
    _assert_valid_path(open_grid, final.path)


# ---------------------------------------------------------------------------
# Unreachable goal
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("algorithm", list(SearchAlgorithm), ids=lambda a: a.value)
def test_enclosed_start_gives_empty_path(algorithm, enclosed_start_grid):
    final = _final(algorithm, enclosed_start_grid)
    assert final.path == ()
    assert final.current is None


def test_ida_star_enclosed_start_terminates(enclosed_start_grid):
    steps = list(REGISTRY[SearchAlgorithm.IDA_STAR].fn(
        enclosed_start_grid, enclosed_start_grid.start, enclosed_start_grid.end))
    assert steps[-1].path == ()
    assert len(steps) == 2


# ---------------------------------------------------------------------------
# Line stepping
# ---------------------------------------------------------------------------
def test_line_cells_is_four_connected_and_ends_on_target():
    for a, b in [(Point(0, 0), Point(5, 2)), (Point(4, 4), Point(1, 0)), (Point(2, 2), Point(2, 6))]:
        cells = line_cells(a, b)
        assert cells[0] == a and cells[-1] == b
        assert len(cells) == 1 + a.manhattan(b)
        for p, q in zip(cells, cells[1:]):
            assert p.manhattan(q) == 1


def test_line_of_sight_blocked_by_wall(corridor_grid):
    assert line_of_sight(corridor_grid, Point(0, 2), Point(4, 2))
    assert not line_of_sight(corridor_grid, Point(0, 0), Point(4, 0))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_has_nine_algorithms():
    infos = list_algorithms()
    assert [a.key for a in infos] == [a.value for a in SearchAlgorithm]
    assert len(infos) == 9
    assert {a.key for a in infos if a.guarantees_shortest} == {a.value for a in SHORTEST}


def test_lookup_helpers():
    assert get_algorithm("astar").has_heuristic
    assert get_algorithm("unknown") is None
    assert resolve_algorithm("IDA_STAR") is SearchAlgorithm.IDA_STAR
    assert get_algorithm(SearchAlgorithm.THETA_STAR) in algorithms_by_tag("any-angle")
    with pytest.raises(ConfigurationError):
        resolve_algorithm("bogo")
