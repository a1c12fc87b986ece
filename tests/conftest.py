import pytest

from maze import CellState, Grid, Point


@pytest.fixture
def corridor_grid() -> Grid:
    """
    5x5 open grid with a wall column at x=2 broken only at y=2.
    START (0, 2) and END (4, 2): the single shortest route is the row y=2.
    """
    grid = Grid(5, fill=CellState.PATH, start=Point(0, 2), end=Point(4, 2))
    for y in range(5):
        if y != 2:
            grid[Point(2, y)] = CellState.WALL
    grid.stamp_endpoints()
    return grid


@pytest.fixture
def open_grid() -> Grid:
    """9x9 room: solid border, open interior, START (1,1), END (7,7)."""
    grid = Grid(9)
    for p in grid.points():
        if grid.is_interior(p):
            grid[p] = CellState.PATH
    grid.stamp_endpoints()
    return grid


@pytest.fixture
def enclosed_start_grid() -> Grid:
    """START sealed in by walls; END sits in an open region elsewhere."""
    grid = Grid(7)
    for y in range(3, 6):
        for x in range(1, 6):
            grid[Point(x, y)] = CellState.PATH
    grid.stamp_endpoints()
    return grid
