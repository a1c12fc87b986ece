"""
common.py — Lattice Carving Helpers
====================================
Passage-carving generators work on the odd/odd sublattice: those cells
become corridors, and the single cell between two lattice neighbours is
the wall that gets knocked out to join them.

    # . # . #        '.' = lattice cell
    # # # # #        '#' = wall between lattice cells
    # . # . #
"""

from typing import List, Tuple

from maze import CellState, Grid, Point


# Two-cell hops between lattice neighbours: up, right, down, left.
LATTICE_STEPS: Tuple[Tuple[int, int], ...] = ((0, -2), (2, 0), (0, 2), (-2, 0))


def lattice_cells(size: int) -> List[Point]:
    """Odd/odd cells strictly inside the border, in raster order (rows first)."""
    return [
        Point(x, y)
        for y in range(1, size - 1, 2)
        for x in range(1, size - 1, 2)
    ]


def lattice_neighbours(grid: Grid, p: Point) -> List[Point]:
    """Lattice cells two steps away that are still inside the border."""
    result = []
    for dx, dy in LATTICE_STEPS:
        q = Point(p.x + dx, p.y + dy)
        if grid.is_interior(q):
            result.append(q)
    return result


def carve(grid: Grid, p: Point) -> None:
    grid[p] = CellState.PATH


def carve_between(grid: Grid, a: Point, b: Point) -> None:
    """Open a, b and the wall cell between them."""
    grid[a] = CellState.PATH
    grid[b] = CellState.PATH
    grid[a.midpoint(b)] = CellState.PATH
