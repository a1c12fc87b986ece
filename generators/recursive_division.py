"""
recursive_division.py — Recursive Division
===========================================
The only "wall adder" in the catalogue: start from an open room with a
solid border, then split the room with one straight wall that has a
single gap, and keep splitting the two halves.

  • Walls sit on even rows / columns, gaps on odd ones, so a later wall
    can never seal an earlier gap.
  • Orientation follows the chamber's shape: tall chambers get a
    horizontal wall, wide ones a vertical wall, squares a coin flip.
  • A chamber too thin to hold another wall is finished.
  • Each wall cell has a small chance of being left out, which opens
    loops and gives the maze more than one solution.

Chambers are processed from an explicit stack rather than recursion.
"""

import random
from typing import List, Tuple

from config import DIVISION_SKIP_CHANCE
from maze import CellState, Grid, Point

Chamber = Tuple[int, int, int, int]   # x0, y0, x1, y1, inclusive


def recursive_division(grid: Grid, rng: random.Random) -> None:
    n = grid.size
    for p in grid.points():
        grid[p] = CellState.PATH if grid.is_interior(p) else CellState.WALL

    chambers: List[Chamber] = [(1, 1, n - 2, n - 2)]
    while chambers:
        x0, y0, x1, y1 = chambers.pop()
        wall_rows = [y for y in range(y0 + 1, y1) if y % 2 == 0]
        wall_cols = [x for x in range(x0 + 1, x1) if x % 2 == 0]
        if not wall_rows and not wall_cols:
            continue

        horizontal = _horizontal(x1 - x0 + 1, y1 - y0 + 1, rng)
        if horizontal and not wall_rows:
            horizontal = False
        elif not horizontal and not wall_cols:
            horizontal = True

        if horizontal:
            wy = rng.choice(wall_rows)
            gap = rng.choice([x for x in range(x0, x1 + 1) if x % 2 == 1])
            for x in range(x0, x1 + 1):
                if x != gap and rng.random() >= DIVISION_SKIP_CHANCE:
                    grid[Point(x, wy)] = CellState.WALL
            chambers.append((x0, y0, x1, wy - 1))
            chambers.append((x0, wy + 1, x1, y1))
        else:
            wx = rng.choice(wall_cols)
            gap = rng.choice([y for y in range(y0, y1 + 1) if y % 2 == 1])
            for y in range(y0, y1 + 1):
                if y != gap and rng.random() >= DIVISION_SKIP_CHANCE:
                    grid[Point(wx, y)] = CellState.WALL
            chambers.append((x0, y0, wx - 1, y1))
            chambers.append((wx + 1, y0, x1, y1))


def _horizontal(width: int, height: int, rng: random.Random) -> bool:
    if width < height:
        return True
    if height < width:
        return False
    return rng.random() < 0.5
