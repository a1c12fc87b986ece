"""
braided.py — Randomised Braided Maze
=====================================
Prim's maze with dead ends knocked out.  Each dead end (an open cell
with one open neighbour) loses one adjacent interior wall with fixed
probability, preferring a wall that opens onto another corridor so the
knock-out closes a loop.  The result has multiple solutions.
"""

import random

from config import BRAID_CHANCE
from maze import CellState, Grid, Point
from generators.prim import prim


def braided(grid: Grid, rng: random.Random) -> None:
    prim(grid, rng)

    dead_ends = [
        p for p in grid.points()
        if grid.is_interior(p) and not grid.is_wall(p) and len(grid.neighbours(p)) == 1
    ]
    for cell in dead_ends:
        if rng.random() >= BRAID_CHANCE:
            continue
        # an earlier knock-out may already have opened this one up
        if len(grid.neighbours(cell)) != 1:
            continue
        walls = [w for w in grid.wall_neighbours(cell) if grid.is_interior(w)]
        loops = [
            w for w in walls
            if grid.is_open(Point(2 * w.x - cell.x, 2 * w.y - cell.y))
        ]
        choices = loops or walls
        if choices:
            grid[rng.choice(choices)] = CellState.PATH
