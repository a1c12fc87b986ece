"""
cellular.py — Cellular Automata Caves
======================================
Not a maze in the strict sense: random noise smoothed into caves.

  1. Seed every cell wall/open at random; START and END neighbourhoods
     get a much lower wall chance so they begin in open space.
  2. Run CELLULAR_PASSES smoothing passes over the interior, counting
     walls in each cell's 8-neighbourhood:
       • first two passes: wall if count >= 5       (carve wide corridors)
       • later passes:     walls survive at >= 4,
                           open cells close at >= 5  (smooth the edges)
     The 3x3 blocks around START and END are never touched.
  3. Connectivity repair (run by generate()) stitches the caves together.
"""

import random

from config import (
    CELLULAR_NEAR_CHANCE,
    CELLULAR_NEAR_RADIUS,
    CELLULAR_PASSES,
    CELLULAR_WALL_CHANCE,
)
from maze import CellState, Grid, Point


def cellular(grid: Grid, rng: random.Random) -> None:
    n = grid.size
    for p in grid.points():
        if not grid.is_interior(p):
            grid[p] = CellState.WALL
            continue
        near = min(p.manhattan(grid.start), p.manhattan(grid.end)) <= CELLULAR_NEAR_RADIUS
        chance = CELLULAR_NEAR_CHANCE if near else CELLULAR_WALL_CHANCE
        grid[p] = CellState.WALL if rng.random() < chance else CellState.PATH

    grid[grid.start] = CellState.PATH
    grid[grid.end] = CellState.PATH

    for iteration in range(CELLULAR_PASSES):
        nxt = [list(row) for row in grid.cells]
        for y in range(1, n - 1):
            for x in range(1, n - 1):
                p = Point(x, y)
                if _protected(grid, p):
                    continue
                walls = grid.wall_count_around(p)
                if iteration < 2:
                    wall = walls >= 5
                elif grid.is_wall(p):
                    wall = walls >= 4
                else:
                    wall = walls >= 5
                nxt[y][x] = CellState.WALL if wall else CellState.PATH
        grid.cells = nxt


def _protected(grid: Grid, p: Point) -> bool:
    return any(
        abs(p.x - anchor.x) <= 1 and abs(p.y - anchor.y) <= 1
        for anchor in (grid.start, grid.end)
    )
