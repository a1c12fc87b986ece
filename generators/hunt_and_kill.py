"""
hunt_and_kill.py — Hunt-and-Kill
=================================
Walk: from the current cell, carve into a random uncarved lattice
neighbour until there is none.
Hunt: scan the lattice row by row for the first uncarved cell that
touches a carved one, join them, and resume walking from there.
Stops when a full scan finds nothing.  Quadratic worst case, but the
long walks give long winding corridors.
"""

import random
from typing import Optional

from maze import Grid, Point
from generators.common import carve, carve_between, lattice_cells, lattice_neighbours


def hunt_and_kill(grid: Grid, rng: random.Random) -> None:
    cur: Optional[Point] = Point(1, 1)
    carve(grid, cur)

    while cur is not None:
        # walk
        while True:
            options = [q for q in lattice_neighbours(grid, cur) if grid.is_wall(q)]
            if not options:
                break
            nxt = rng.choice(options)
            carve_between(grid, cur, nxt)
            cur = nxt
        # hunt
        cur = _hunt(grid, rng)


def _hunt(grid: Grid, rng: random.Random) -> Optional[Point]:
    for cell in lattice_cells(grid.size):
        if not grid.is_wall(cell):
            continue
        carved = [q for q in lattice_neighbours(grid, cell) if not grid.is_wall(q)]
        if carved:
            carve_between(grid, cell, rng.choice(carved))
            return cell
    return None
