"""
spiral_backtracker.py — Spiral Backtracker
===========================================
Depth-first carving with a fixed heading cycle: up, right, down, left.
A freshly carved cell keeps the heading it arrived with, and a blocked
cell turns clockwise, so corridors run straight until they hit
something and then curl inward.  Backtracking uses an explicit stack;
each stack entry remembers which heading to try next and how many it
has tried, so every cell gets all four chances before it is popped.

Starts from the bottom-left lattice cell.  No randomness is consumed:
the spiral is the point.
"""

import random
from typing import List, Tuple

from maze import Grid, Point
from generators.common import carve, carve_between

HEADINGS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))   # up, right, down, left


def spiral_backtracker(grid: Grid, rng: random.Random) -> None:
    bottom = grid.size - 2 if (grid.size - 2) % 2 == 1 else grid.size - 3
    origin = Point(1, bottom)
    carve(grid, origin)

    # (cell, heading to try next, headings tried so far)
    stack: List[Tuple[Point, int, int]] = [(origin, 0, 0)]
    while stack:
        cell, heading, tried = stack[-1]
        if tried == 4:
            stack.pop()
            continue
        stack[-1] = (cell, (heading + 1) % 4, tried + 1)

        dx, dy = HEADINGS[heading]
        nxt = Point(cell.x + 2 * dx, cell.y + 2 * dy)
        if grid.is_interior(nxt) and grid.is_wall(nxt):
            carve_between(grid, cell, nxt)
            stack.append((nxt, heading, 0))
