"""
wilson.py — Wilson's Algorithm
===============================
Loop-erased random walks.  One random lattice cell seeds the maze.
Then, from each cell not yet in the maze, walk randomly until the walk
touches the maze.  Whenever the walk steps back onto its own trail the
loop it just closed is erased (the trail is cut back to the revisited
cell).  When the walk arrives, the whole surviving trail is carved.

Every spanning tree of the lattice is equally likely.  Early walks are
slow since the maze is a single cell at that point.
"""

import random
from typing import Dict, List, Set

from maze import Grid, Point
from generators.common import carve, carve_between, lattice_cells, lattice_neighbours


def wilson(grid: Grid, rng: random.Random) -> None:
    cells = lattice_cells(grid.size)
    first = rng.choice(cells)
    carve(grid, first)
    in_maze: Set[Point] = {first}

    pending = [c for c in cells if c != first]
    rng.shuffle(pending)

    for origin in pending:
        if origin in in_maze:
            continue

        trail: List[Point]       = [origin]
        index: Dict[Point, int]  = {origin: 0}
        cur = origin
        while cur not in in_maze:
            nxt = rng.choice(lattice_neighbours(grid, cur))
            if nxt in index:
                # loop closed: drop everything walked since nxt
                cut = index[nxt] + 1
                for p in trail[cut:]:
                    del index[p]
                del trail[cut:]
            else:
                index[nxt] = len(trail)
                trail.append(nxt)
            cur = nxt

        for a, b in zip(trail, trail[1:]):
            carve_between(grid, a, b)
        in_maze.update(trail)
