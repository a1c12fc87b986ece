"""
prim.py — Randomised Prim's Algorithm
======================================
Grows one tree outward from (1, 1).  The frontier holds wall lattice
cells touching the tree; each round pulls a random frontier cell,
links it to a random tree neighbour and pushes its own untouched
neighbours.  Produces short, branchy corridors.
"""

import random
from typing import List, Set

from maze import Grid, Point
from generators.common import carve, carve_between, lattice_neighbours


def prim(grid: Grid, rng: random.Random) -> None:
    origin = Point(1, 1)
    carve(grid, origin)
    in_tree: Set[Point] = {origin}

    frontier: List[Point] = []
    queued:   Set[Point]  = set()
    _push_frontier(grid, origin, frontier, queued)

    while frontier:
        # swap-remove a random entry; order of the rest doesn't matter
        idx = rng.randrange(len(frontier))
        cell = frontier[idx]
        frontier[idx] = frontier[-1]
        frontier.pop()

        links = [q for q in lattice_neighbours(grid, cell) if q in in_tree]
        carve_between(grid, cell, rng.choice(links))
        in_tree.add(cell)
        _push_frontier(grid, cell, frontier, queued)


def _push_frontier(grid: Grid, cell: Point, frontier: List[Point], queued: Set[Point]) -> None:
    for q in lattice_neighbours(grid, cell):
        if q not in queued and grid.is_wall(q):
            queued.add(q)
            frontier.append(q)
