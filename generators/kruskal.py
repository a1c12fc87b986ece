"""
kruskal.py — Kruskal's Algorithm
=================================
Every lattice cell starts as its own tree.  Candidate edges join each
cell to its right and lower lattice neighbour, each with a random
weight.  Walking the edges in ascending weight order and joining only
cells that live in different trees (Union-Find) yields a spanning tree:
a perfect maze with no directional bias.
"""

import random
from dataclasses import dataclass
from typing import List

from config import KRUSKAL_WEIGHT_RANGE
from maze import DisjointSet, Grid, Point
from generators.common import carve, carve_between, lattice_cells


@dataclass(frozen=True)
class Edge:
    source: Point
    target: Point
    weight: int


def kruskal(grid: Grid, rng: random.Random) -> None:
    sets = DisjointSet.for_lattice(grid.size)
    edges: List[Edge] = []

    for cell in lattice_cells(grid.size):
        carve(grid, cell)
        for dx, dy in ((2, 0), (0, 2)):
            nxt = cell.offset(dx, dy)
            if nxt in sets:
                edges.append(Edge(cell, nxt, rng.randint(*KRUSKAL_WEIGHT_RANGE)))

    # shuffle first so equal weights don't fall back to raster order
    rng.shuffle(edges)
    edges.sort(key=lambda e: e.weight)

    for edge in edges:
        if sets.union(edge.source, edge.target):
            carve_between(grid, edge.source, edge.target)
