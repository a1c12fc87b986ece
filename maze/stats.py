"""
stats.py — Maze Shape Statistics
=================================
Numbers that characterise a generated maze, computed once right after
generation:

  • dead_ends        – open cells with exactly one open neighbour
  • branching_factor – mean open-neighbour count over junctions (> 2)
  • symmetry_score   – mirror agreement across both axes, 0..1
  • open_cells       – count of non-wall cells
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from maze.grid import Grid
from maze.point import Point


@dataclass(frozen=True)
class MazeStats:
    time_to_generate: float = 0.0
    dead_ends:        int   = 0
    branching_factor: float = 0.0
    symmetry_score:   float = 0.0
    open_cells:       int   = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def describe_stats(grid: Grid, time_to_generate: float = 0.0) -> MazeStats:
    dead_ends = 0
    branches = 0
    junctions = 0
    open_cells = 0
    for p in grid.points():
        if grid.is_wall(p):
            continue
        open_cells += 1
        degree = len(grid.neighbours(p))
        if degree == 1:
            dead_ends += 1
        elif degree > 2:
            branches += degree
            junctions += 1

    return MazeStats(
        time_to_generate=time_to_generate,
        dead_ends=dead_ends,
        branching_factor=branches / junctions if junctions else 0.0,
        symmetry_score=_symmetry(grid),
        open_cells=open_cells,
    )


def _symmetry(grid: Grid) -> float:
    # wall/open agreement under left-right and top-bottom mirroring
    n = grid.size
    matches = 0
    for y in range(n):
        for x in range(n // 2):
            if grid.is_wall(Point(x, y)) == grid.is_wall(Point(n - 1 - x, y)):
                matches += 1
            if grid.is_wall(Point(y, x)) == grid.is_wall(Point(y, n - 1 - x)):
                matches += 1
    return matches / (2 * n * (n // 2))
