"""
maze/
-----
Core data layer.  Public API:

    from maze import Point, CellState, Grid
    from maze import DisjointSet, MazeStats
"""

from maze.point        import Point, DIRECTIONS
from maze.cell         import CellState
from maze.grid         import Grid
from maze.disjoint_set import DisjointSet
from maze.stats        import MazeStats, describe_stats

__all__ = [
    "Point",       "DIRECTIONS",
    "CellState",
    "Grid",
    "DisjointSet",
    "MazeStats",   "describe_stats",
]
