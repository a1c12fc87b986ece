"""
recorder.py — Run Recorder & Analytics
========================================
Turns every completed PathResult into a RunMetrics card, keeps the
history, and compares two runs for Comparison Mode.

Usage:
    rec = Recorder()
    metrics = rec.record(result, grid, maze_id="…", maze_algorithm="kruskal")
    rec.history                      # every run, oldest first
    compare(rec.history[0], rec.history[1])   → ComparisonResult

Stopped runs never reach the recorder; only COMPLETED runs count.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from maze import Grid
from algorithms import get_algorithm


# ---------------------------------------------------------------------------
# Metrics dataclass — one card per completed run
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    maze_id:         str         = ""
    algorithm:       str         = ""
    algo_label:      str         = ""
    maze_algorithm:  str         = ""
    time_to_solve:   float       = 0.0        # seconds spent searching
    path_length:     int         = 0          # number of edges on the final path
    cells_visited:   int         = 0
    path_found:      bool        = False
    timestamp:       float       = 0.0
    visited_points:  List[list]  = field(default_factory=list)
    path_points:     List[list]  = field(default_factory=list)
    grid_rows:       List[list]  = field(default_factory=list)   # clean maze, no annotations

    def to_dict(self) -> dict:
        return dict(self.__dict__)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_visited: str = ""   # which algo explored fewer cells
    winner_path:    str = ""   # which algo found the shorter path
    winner_time:    str = ""   # which algo finished faster

    def to_dict(self) -> dict:
        return {
            "left":           self.left.to_dict(),
            "right":          self.right.to_dict(),
            "winner_visited": self.winner_visited,
            "winner_path":    self.winner_path,
            "winner_time":    self.winner_time,
        }


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        history : every RunMetrics recorded so far, oldest first.
    """

    def __init__(self):
        self.history: List[RunMetrics] = []

    def record(self, result, grid: Grid, maze_id: str = "", maze_algorithm: str = "") -> RunMetrics:
        """Build the analytics card for a completed PathResult and append it."""
        info = get_algorithm(result.algorithm)
        metrics = RunMetrics(
            maze_id=maze_id,
            algorithm=result.algorithm,
            algo_label=info.label if info else result.algorithm,
            maze_algorithm=maze_algorithm,
            time_to_solve=result.elapsed,
            path_length=result.length,
            cells_visited=len(result.visited),
            path_found=result.found,
            timestamp=time.time(),
            visited_points=[p.to_list() for p in sorted(result.visited)],
            path_points=[p.to_list() for p in result.path],
            grid_rows=grid.clean_copy().to_rows(),
        )
        self.history.append(metrics)
        return metrics

    @property
    def latest(self) -> Optional[RunMetrics]:
        return self.history[-1] if self.history else None

    def get(self, index: int) -> Optional[RunMetrics]:
        if -len(self.history) <= index < len(self.history):
            return self.history[index]
        return None

    def for_maze(self, maze_id: str) -> List[RunMetrics]:
        return [m for m in self.history if m.maze_id == maze_id]

    def clear(self) -> None:
        self.history = []


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunMetrics, right: RunMetrics) -> ComparisonResult:
    """Given two run cards, produce a ComparisonResult.  Lower wins everywhere."""
    l, r = left, right

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    # an unsolved run never wins on path length
    l_path = l.path_length if l.path_found else float("inf")
    r_path = r.path_length if r.path_found else float("inf")

    return ComparisonResult(
        left=l,
        right=r,
        winner_visited=winner(l.cells_visited, r.cells_visited, l.algo_label, r.algo_label),
        winner_path   =winner(l_path, r_path, l.algo_label, r.algo_label),
        winner_time   =winner(l.time_to_solve, r.time_to_solve, l.algo_label, r.algo_label),
    )
