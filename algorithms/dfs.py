"""
dfs.py — Depth-First Search
============================
LIFO stack.  Dives deep before backtracking, so the path it returns is
valid but NOT necessarily shortest.

Cells are marked discovered when pushed, which keeps the stack bounded
by the number of open cells.  Neighbours are pushed in reverse
DIRECTIONS order so they pop in DIRECTIONS order.
"""

from typing import Dict, Generator, List, Optional

from maze import Grid, Point
from algorithms.step import Step, StepBuilder, reconstruct


def dfs(grid: Grid, start: Point, end: Point) -> Generator[Step, None, None]:
    sb = StepBuilder()
    stack: List[Point]                      = [start]
    came_from: Dict[Point, Optional[Point]] = {start: None}

    while stack:
        cur = stack.pop()
        if cur == end:
            yield sb.finish(cur, reconstruct(came_from, end))
            return
        yield sb.expand(cur, len(stack))

        for nxt in reversed(grid.neighbours(cur)):
            if nxt not in came_from:
                came_from[nxt] = cur
                stack.append(nxt)

    yield sb.finish()
