"""
astar.py — A* Search
=====================
Dijkstra plus heuristic guidance: the heap is ordered by
f = g + h with h = Manhattan distance to END.  Manhattan is admissible
and consistent on a 4-connected unit grid, so the first time END is
popped its path is a shortest one.

Ties on f prefer the larger g (the cell closer to the goal), then
insertion order.
"""

import heapq
import itertools
from typing import Dict, Generator, List, Optional, Tuple

from maze import Grid, Point
from algorithms.step import Step, StepBuilder, reconstruct


def astar(grid: Grid, start: Point, end: Point) -> Generator[Step, None, None]:
    sb      = StepBuilder()
    counter = itertools.count()

    g_score:   Dict[Point, int]                  = {start: 0}
    came_from: Dict[Point, Optional[Point]]      = {start: None}
    closed:    set                               = set()
    open_set:  List[Tuple[int, int, int, Point]] = [
        (start.manhattan(end), 0, next(counter), start)
    ]

    while open_set:
        _, neg_g, _, cur = heapq.heappop(open_set)
        if cur in closed or -neg_g > g_score[cur]:
            continue
        closed.add(cur)

        if cur == end:
            yield sb.finish(cur, reconstruct(came_from, end))
            return
        yield sb.expand(cur, len(open_set))

        for nxt in grid.neighbours(cur):
            if nxt in closed:
                continue
            tentative_g = g_score[cur] + 1
            if tentative_g < g_score.get(nxt, float("inf")):
                g_score[nxt]   = tentative_g
                came_from[nxt] = cur
                f = tentative_g + nxt.manhattan(end)
                heapq.heappush(open_set, (f, -tentative_g, next(counter), nxt))

    yield sb.finish()
