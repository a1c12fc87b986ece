"""
greedy_bfs.py — Greedy Best-First Search
==========================================
Like A* but the priority is h(n) ONLY, no g(n) term.  Heads straight
for END and is usually fast, but the path is NOT guaranteed shortest.
Compare it with A* on a maze with a long detour.
"""

import heapq
import itertools
from typing import Dict, Generator, List, Optional, Tuple

from maze import Grid, Point
from algorithms.step import Step, StepBuilder, reconstruct


def greedy_bfs(grid: Grid, start: Point, end: Point) -> Generator[Step, None, None]:
    sb      = StepBuilder()
    counter = itertools.count()

    came_from: Dict[Point, Optional[Point]] = {start: None}
    open_set:  List[Tuple[int, int, Point]] = [(start.manhattan(end), next(counter), start)]

    while open_set:
        _, _, cur = heapq.heappop(open_set)
        if cur == end:
            yield sb.finish(cur, reconstruct(came_from, end))
            return
        yield sb.expand(cur, len(open_set))

        for nxt in grid.neighbours(cur):
            if nxt not in came_from:
                came_from[nxt] = cur
                heapq.heappush(open_set, (nxt.manhattan(end), next(counter), nxt))

    yield sb.finish()
