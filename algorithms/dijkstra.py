"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Unit-cost Dijkstra over the open cells, using a min-heap (heapq).

  1. Pop the minimum-distance cell; skip it if the entry is stale
  2. Cell is END  →  reconstruct and finish
  3. Otherwise yield it as explored and relax its open neighbours
  4. Heap empty  →  finish with an empty path

Ties on distance are broken by insertion order (a running counter), so
the run is deterministic.
"""

import heapq
import itertools
from typing import Dict, Generator, List, Optional, Tuple

from maze import Grid, Point
from algorithms.step import Step, StepBuilder, reconstruct


def dijkstra(grid: Grid, start: Point, end: Point) -> Generator[Step, None, None]:
    sb      = StepBuilder()
    counter = itertools.count()

    dist:      Dict[Point, int]              = {start: 0}
    came_from: Dict[Point, Optional[Point]]  = {start: None}
    closed:    set                           = set()
    heap:      List[Tuple[int, int, Point]]  = [(0, next(counter), start)]

    while heap:
        d, _, cur = heapq.heappop(heap)
        if cur in closed or d > dist[cur]:
            continue
        closed.add(cur)

        if cur == end:
            yield sb.finish(cur, reconstruct(came_from, end))
            return
        yield sb.expand(cur, len(heap))

        for nxt in grid.neighbours(cur):
            nd = d + 1
            if nd < dist.get(nxt, float("inf")):
                dist[nxt] = nd
                came_from[nxt] = cur
                heapq.heappush(heap, (nd, next(counter), nxt))

    yield sb.finish()
