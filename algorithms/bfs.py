"""
bfs.py — Breadth-First Search
==============================
FIFO queue, predecessor recorded when a cell is first discovered.
On a unit-cost grid the first time END is dequeued its path is a
shortest (hop-count) one.
"""

from collections import deque
from typing import Dict, Generator, Optional

from maze import Grid, Point
from algorithms.step import Step, StepBuilder, reconstruct


def bfs(grid: Grid, start: Point, end: Point) -> Generator[Step, None, None]:
    sb = StepBuilder()
    queue: deque                            = deque([start])
    came_from: Dict[Point, Optional[Point]] = {start: None}

    while queue:
        cur = queue.popleft()
        if cur == end:
            yield sb.finish(cur, reconstruct(came_from, end))
            return
        yield sb.expand(cur, len(queue))

        for nxt in grid.neighbours(cur):
            if nxt not in came_from:
                came_from[nxt] = cur
                queue.append(nxt)

    yield sb.finish()
