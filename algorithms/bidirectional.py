"""
bidirectional.py — Bidirectional BFS
=====================================
Two BFS frontiers, one from START and one from END, each expanding one
cell per turn in strict alternation.

Whenever an expansion touches a cell the other side has already
discovered, the two half-paths form a candidate route of length
    depth_forward(a) + 1 + depth_backward(b)
and the best one is kept.  The search does NOT stop at the first
meeting: it stops once the depths at the heads of both queues add up
to at least the best candidate, because no undiscovered route can be
shorter than that.  This makes the returned path a shortest one.

Final path = START→a chain (reversed predecessors) + b→END chain.
"""

from collections import deque
from typing import Dict, Generator, Optional, Tuple

from maze import Grid, Point
from algorithms.step import Step, StepBuilder, reconstruct


def bidirectional(grid: Grid, start: Point, end: Point) -> Generator[Step, None, None]:
    sb = StepBuilder()

    # forward state
    q_f:     deque                           = deque([start])
    came_f:  Dict[Point, Optional[Point]]    = {start: None}
    depth_f: Dict[Point, int]                = {start: 0}

    # backward state
    q_b:     deque                           = deque([end])
    came_b:  Dict[Point, Optional[Point]]    = {end: None}
    depth_b: Dict[Point, int]                = {end: 0}

    best = float("inf")
    meet: Optional[Tuple[Point, Point]] = None     # (forward side, backward side)
    forward = True

    while q_f and q_b:
        if depth_f[q_f[0]] + depth_b[q_b[0]] >= best:
            break

        if forward:
            queue, came, depth, other_came, other_depth = q_f, came_f, depth_f, came_b, depth_b
        else:
            queue, came, depth, other_came, other_depth = q_b, came_b, depth_b, came_f, depth_f

        cur = queue.popleft()
        yield sb.expand(cur, len(q_f) + len(q_b))

        for nxt in grid.neighbours(cur):
            if nxt not in came:
                came[nxt]  = cur
                depth[nxt] = depth[cur] + 1
                queue.append(nxt)
            if nxt in other_came:
                total = depth[cur] + 1 + other_depth[nxt]
                if total < best:
                    best = total
                    meet = (cur, nxt) if forward else (nxt, cur)

        forward = not forward

    if meet is None:
        yield sb.finish()
        return

    a, b = meet
    head = reconstruct(came_f, a)
    tail = reversed(reconstruct(came_b, b))
    yield sb.finish(end, head + tuple(tail))
