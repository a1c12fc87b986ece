"""
theta_star.py — Theta* (any-angle A*)
======================================
A* where a cell's parent does not have to be a neighbour.  When
relaxing neighbour n of the current cell c:

  • if the parent of c can SEE n (line of sight), attach n directly to
    that parent with cost g(parent) + euclid(parent, n)
  • otherwise attach n to c with cost g(c) + 1

Costs and the heuristic are Euclidean.  The chain of parents from END
back to START is the list of waypoints, the corners of the any-angle
path.  The cell path the engine animates is recovered by stepping the
same line between consecutive waypoints, so it is always a contiguous
4-connected run of open cells.

Line of sight uses integer 4-connected stepping: from a, move one cell
in x or y per step (x when the accumulated error is positive) until b;
every stepped cell must be open.
"""

import heapq
import itertools
from typing import Dict, Generator, List, Tuple

from maze import Grid, Point
from algorithms.step import Step, StepBuilder


def theta_star(grid: Grid, start: Point, end: Point) -> Generator[Step, None, None]:
    sb      = StepBuilder()
    counter = itertools.count()

    g_score:  Dict[Point, float]                = {start: 0.0}
    parent:   Dict[Point, Point]                = {start: start}
    closed:   set                               = set()
    open_set: List[Tuple[float, int, Point]]    = [(start.euclidean(end), next(counter), start)]

    while open_set:
        _, _, cur = heapq.heappop(open_set)
        if cur in closed:
            continue
        closed.add(cur)

        if cur == end:
            waypoints = _waypoints(parent, end)
            yield sb.finish(cur, trace_waypoints(waypoints), waypoints)
            return
        yield sb.expand(cur, len(open_set))

        for nxt in grid.neighbours(cur):
            if nxt in closed:
                continue
            via = parent[cur]
            if line_of_sight(grid, via, nxt):
                cost = g_score[via] + via.euclidean(nxt)
            else:
                via, cost = cur, g_score[cur] + 1.0
            if cost < g_score.get(nxt, float("inf")):
                g_score[nxt] = cost
                parent[nxt]  = via
                heapq.heappush(open_set, (cost + nxt.euclidean(end), next(counter), nxt))

    yield sb.finish()


# ---------------------------------------------------------------------------
# Line stepping
# ---------------------------------------------------------------------------
def line_cells(a: Point, b: Point) -> List[Point]:
    """Cells on the 4-connected line from a to b, both ends included."""
    dx, dy = abs(b.x - a.x), abs(b.y - a.y)
    sx = 1 if b.x > a.x else -1
    sy = 1 if b.y > a.y else -1
    x, y = a.x, a.y
    error = dx - dy

    cells = []
    for _ in range(1 + dx + dy):
        cells.append(Point(x, y))
        if error > 0:
            x += sx
            error -= 2 * dy
        else:
            y += sy
            error += 2 * dx
    return cells


def line_of_sight(grid: Grid, a: Point, b: Point) -> bool:
    return all(grid.is_open(p) for p in line_cells(a, b))


def trace_waypoints(waypoints: Tuple[Point, ...]) -> Tuple[Point, ...]:
    """Expand waypoints into the contiguous cell path between them."""
    if not waypoints:
        return ()
    path = [waypoints[0]]
    for a, b in zip(waypoints, waypoints[1:]):
        path.extend(line_cells(a, b)[1:])
    return tuple(path)


def _waypoints(parent: Dict[Point, Point], end: Point) -> Tuple[Point, ...]:
    chain, cur = [end], end
    while parent[cur] != cur:
        cur = parent[cur]
        chain.append(cur)
    chain.reverse()
    return tuple(chain)
