"""
ida_star.py — Iterative-Deepening A*
=====================================
Depth-first search bounded by f = g + h (h = Manhattan).  Each
iteration explores every branch whose f stays within the bound; the
next bound is the smallest f that exceeded it.  No branch exceeded it
means END is unreachable and the run ends with an empty path.

The depth-first walk uses an explicit stack of neighbour iterators
instead of recursion, so a 101x101 maze cannot blow the interpreter
stack.  `path` mirrors the stack: exhausting a cell's iterator pops
the cell off the path, which is how failed branches are unwound.

Two prunings per iteration:
  • a cell already on the current path is never re-entered (no cycles)
  • a cell reached with g no better than earlier in the same iteration
    is skipped (its subtree was already searched from a cheaper entry)
"""

import logging
from typing import Dict, Generator, Iterator, List, Set

from maze import Grid, Point
from algorithms.step import Step, StepBuilder

logger = logging.getLogger(__name__)


def ida_star(grid: Grid, start: Point, end: Point) -> Generator[Step, None, None]:
    sb = StepBuilder()
    bound = start.manhattan(end)

    while True:
        path:    List[Point]             = [start]
        on_path: Set[Point]              = {start}
        best_g:  Dict[Point, int]        = {start: 0}
        stack:   List[Iterator[Point]]   = [iter(grid.neighbours(start))]
        next_bound = float("inf")

        yield sb.expand(start, len(stack))

        while stack:
            nxt = next(stack[-1], None)
            if nxt is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if nxt in on_path:
                continue

            g = len(path)
            if g >= best_g.get(nxt, float("inf")):
                continue
            f = g + nxt.manhattan(end)
            if f > bound:
                next_bound = min(next_bound, f)
                continue

            best_g[nxt] = g
            path.append(nxt)
            on_path.add(nxt)
            if nxt == end:
                yield sb.finish(nxt, path)
                return
            yield sb.expand(nxt, len(stack))
            stack.append(iter(grid.neighbours(nxt)))

        if next_bound == float("inf"):
            yield sb.finish()
            return
        logger.debug("ida*: bound %s -> %s", bound, next_bound)
        bound = next_bound
