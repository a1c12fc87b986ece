"""
fringe.py — Fringe Search
==========================
IDA*'s iterations without the re-walk from scratch.  The fringe is an
ordered list; each pass walks it front to back:

  • f = g + h above the current limit  →  defer to the next pass
  • otherwise expand it; children go straight to the FRONT of the
    fringe so they are looked at next (depth-first flavour)

The next pass only visits the deferred cells, under a limit equal to
the smallest deferred f.  A cache maps each cell to (g, parent); a cell
is expanded again only if it is reached with a strictly better g, and
stale duplicate entries are skipped when popped.
"""

import logging
from collections import deque
from typing import Dict, Generator, List, Optional, Tuple

from maze import Grid, Point
from algorithms.step import Step, StepBuilder, reconstruct

logger = logging.getLogger(__name__)


def fringe(grid: Grid, start: Point, end: Point) -> Generator[Step, None, None]:
    sb = StepBuilder()

    cache:    Dict[Point, Tuple[int, Optional[Point]]] = {start: (0, None)}
    expanded: Dict[Point, int]                         = {}
    now:      deque                                    = deque([start])
    later:    List[Point]                              = []
    flimit = start.manhattan(end)

    while now:
        fmin = float("inf")
        while now:
            cur = now.popleft()
            g, _ = cache[cur]
            if expanded.get(cur, float("inf")) <= g:
                continue
            f = g + cur.manhattan(end)
            if f > flimit:
                fmin = min(fmin, f)
                later.append(cur)
                continue

            if cur == end:
                parents = {p: parent for p, (_, parent) in cache.items()}
                yield sb.finish(cur, reconstruct(parents, end))
                return
            expanded[cur] = g
            yield sb.expand(cur, len(now) + len(later))

            for nxt in reversed(grid.neighbours(cur)):
                if g + 1 < cache.get(nxt, (float("inf"), None))[0]:
                    cache[nxt] = (g + 1, cur)
                    now.appendleft(nxt)

        if later:
            logger.debug("fringe: limit %s -> %s (%d deferred)", flimit, fmin, len(later))
        flimit = fmin
        now, later = deque(later), []

    yield sb.finish()
