"""
repair.py — Connectivity Repair
================================
Safety net run after every generator.  Some algorithms (Cellular
Automata above all) leave islands; some grid sizes leave END off the
lattice.  Repair guarantees the grid invariant: every open cell is
reachable from START.

Loop:
  1. flood-fill from START
  2. if an open cell is unreached, find the unreached cell nearest to
     the reached region (Manhattan distance) and the reached cell it is
     nearest to
  3. carve the straight corridor between them; go to 1

Step 2 is a multi-source BFS seeded with the whole reached region that
walks through walls as if they were open.  On an obstacle-free 4-grid
BFS distance IS Manhattan distance, so the first unreached open cell it
dequeues is the nearest one, and its parent chain is the corridor.
"""

import logging
from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from maze import CellState, Grid, Point, DIRECTIONS

logger = logging.getLogger(__name__)


def ensure_connectivity(grid: Grid) -> int:
    """Carve corridors until START reaches every open cell.  Returns corridors carved."""
    corridors = 0
    reached = grid.flood_fill(grid.start)
    while True:
        unreached = {p for p in grid.open_cells() if p not in reached}
        if not unreached:
            return corridors
        target, corridor = _nearest_corridor(grid, reached, unreached)
        for p in corridor:
            if grid.is_wall(p):
                grid[p] = CellState.PATH
        corridors += 1
        logger.debug("repair: joined %s via %d-cell corridor", target, len(corridor))
        reached = grid.flood_fill(grid.start)


def _nearest_corridor(
    grid: Grid,
    reached: Set[Point],
    unreached: Set[Point],
) -> Tuple[Point, List[Point]]:
    parent: Dict[Point, Optional[Point]] = {p: None for p in sorted(reached)}
    queue = deque(parent)
    while queue:
        cur = queue.popleft()
        for dx, dy in DIRECTIONS:
            nxt = Point(cur.x + dx, cur.y + dy)
            if not grid.in_bounds(nxt) or nxt in parent:
                continue
            parent[nxt] = cur
            if nxt in unreached:
                return nxt, _chain(parent, nxt)
            queue.append(nxt)
    # unreachable only when START itself is a wall; validate() reports that
    raise RuntimeError("connectivity repair found no route; start cell is not open")


def _chain(parent: Dict[Point, Optional[Point]], tail: Point) -> List[Point]:
    corridor = []
    cur: Optional[Point] = tail
    while cur is not None:
        corridor.append(cur)
        cur = parent[cur]
    corridor.reverse()
    return corridor
