"""
step.py — Search Step Snapshot
===============================
Every search algorithm is a generator that yields Step objects, one per
cell the algorithm commits to exploring, then one final Step carrying
the answer.

Design decisions:
  - Step is a SNAPSHOT.  The algorithm generator is the only writer;
    the PathFinder is a pure reader and does all grid marking, delays
    and observer calls itself.
  - The final step is the only one with is_final=True.  Its `path` is
    empty when END cannot be reached.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from maze import Point


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number   : 0-based index of this step in the run.
        current       : cell being expanded right now (None on a failed final step).
        frontier_size : open-list / queue / stack length after the pop.
        path          : START→END cells, final step only.
        waypoints     : corner points of an any-angle path (Theta*), else == path.
        is_final      : True on the very last step (path found or exhausted).
    """

    step_number:    int                = 0
    current:        Optional[Point]    = None
    frontier_size:  int                = 0
    path:           Tuple[Point, ...]  = ()
    waypoints:      Tuple[Point, ...]  = ()
    is_final:       bool               = False


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to count steps themselves
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Usage inside an algorithm generator:
        sb = StepBuilder()
        yield sb.expand(cell, len(queue))
        ...
        yield sb.finish(end, path)
    """

    def __init__(self):
        self.step_number: int = 0

    def expand(self, current: Point, frontier_size: int) -> Step:
        step = Step(step_number=self.step_number, current=current, frontier_size=frontier_size)
        self.step_number += 1
        return step

    def finish(
        self,
        current: Optional[Point] = None,
        path: Iterable[Point] = (),
        waypoints: Optional[Iterable[Point]] = None,
    ) -> Step:
        path = tuple(path)
        return Step(
            step_number=self.step_number,
            current=current,
            path=path,
            waypoints=path if waypoints is None else tuple(waypoints),
            is_final=True,
        )


def reconstruct(came_from: Dict[Point, Optional[Point]], end: Point) -> Tuple[Point, ...]:
    """Walk predecessor links back from END; START maps to None."""
    path, cur = [], end
    while cur is not None:
        path.append(cur)
        cur = came_from.get(cur)
    path.reverse()
    return tuple(path)
