"""
algorithms/__init__.py — Search Algorithm Registry
===================================================
Single source of truth for every search algorithm the engine knows.

    from algorithms import REGISTRY, get_algorithm, SearchAlgorithm

REGISTRY maps the SearchAlgorithm enum to an AlgoInfo card:
    {
        SearchAlgorithm.BFS: AlgoInfo(key, label, fn, tags, guarantees_shortest, …),
        …
    }

Every fn has the same shape:

    fn(grid, start, end) -> Generator[Step, None, None]

and only READS the grid.  Adding an algorithm is: write the generator,
add one enum member and one entry here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from config import ConfigurationError

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.dijkstra      import dijkstra
from algorithms.astar         import astar
from algorithms.bfs           import bfs
from algorithms.dfs           import dfs
from algorithms.bidirectional import bidirectional
from algorithms.greedy_bfs    import greedy_bfs
from algorithms.ida_star      import ida_star
from algorithms.fringe        import fringe
from algorithms.theta_star    import theta_star
from algorithms.step          import Step, StepBuilder


class SearchAlgorithm(Enum):
    DIJKSTRA      = "dijkstra"
    ASTAR         = "astar"
    BFS           = "bfs"
    DFS           = "dfs"
    BIDIRECTIONAL = "bidirectional"
    GREEDY_BFS    = "greedy_bfs"
    IDA_STAR      = "ida_star"
    FRINGE        = "fringe"
    THETA_STAR    = "theta_star"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:                 str                                      # registry key, e.g. "bfs"
    label:               str                                      # human label
    fn:                  Callable                                 # the generator function
    tags:                List[str] = field(default_factory=list)  # e.g. ["heuristic", "shortest-path"]
    guarantees_shortest: bool     = False                         # path length == BFS length?
    has_heuristic:       bool     = False                         # guided by a distance estimate?
    complexity_time:     str      = ""
    complexity_space:    str      = ""

    def to_dict(self) -> dict:
        return {
            "key":                 self.key,
            "label":               self.label,
            "tags":                list(self.tags),
            "guarantees_shortest": self.guarantees_shortest,
            "has_heuristic":       self.has_heuristic,
            "complexity_time":     self.complexity_time,
            "complexity_space":    self.complexity_space,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[SearchAlgorithm, AlgoInfo] = {

    SearchAlgorithm.DIJKSTRA: AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=dijkstra,
        tags=["shortest-path", "priority-queue"], guarantees_shortest=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
    ),

    SearchAlgorithm.ASTAR: AlgoInfo(
        key="astar", label="A* Search", fn=astar,
        tags=["shortest-path", "heuristic", "priority-queue"],
        guarantees_shortest=True, has_heuristic=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
    ),

    SearchAlgorithm.BFS: AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=bfs,
        tags=["shortest-path", "traversal"], guarantees_shortest=True,
        complexity_time="O(V)", complexity_space="O(V)",
    ),

    SearchAlgorithm.DFS: AlgoInfo(
        key="dfs", label="Depth-First Search", fn=dfs,
        tags=["traversal"],
        complexity_time="O(V)", complexity_space="O(V)",
    ),

    SearchAlgorithm.BIDIRECTIONAL: AlgoInfo(
        key="bidirectional", label="Bidirectional Search", fn=bidirectional,
        tags=["shortest-path", "bidirectional"], guarantees_shortest=True,
        complexity_time="O(b^(d/2))", complexity_space="O(b^(d/2))",
    ),

    SearchAlgorithm.GREEDY_BFS: AlgoInfo(
        key="greedy_bfs", label="Greedy Best-First", fn=greedy_bfs,
        tags=["heuristic", "suboptimal"], has_heuristic=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
    ),

    SearchAlgorithm.IDA_STAR: AlgoInfo(
        key="ida_star", label="IDA*", fn=ida_star,
        tags=["shortest-path", "heuristic", "iterative-deepening"],
        guarantees_shortest=True, has_heuristic=True,
        complexity_time="O(b^d)", complexity_space="O(d)",
    ),

    SearchAlgorithm.FRINGE: AlgoInfo(
        key="fringe", label="Fringe Search", fn=fringe,
        tags=["shortest-path", "heuristic", "iterative-deepening"],
        guarantees_shortest=True, has_heuristic=True,
        complexity_time="O(b^d)", complexity_space="O(V)",
    ),

    SearchAlgorithm.THETA_STAR: AlgoInfo(
        key="theta_star", label="Theta*", fn=theta_star,
        tags=["heuristic", "any-angle"], has_heuristic=True,
        complexity_time="O(V log V)", complexity_space="O(V)",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def resolve_algorithm(algorithm: Union[SearchAlgorithm, str]) -> SearchAlgorithm:
    """Accept the enum, its value or its name; raise ConfigurationError otherwise."""
    if isinstance(algorithm, SearchAlgorithm):
        return algorithm
    key = str(algorithm).strip().lower()
    for member in SearchAlgorithm:
        if key in (member.value, member.name.lower()):
            return member
    raise ConfigurationError(f"unknown search algorithm {algorithm!r}")


def get_algorithm(algorithm: Union[SearchAlgorithm, str]) -> Optional[AlgoInfo]:
    """Return AlgoInfo by enum or key, or None."""
    try:
        return REGISTRY[resolve_algorithm(algorithm)]
    except ConfigurationError:
        return None


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in declaration order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "SearchAlgorithm",
    "AlgoInfo",
    "REGISTRY",
    "Step",
    "StepBuilder",
    "resolve_algorithm",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
]
