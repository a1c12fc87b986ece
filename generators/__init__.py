"""
generators/__init__.py — Maze Generator Registry
=================================================
Single source of truth for every maze generator.

    from generators import generate, MazeAlgorithm

    grid = generate(21, MazeAlgorithm.WILSON, rng=42)

A generator is a plain function  fn(grid, rng) -> None  that carves into
an all-wall Grid.  generate() wraps every one of them the same way:

  1. build a solid Grid(size)
  2. run the generator
  3. stamp START / END
  4. connectivity repair
  5. validate

Adding an algorithm: write the function, add one enum member and one
REGISTRY entry.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from config import MIN_GRID_SIZE, ConfigurationError
from maze import Grid

from generators.kruskal            import kruskal
from generators.prim               import prim
from generators.wilson             import wilson
from generators.recursive_division import recursive_division
from generators.braided            import braided
from generators.cellular           import cellular
from generators.hunt_and_kill      import hunt_and_kill
from generators.spiral_backtracker import spiral_backtracker
from generators.repair             import ensure_connectivity

logger = logging.getLogger(__name__)


class MazeAlgorithm(Enum):
    KRUSKAL            = "kruskal"
    PRIM               = "prim"
    WILSON             = "wilson"
    RECURSIVE_DIVISION = "recursive_division"
    BRAIDED            = "braided"
    CELLULAR           = "cellular"
    HUNT_AND_KILL      = "hunt_and_kill"
    SPIRAL_BACKTRACKER = "spiral_backtracker"


# ---------------------------------------------------------------------------
# GeneratorInfo — metadata card for each generator
# ---------------------------------------------------------------------------
@dataclass
class GeneratorInfo:
    key:            str                  # registry key, e.g. "kruskal"
    label:          str                  # human label
    fn:             Callable             # fn(grid, rng) -> None
    category:       str                  # "spanning tree", "wall adder", ...
    multiple_paths: bool = False         # can produce more than one solution?

    def to_dict(self) -> dict:
        return {
            "key":            self.key,
            "label":          self.label,
            "category":       self.category,
            "multiple_paths": self.multiple_paths,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[MazeAlgorithm, GeneratorInfo] = {
    MazeAlgorithm.KRUSKAL: GeneratorInfo(
        key="kruskal", label="Kruskal's Algorithm", fn=kruskal,
        category="spanning tree",
    ),
    MazeAlgorithm.PRIM: GeneratorInfo(
        key="prim", label="Prim's Algorithm", fn=prim,
        category="spanning tree",
    ),
    MazeAlgorithm.WILSON: GeneratorInfo(
        key="wilson", label="Wilson's Algorithm", fn=wilson,
        category="uniform spanning tree",
    ),
    MazeAlgorithm.RECURSIVE_DIVISION: GeneratorInfo(
        key="recursive_division", label="Recursive Division", fn=recursive_division,
        category="wall adder", multiple_paths=True,
    ),
    MazeAlgorithm.BRAIDED: GeneratorInfo(
        key="braided", label="Randomized Braided", fn=braided,
        category="braid", multiple_paths=True,
    ),
    MazeAlgorithm.CELLULAR: GeneratorInfo(
        key="cellular", label="Cellular Automata", fn=cellular,
        category="cave", multiple_paths=True,
    ),
    MazeAlgorithm.HUNT_AND_KILL: GeneratorInfo(
        key="hunt_and_kill", label="Hunt and Kill", fn=hunt_and_kill,
        category="random walk",
    ),
    MazeAlgorithm.SPIRAL_BACKTRACKER: GeneratorInfo(
        key="spiral_backtracker", label="Spiral Backtracker", fn=spiral_backtracker,
        category="depth-first",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def resolve_generator(algorithm: Union[MazeAlgorithm, str]) -> MazeAlgorithm:
    """Accept the enum, its value or its name; raise ConfigurationError otherwise."""
    if isinstance(algorithm, MazeAlgorithm):
        return algorithm
    key = str(algorithm).strip().lower()
    for member in MazeAlgorithm:
        if key in (member.value, member.name.lower()):
            return member
    raise ConfigurationError(f"unknown maze algorithm {algorithm!r}")


def get_generator(algorithm: Union[MazeAlgorithm, str]) -> Optional[GeneratorInfo]:
    """Return GeneratorInfo by enum or key, or None."""
    try:
        return REGISTRY[resolve_generator(algorithm)]
    except ConfigurationError:
        return None


def list_generators() -> List[GeneratorInfo]:
    """Return all registered generators in declaration order."""
    return list(REGISTRY.values())


# ---------------------------------------------------------------------------
# generate()
# ---------------------------------------------------------------------------
def generate(
    size: int,
    algorithm: Union[MazeAlgorithm, str] = MazeAlgorithm.KRUSKAL,
    rng: Union[random.Random, int, None] = None,
) -> Grid:
    """
    Build a connected maze.  `rng` may be a Random, an int seed, or None
    for a fresh unseeded generator.
    """
    if size < MIN_GRID_SIZE:
        raise ConfigurationError(f"maze size must be at least {MIN_GRID_SIZE}, got {size}")
    info = REGISTRY[resolve_generator(algorithm)]
    if not isinstance(rng, random.Random):
        rng = random.Random(rng)

    grid = Grid(size)
    info.fn(grid, rng)
    grid.stamp_endpoints()
    corridors = ensure_connectivity(grid)
    grid.validate()

    logger.info("generated %dx%d %s maze (%d repair corridors)", size, size, info.key, corridors)
    return grid


__all__ = [
    "MazeAlgorithm",
    "GeneratorInfo",
    "REGISTRY",
    "generate",
    "resolve_generator",
    "get_generator",
    "list_generators",
    "ensure_connectivity",
]
