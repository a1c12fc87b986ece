"""
point.py — Grid Coordinates
============================
Point is a plain value: two ints, no identity beyond them.  Frozen +
ordered so it works as a dict key, a set member and a heap tie-breaker.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True, order=True)
class Point:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def euclidean(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def midpoint(self, other: "Point") -> "Point":
        """Cell between two lattice cells two steps apart."""
        return Point((self.x + other.x) // 2, (self.y + other.y) // 2)

    def to_list(self) -> List[int]:
        return [self.x, self.y]

    @classmethod
    def from_list(cls, data) -> "Point":
        if isinstance(data, dict):
            return cls(int(data["x"]), int(data["y"]))
        x, y = data
        return cls(int(x), int(y))

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"({self.x},{self.y})"


# Orthogonal moves: down, right, up, left.  Every neighbour query uses
# this order so visitation is deterministic.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
