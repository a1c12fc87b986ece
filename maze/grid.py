"""
grid.py — Square Maze Grid
===========================
Single source of truth for a maze.  Generators carve into it, the
PathFinder annotates it, the persistence layer snapshots it.

Responsibilities:
  1. Cell access                           (get / set by Point)
  2. Neighbour queries                     (open 4-neighbours, in bounds)
  3. Reachability                          (flood fill, connectivity)
  4. Search annotations                    (mark visited / path, reset)
  5. Serialisation round-trip              (to_rows / from_rows, to_bytes)

Design decisions:
  - Cells stored row-major: cells[y][x].
  - The grid never decides WHO may write to it; MazeSession enforces the
    single-writer rule.  Search algorithms only read.
  - START / END always win over VISITED / CURRENT.
"""

from collections import deque
from typing import Dict, Iterable, Iterator, List, Optional, Set

from config import ConfigurationError
from maze.cell import CellState, GLYPHS
from maze.point import Point, DIRECTIONS


class Grid:
    """
    Attributes:
        size   : side length (grid is always square).
        cells  : [[CellState]] indexed cells[y][x].
        start  : START marker position.
        end    : END marker position.
    """

    def __init__(
        self,
        size: int,
        fill: CellState = CellState.WALL,
        start: Optional[Point] = None,
        end: Optional[Point] = None,
    ):
        if size < 3:
            raise ConfigurationError(f"grid size must be at least 3, got {size}")
        self.size:  int                    = size
        self.cells: List[List[CellState]]  = [[fill] * size for _ in range(size)]
        self.start: Point                  = start or Point(1, 1)
        self.end:   Point                  = end or Point(size - 2, size - 2)

    # ==================================================================
    # CELL ACCESS
    # ==================================================================
    def __getitem__(self, p: Point) -> CellState:
        return self.cells[p.y][p.x]

    def __setitem__(self, p: Point, state: CellState) -> None:
        self.cells[p.y][p.x] = state

    def in_bounds(self, p: Point) -> bool:
        return 0 <= p.x < self.size and 0 <= p.y < self.size

    def is_interior(self, p: Point) -> bool:
        """Strictly inside the outer ring."""
        return 0 < p.x < self.size - 1 and 0 < p.y < self.size - 1

    def is_wall(self, p: Point) -> bool:
        return self.cells[p.y][p.x] is CellState.WALL

    def is_open(self, p: Point) -> bool:
        return self.in_bounds(p) and self.cells[p.y][p.x] is not CellState.WALL

    def points(self) -> Iterator[Point]:
        for y in range(self.size):
            for x in range(self.size):
                yield Point(x, y)

    def open_cells(self) -> List[Point]:
        return [p for p in self.points() if not self.is_wall(p)]

    def fill(self, state: CellState) -> None:
        for row in self.cells:
            row[:] = [state] * self.size

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, p: Point) -> List[Point]:
        """Open, in-bounds orthogonal neighbours in DIRECTIONS order."""
        result = []
        for dx, dy in DIRECTIONS:
            q = Point(p.x + dx, p.y + dy)
            if 0 <= q.x < self.size and 0 <= q.y < self.size and self.cells[q.y][q.x] is not CellState.WALL:
                result.append(q)
        return result

    def wall_neighbours(self, p: Point) -> List[Point]:
        result = []
        for dx, dy in DIRECTIONS:
            q = Point(p.x + dx, p.y + dy)
            if self.in_bounds(q) and self.is_wall(q):
                result.append(q)
        return result

    def wall_count_around(self, p: Point) -> int:
        """Walls in the 8-neighbourhood (out-of-bounds cells don't count)."""
        count = 0
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                q = Point(p.x + dx, p.y + dy)
                if self.in_bounds(q) and self.is_wall(q):
                    count += 1
        return count

    # ==================================================================
    # REACHABILITY
    # ==================================================================
    def flood_fill(self, origin: Optional[Point] = None) -> Set[Point]:
        """Every open cell reachable from origin (default START)."""
        origin = origin or self.start
        if not self.is_open(origin):
            return set()
        seen = {origin}
        queue = deque([origin])
        while queue:
            cur = queue.popleft()
            for nxt in self.neighbours(cur):
                if nxt not in seen:
                    seen.add(nxt)
                    queue.append(nxt)
        return seen

    def is_connected(self) -> bool:
        """START reaches END and every other open cell."""
        reached = self.flood_fill(self.start)
        if self.end not in reached:
            return False
        return len(reached) == len(self.open_cells())

    def validate(self) -> None:
        """Raise ConfigurationError unless the grid can host a search."""
        for name, p in (("start", self.start), ("end", self.end)):
            if not self.in_bounds(p):
                raise ConfigurationError(f"{name} {p} is outside a {self.size}x{self.size} grid")
            if self.is_wall(p):
                raise ConfigurationError(f"{name} {p} is a wall")
        if self.start == self.end:
            raise ConfigurationError("start and end coincide")

    # ==================================================================
    # SEARCH ANNOTATIONS
    # ==================================================================
    def stamp_endpoints(self) -> None:
        self[self.start] = CellState.START
        self[self.end] = CellState.END

    def mark_visited(self, p: Point) -> None:
        if not self[p].is_endpoint:
            self[p] = CellState.VISITED

    def mark_path(self, path: Iterable[Point]) -> None:
        for p in path:
            if not self[p].is_endpoint:
                self[p] = CellState.CURRENT

    def reset_path(self) -> None:
        """Wipe VISITED / CURRENT back to PATH; re-stamp START / END.  Idempotent."""
        for y, row in enumerate(self.cells):
            for x, state in enumerate(row):
                if state.is_annotation:
                    row[x] = CellState.PATH
        self.stamp_endpoints()

    def annotate(self, visited: Iterable[Point], path: Iterable[Point]) -> None:
        """Re-derive annotations from a visited set and a path (persistence reload)."""
        self.reset_path()
        for p in visited:
            if self.in_bounds(p) and not self.is_wall(p):
                self.mark_visited(p)
        self.mark_path(p for p in path if self.in_bounds(p) and not self.is_wall(p))

    # ==================================================================
    # COPIES & SERIALISATION
    # ==================================================================
    def copy(self) -> "Grid":
        g = Grid(self.size, start=self.start, end=self.end)
        g.cells = [list(row) for row in self.cells]
        return g

    def clean_copy(self) -> "Grid":
        """Copy with every search annotation removed."""
        g = self.copy()
        g.reset_path()
        return g

    def to_bytes(self) -> bytes:
        return bytes(state.code for row in self.cells for state in row)

    def to_rows(self) -> List[List[str]]:
        return [[state.value for state in row] for row in self.cells]

    @classmethod
    def from_rows(
        cls,
        rows: List[List[str]],
        start: Optional[Point] = None,
        end: Optional[Point] = None,
    ) -> "Grid":
        """
        Rebuild a grid from a state-name matrix.  Endpoints default to the
        START / END cells found in the rows.
        """
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ConfigurationError("grid rows must form a square matrix")
        g = cls(size)
        found: Dict[CellState, Point] = {}
        for y, row in enumerate(rows):
            for x, name in enumerate(row):
                try:
                    state = CellState(name)
                except ValueError as exc:
                    raise ConfigurationError(f"unknown cell state {name!r} at ({x},{y})") from exc
                g.cells[y][x] = state
                if state.is_endpoint:
                    found[state] = Point(x, y)
        g.start = start or found.get(CellState.START, g.start)
        g.end = end or found.get(CellState.END, g.end)
        return g

    def render_text(self) -> str:
        """ASCII dump, handy in test failures and the debugger."""
        return "\n".join("".join(GLYPHS[s] for s in row) for row in self.cells)

    # ==================================================================
    # Dunder
    # ==================================================================
    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Grid)
            and self.size == other.size
            and self.start == other.start
            and self.end == other.end
            and self.cells == other.cells
        )

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, start={self.start}, end={self.end})"
