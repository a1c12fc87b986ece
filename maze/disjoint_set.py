"""
disjoint_set.py — Union-Find over lattice cells
=================================================
Kruskal's generator asks one question per candidate edge: "are these
two cells already connected?"  Union-Find answers it in near-constant
time.

Only the odd/odd sublattice is registered: those are the cells that
become passages; the even rows/columns between them are the walls that
get knocked out.
"""

from typing import Dict, Iterable

from maze.point import Point


class DisjointSet:
    """
    Attributes:
        parent : {Point: Point}  representative pointer per cell.
        rank   : {Point: int}    upper bound on tree height, for union by rank.
    """

    def __init__(self, cells: Iterable[Point] = ()):
        self.parent: Dict[Point, Point] = {}
        self.rank:   Dict[Point, int]   = {}
        for cell in cells:
            self.add(cell)

    @classmethod
    def for_lattice(cls, size: int) -> "DisjointSet":
        """One singleton set per odd/odd cell strictly inside the border."""
        return cls(
            Point(x, y)
            for y in range(1, size - 1, 2)
            for x in range(1, size - 1, 2)
        )

    def add(self, cell: Point) -> None:
        if cell not in self.parent:
            self.parent[cell] = cell
            self.rank[cell] = 0

    def find(self, cell: Point) -> Point:
        """Representative of cell's set; compresses the walked path."""
        root = cell
        while self.parent[root] != root:
            root = self.parent[root]
        # second pass: point everything on the way straight at the root
        while self.parent[cell] != root:
            self.parent[cell], cell = root, self.parent[cell]
        return root

    def union(self, a: Point, b: Point) -> bool:
        """Merge the sets holding a and b.  Returns False if already joined."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        return True

    def connected(self, a: Point, b: Point) -> bool:
        return self.find(a) == self.find(b)

    def count(self) -> int:
        """Number of distinct sets."""
        return len({self.find(c) for c in self.parent})

    def __len__(self) -> int:
        return len(self.parent)

    def __contains__(self, cell: Point) -> bool:
        return cell in self.parent
