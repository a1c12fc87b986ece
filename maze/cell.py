"""
cell.py — Cell States
======================
Every grid cell holds exactly one CellState.  WALL / PATH come from the
generators, START / END are fixed markers, VISITED / CURRENT are search
annotations that Grid.reset_path() wipes.  Each state also has a byte
code (Grid.to_bytes) and a glyph (Grid.render_text).
"""

from enum import Enum


# ---------------------------------------------------------------------------
# Cell State Enum — one value per cell, mutually exclusive
# ---------------------------------------------------------------------------
class CellState(Enum):
    WALL    = "wall"
    PATH    = "path"      # open, untouched by the current search
    START   = "start"     # fixed marker, never overwritten by a search
    END     = "end"       # fixed marker, never overwritten by a search
    VISITED = "visited"   # explored by the current search
    CURRENT = "current"   # on the reconstructed path

    @property
    def is_open(self) -> bool:
        return self is not CellState.WALL

    @property
    def is_endpoint(self) -> bool:
        return self in (CellState.START, CellState.END)

    @property
    def is_annotation(self) -> bool:
        """Set by a search run; wiped by Grid.reset_path()."""
        return self in (CellState.VISITED, CellState.CURRENT)

    @property
    def code(self) -> int:
        return _CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "CellState":
        return _BY_CODE[code]


_CODES = {state: i for i, state in enumerate(CellState)}
_BY_CODE = {i: state for state, i in _CODES.items()}

# single-character glyphs for Grid.render_text()
GLYPHS = {
    CellState.WALL:    "#",
    CellState.PATH:    ".",
    CellState.START:   "S",
    CellState.END:     "E",
    CellState.VISITED: "o",
    CellState.CURRENT: "*",
}
