"""Greedy grid packing for the card preview.

Cards are placed in input order, scanning rows top to bottom and columns
left to right for the first empty block that fits. The scan never starts
above the row of the previous placement, so later cards can fill gaps to the
right of earlier ones but never backfill rows above them. Cards that do not
fit anywhere are dropped from the output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from gridfolio.core.errors import ShapeError

EMPTY = " "
FILLED = "x"

_SHAPE_RE = re.compile(r"^\s*(\d+)\s*x\s*(\d+)\s*$")

Grid = List[List[str]]


@dataclass(frozen=True, slots=True)
class Placement:
    """Grid position and extent assigned to one card."""

    start_row: int
    start_col: int
    width: int
    height: int
    card_type: str

    @property
    def end_row(self) -> int:
        return self.start_row + self.height

    @property
    def end_col(self) -> int:
        return self.start_col + self.width

    def cells(self) -> Iterable[Tuple[int, int]]:
        for r in range(self.start_row, self.end_row):
            for c in range(self.start_col, self.end_col):
                yield r, c


def parse_shape(shape: str) -> Tuple[int, int]:
    """Return ``(height, width)`` for a ``"<height>x<width>"`` code."""

    match = _SHAPE_RE.match(shape or "")
    if not match:
        raise ShapeError(f"Invalid shape code: {shape!r}")
    height, width = int(match.group(1)), int(match.group(2))
    if height <= 0 or width <= 0:
        raise ShapeError(f"Shape must have positive extent: {shape!r}")
    return height, width


def new_grid(rows: int, cols: int) -> Grid:
    return [[EMPTY] * cols for _ in range(rows)]


def can_place(grid: Grid, row: int, col: int, width: int, height: int) -> bool:
    if row + height > len(grid) or not grid or col + width > len(grid[0]):
        return False
    for r in range(row, row + height):
        for c in range(col, col + width):
            if grid[r][c] != EMPTY:
                return False
    return True


def fill(grid: Grid, row: int, col: int, width: int, height: int, marker: str = FILLED) -> None:
    for r in range(row, row + height):
        for c in range(col, col + width):
            grid[r][c] = marker


def place_card(grid: Grid, card_type: str, shape: str, scan_floor: int = 0) -> Tuple[Placement | None, int]:
    """Place one card, returning the placement (or None) and the next scan floor."""

    height, width = parse_shape(shape)
    cols = len(grid[0]) if grid else 0
    if width > cols:
        return None, scan_floor
    for row in range(scan_floor, len(grid)):
        for col in range(0, cols - width + 1):
            if can_place(grid, row, col, width, height):
                fill(grid, row, col, width, height)
                return Placement(row, col, width, height, card_type), row
    return None, scan_floor


def arrange_grid(grid_size: Tuple[int, int], cards: Sequence[Tuple[str, str]]) -> List[Placement]:
    """Pack ``(card_type, shape)`` pairs into a ``(rows, cols)`` grid."""

    rows, cols = grid_size
    if rows < 0 or cols < 0:
        raise ShapeError(f"Grid size must not be negative: {grid_size!r}")
    grid = new_grid(rows, cols)
    scan_floor = 0
    placements: List[Placement] = []
    for card_type, shape in cards:
        placement, scan_floor = place_card(grid, card_type, shape, scan_floor)
        if placement is not None:
            placements.append(placement)
    return placements


def render_ascii(placements: Sequence[Placement], rows: int, cols: int, *, trim: bool = True) -> List[str]:
    """Draw placements as text rows, one character per cell.

    Each card is marked with the last digit of its output position; empty
    cells are dots. Trailing empty rows are dropped when ``trim`` is set.
    """

    canvas = [["."] * cols for _ in range(rows)]
    for idx, placement in enumerate(placements):
        mark = str((idx + 1) % 10)
        for r, c in placement.cells():
            canvas[r][c] = mark
    lines = ["".join(row) for row in canvas]
    if trim:
        used = max((p.end_row for p in placements), default=0)
        lines = lines[:used]
    return lines


__all__ = [
    "EMPTY",
    "FILLED",
    "Placement",
    "arrange_grid",
    "can_place",
    "fill",
    "new_grid",
    "parse_shape",
    "place_card",
    "render_ascii",
]
