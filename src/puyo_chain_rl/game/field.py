from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]  # (row, col)

EMPTY = 0


class Color(IntEnum):
    RED = 1
    BLUE = 2
    GREEN = 3
    YELLOW = 4
    PURPLE = 5


DEFAULT_PALETTE: Tuple[Color, ...] = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)
FIVE_COLOR_PALETTE: Tuple[Color, ...] = tuple(Color)

_CHAR_FOR_COLOR = {
    Color.RED: "R",
    Color.BLUE: "B",
    Color.GREEN: "G",
    Color.YELLOW: "Y",
    Color.PURPLE: "P",
}
_COLOR_FOR_CHAR = {ch: color for color, ch in _CHAR_FOR_COLOR.items()}


class Field:
    """Fixed-size cell store for the puzzle.

    Cells hold 0 when empty or a `Color` value. Row 0 is the top (spawn) row,
    so gravity pulls toward higher row indices.
    """

    def __init__(self, rows: int, cols: int) -> None:
        self.rows = int(rows)
        self.cols = int(cols)
        self.cells = np.zeros((self.rows, self.cols), dtype=np.int8)

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Field":
        """Build a field from rows of `R B G Y P` and `.` characters."""
        if not lines:
            raise ValueError("field needs at least one row")
        width = len(lines[0])
        field = cls(len(lines), width)
        for row, line in enumerate(lines):
            if len(line) != width:
                raise ValueError(f"row {row} has width {len(line)}, expected {width}")
            for col, ch in enumerate(line):
                if ch == ".":
                    continue
                if ch not in _COLOR_FOR_CHAR:
                    raise ValueError(f"unknown cell character {ch!r} at ({row}, {col})")
                field.cells[row, col] = _COLOR_FOR_CHAR[ch]
        return field

    def reset(self) -> None:
        self.cells.fill(EMPTY)

    def is_in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_occupiable(self, row: int, col: int) -> bool:
        return self.is_in_bounds(row, col) and self.cells[row, col] == EMPTY

    def can_place(self, positions: Iterable[Coordinate]) -> bool:
        for row, col in positions:
            if not self.is_occupiable(row, col):
                return False
        return True

    def color_at(self, row: int, col: int) -> Optional[Color]:
        value = int(self.cells[row, col])
        return Color(value) if value != EMPTY else None

    def place(self, positions: Iterable[Coordinate], colors: Iterable[Color]) -> None:
        for (row, col), color in zip(positions, colors):
            self.cells[row, col] = int(color)

    def erase(self, positions: Iterable[Coordinate]) -> int:
        erased = 0
        for row, col in positions:
            if self.cells[row, col] != EMPTY:
                self.cells[row, col] = EMPTY
                erased += 1
        return erased

    def compact(self) -> int:
        """Let every column fall; return how many cells moved."""
        moved = 0
        for col in range(self.cols):
            column = self.cells[:, col]
            filled_rows = np.flatnonzero(column)
            if filled_rows.size == 0:
                continue
            target_rows = np.arange(self.rows - filled_rows.size, self.rows)
            moved += int(np.count_nonzero(filled_rows != target_rows))
            settled = np.zeros(self.rows, dtype=np.int8)
            settled[target_rows] = column[filled_rows]
            self.cells[:, col] = settled
        return moved

    def column(self, col: int) -> List[Color]:
        """Non-empty colors of a column, top to bottom."""
        return [Color(int(v)) for v in self.cells[:, col] if v != EMPTY]

    def count_filled(self) -> int:
        return int(np.count_nonzero(self.cells))

    def get_max_height(self) -> int:
        non_empty_rows = np.where(np.any(self.cells != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.rows - int(non_empty_rows[0])

    def clone(self) -> "Field":
        field = Field(self.rows, self.cols)
        field.cells = self.cells.copy()
        return field

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()


def format_field(field: Field) -> str:
    lines = []
    for row in field.cells:
        lines.append("".join(_CHAR_FOR_COLOR[Color(int(v))] if v else "." for v in row))
    return "\n".join(lines)
