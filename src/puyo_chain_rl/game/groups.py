from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .field import EMPTY, Color, Coordinate, Field


NEIGHBOR_OFFSETS: Tuple[Coordinate, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(frozen=True)
class Group:
    color: Color
    cells: Tuple[Coordinate, ...]

    def __len__(self) -> int:
        return len(self.cells)


def _flood_fill(field: Field, start: Coordinate, visited: np.ndarray) -> List[Coordinate]:
    color = field.cells[start]
    stack = [start]
    cells: List[Coordinate] = []
    while stack:
        row, col = stack.pop()
        if not field.is_in_bounds(row, col) or visited[row, col]:
            continue
        if field.cells[row, col] != color:
            continue
        visited[row, col] = True
        cells.append((row, col))
        for d_row, d_col in NEIGHBOR_OFFSETS:
            stack.append((row + d_row, col + d_col))
    return cells


def find_groups(field: Field, min_size: int = 4) -> List[Group]:
    """Return every same-colored 4-connected region with at least `min_size` cells.

    Cells are scanned row-major from the top-left, so the output order is
    deterministic. An empty list means nothing can be cleared.
    """
    visited = np.zeros(field.cells.shape, dtype=np.bool_)
    groups: List[Group] = []
    for row in range(field.rows):
        for col in range(field.cols):
            if visited[row, col] or field.cells[row, col] == EMPTY:
                continue
            cells = _flood_fill(field, (row, col), visited)
            if len(cells) >= min_size:
                groups.append(Group(color=Color(int(field.cells[row, col])), cells=tuple(cells)))
    return groups
