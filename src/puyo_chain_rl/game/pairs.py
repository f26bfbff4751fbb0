from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Sequence, Tuple

from .field import Color, Coordinate, Field


class Orientation(IntEnum):
    """Direction of the child cell relative to the parent."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def next(self) -> "Orientation":
        return Orientation((self + 1) % 4)


CHILD_OFFSETS = {
    Orientation.UP: (-1, 0),
    Orientation.RIGHT: (0, 1),
    Orientation.DOWN: (1, 0),
    Orientation.LEFT: (0, -1),
}

# Column shifts tried in order when a rotation is blocked.
KICK_SHIFTS: Tuple[int, ...] = (-1, 1)


@dataclass(frozen=True)
class Pair:
    parent: Coordinate
    child: Coordinate
    colors: Tuple[Color, Color]
    orientation: Orientation = Orientation.DOWN

    @property
    def positions(self) -> Tuple[Coordinate, Coordinate]:
        return (self.parent, self.child)

    def shifted(self, d_row: int, d_col: int) -> "Pair":
        return Pair(
            parent=(self.parent[0] + d_row, self.parent[1] + d_col),
            child=(self.child[0] + d_row, self.child[1] + d_col),
            colors=self.colors,
            orientation=self.orientation,
        )

    def oriented(self, orientation: Orientation) -> "Pair":
        d_row, d_col = CHILD_OFFSETS[orientation]
        return Pair(
            parent=self.parent,
            child=(self.parent[0] + d_row, self.parent[1] + d_col),
            colors=self.colors,
            orientation=orientation,
        )


def spawn_pair(rng: Any, cols: int, palette: Sequence[Color]) -> Pair:
    """Create a pair at the top-center cell with the child below the parent.

    `rng` only needs a `choice()` method; each color is drawn independently.
    """
    mid = cols // 2
    colors = (Color(rng.choice(palette)), Color(rng.choice(palette)))
    return Pair(parent=(0, mid), child=(1, mid), colors=colors, orientation=Orientation.DOWN)


def move_pair(pair: Pair, field: Field, d_row: int, d_col: int) -> Pair:
    """Shift both cells, or return `pair` itself when the target is blocked."""
    candidate = pair.shifted(d_row, d_col)
    if field.can_place(candidate.positions):
        return candidate
    return pair


def rotate_pair(pair: Pair, field: Field, wall_kick: bool = True) -> Pair:
    """Rotate the child one step clockwise around the parent.

    With `wall_kick`, a blocked rotation is retried with both cells shifted one
    column left, then one column right. Returns `pair` itself if nothing fits.
    """
    rotated = pair.oriented(pair.orientation.next())
    if field.can_place(rotated.positions):
        return rotated
    if wall_kick:
        for shift in KICK_SHIFTS:
            kicked = rotated.shifted(0, shift)
            if field.can_place(kicked.positions):
                return kicked
    return pair


def is_blocked_from_spawning(field: Field, pair: Pair) -> bool:
    return not field.can_place(pair.positions)
