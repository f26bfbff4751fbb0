from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .field import EMPTY, Field
from .groups import Group
from .pairs import Pair


# Added to a cell value to mark it as part of a group about to be erased.
ERASING_OFFSET = 8


def present(field: Field, pair: Optional[Pair] = None, erasing: Iterable[Group] = ()) -> np.ndarray:
    """Composite view of the field for rendering or observation.

    Falling pair cells are written as negative color values; cells in
    `erasing` groups are shifted by `ERASING_OFFSET`. The field is not touched.
    """
    view = field.clone_state()
    for group in erasing:
        for row, col in group.cells:
            if view[row, col] != EMPTY:
                view[row, col] = int(view[row, col]) + ERASING_OFFSET
    if pair is not None:
        for (row, col), color in zip(pair.positions, pair.colors):
            if field.is_in_bounds(row, col):
                view[row, col] = -int(color)
    return view
