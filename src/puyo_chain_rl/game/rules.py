from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_cell: int = 10

    def score_for_chain(self, cells_cleared: int, chain_index: int) -> int:
        """Score one resolution step; `chain_index` is zero-based."""
        if cells_cleared <= 0:
            return 0
        return cells_cleared * (chain_index + 1) * self.points_per_cell
