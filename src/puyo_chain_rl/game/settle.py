"""Chain resolution for a landed field.

A landing starts a `Settlement`, which walks the erase/compact loop one phase
at a time:

    FIND -> (no groups) -> DONE
    FIND -> ERASE -> COMPACT -> FIND -> ...

Stepping through phases lets a viewer show the highlighted groups and the
falling cells between steps. `run()` (or `resolve_chain`) does the whole loop
at once and produces the same field and score.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import List, Optional, Tuple

from .field import Field
from .groups import Group, find_groups
from .rules import ScoringRules


class SettlePhase(Enum):
    FIND = "find"
    ERASE = "erase"
    COMPACT = "compact"
    DONE = "done"


@dataclass(frozen=True)
class ChainStep:
    chain: int  # 1-based
    groups: Tuple[Group, ...]
    cleared: int
    gained: int


@dataclass
class ChainResult:
    score: int = 0
    chains: int = 0
    cleared: int = 0
    steps: List[ChainStep] = dataclass_field(default_factory=list)


class Settlement:
    def __init__(self, field: Field, rules: Optional[ScoringRules] = None, min_group_size: int = 4) -> None:
        self.field = field
        self.rules = rules or ScoringRules()
        self.min_group_size = int(min_group_size)
        self.phase = SettlePhase.FIND
        self.chain_index = 0
        self.groups: List[Group] = []
        self.result = ChainResult()

    @property
    def done(self) -> bool:
        return self.phase is SettlePhase.DONE

    @property
    def erasing(self) -> Tuple[Group, ...]:
        """Groups found but not yet erased."""
        if self.phase is SettlePhase.ERASE:
            return tuple(self.groups)
        return ()

    def advance(self) -> SettlePhase:
        if self.phase is SettlePhase.FIND:
            self.groups = find_groups(self.field, self.min_group_size)
            self.phase = SettlePhase.ERASE if self.groups else SettlePhase.DONE
        elif self.phase is SettlePhase.ERASE:
            self._erase()
            self.phase = SettlePhase.COMPACT
        elif self.phase is SettlePhase.COMPACT:
            self.field.compact()
            self.chain_index += 1
            self.phase = SettlePhase.FIND
        return self.phase

    def _erase(self) -> None:
        cleared = sum(len(group) for group in self.groups)
        gained = self.rules.score_for_chain(cleared, self.chain_index)
        for group in self.groups:
            self.field.erase(group.cells)
        step = ChainStep(chain=self.chain_index + 1, groups=tuple(self.groups), cleared=cleared, gained=gained)
        self.result.steps.append(step)
        self.result.score += gained
        self.result.cleared += cleared
        self.result.chains = step.chain
        self.groups = []

    def run(self) -> ChainResult:
        while not self.done:
            self.advance()
        return self.result


def resolve_chain(field: Field, rules: Optional[ScoringRules] = None, min_group_size: int = 4) -> ChainResult:
    """Clear groups and let the field fall until nothing else matches."""
    return Settlement(field, rules, min_group_size).run()
