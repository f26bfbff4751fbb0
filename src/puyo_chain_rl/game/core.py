from __future__ import annotations

import logging
import random
from dataclasses import dataclass, fields
from enum import Enum, IntEnum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from .field import DEFAULT_PALETTE, Color, Field
from .groups import Group
from .pairs import Pair, is_blocked_from_spawning, move_pair, rotate_pair, spawn_pair
from .present import present
from .rules import ScoringRules
from .settle import SettlePhase, Settlement


logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


class Action(IntEnum):
    NONE = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    TOGGLE_PAUSE = 5
    RESET = 6


class SessionState(Enum):
    DROPPING = "dropping"
    SETTLING = "settling"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def _to_color(value: Any) -> Color:
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        try:
            return Color[value.upper()]
        except KeyError:
            raise ConfigError(f"unknown palette color {value!r}") from None
    try:
        return Color(value)
    except ValueError:
        raise ConfigError(f"unknown palette color {value!r}") from None


@dataclass
class GameConfig:
    rows: int = 12
    cols: int = 6
    min_group_size: int = 4
    palette: Sequence[Any] = DEFAULT_PALETTE
    drop_interval_ms: int = 900
    wall_kick: bool = True
    pausable: bool = True
    # Presentation pauses between settlement phases; they never change the outcome.
    erase_delay_ms: int = 400
    compact_delay_ms: int = 300
    chain_delay_ms: int = 200
    points_per_cell: int = 10
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows < 2:
            raise ConfigError(f"rows must be at least 2, got {self.rows}")
        if self.cols < 1:
            raise ConfigError(f"cols must be positive, got {self.cols}")
        if self.min_group_size < 2:
            raise ConfigError(f"min_group_size must be at least 2, got {self.min_group_size}")
        if not self.palette:
            raise ConfigError("palette must contain at least one color")
        self.palette = tuple(_to_color(c) for c in self.palette)
        if self.drop_interval_ms <= 0:
            raise ConfigError(f"drop_interval_ms must be positive, got {self.drop_interval_ms}")
        for name in ("erase_delay_ms", "compact_delay_ms", "chain_delay_ms"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.points_per_cell <= 0:
            raise ConfigError(f"points_per_cell must be positive, got {self.points_per_cell}")

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigError(f"unknown option(s): {', '.join(unknown)}")
        return cls(**dict(options))


class PuyoGame:
    """Single-player session: spawning, drop ticks, landing and chain settling.

    Time only advances through `update(elapsed_ms)` (or direct `tick()` calls),
    so the session is fully deterministic given its color source.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 rng: Optional[Any] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules(points_per_cell=self.config.points_per_cell)
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.field = Field(self.config.rows, self.config.cols)
        self.score = 0
        self.state = SessionState.DROPPING
        self.pair: Optional[Pair] = None
        self.next_pair: Optional[Pair] = None
        self.settlement: Optional[Settlement] = None
        self.last_chain = 0
        self.max_chain = 0
        self.total_cleared = 0
        self.pairs_placed = 0
        self._state_before_pause = SessionState.DROPPING
        self._drop_elapsed = 0
        self._settle_elapsed = 0
        self._settle_wait = 0
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None and hasattr(self.rng, "seed"):
            self.rng.seed(seed)
        self.field.reset()
        self.score = 0
        self.last_chain = 0
        self.max_chain = 0
        self.total_cleared = 0
        self.pairs_placed = 0
        self.settlement = None
        self._drop_elapsed = 0
        self._settle_elapsed = 0
        self._settle_wait = 0
        self.pair = self._new_pair()
        self.next_pair = self._new_pair()
        self.state = SessionState.DROPPING
        self._state_before_pause = SessionState.DROPPING

    def _new_pair(self) -> Pair:
        return spawn_pair(self.rng, self.config.cols, self.config.palette)

    # Input

    def _can_control(self) -> bool:
        return self.state is SessionState.DROPPING and self.pair is not None

    def _apply_move(self, d_row: int, d_col: int) -> bool:
        if not self._can_control():
            return False
        moved = move_pair(self.pair, self.field, d_row, d_col)
        if moved is self.pair:
            return False
        self.pair = moved
        return True

    def move_left(self) -> bool:
        return self._apply_move(0, -1)

    def move_right(self) -> bool:
        return self._apply_move(0, 1)

    def soft_drop(self) -> bool:
        return self._apply_move(1, 0)

    def rotate(self) -> bool:
        if not self._can_control():
            return False
        rotated = rotate_pair(self.pair, self.field, wall_kick=self.config.wall_kick)
        if rotated is self.pair:
            return False
        self.pair = rotated
        return True

    def toggle_pause(self) -> bool:
        if not self.config.pausable or self.state is SessionState.GAME_OVER:
            return False
        if self.state is SessionState.PAUSED:
            self.state = self._state_before_pause
        else:
            self._state_before_pause = self.state
            self.state = SessionState.PAUSED
        return True

    def handle(self, action: Action) -> bool:
        if action == Action.MOVE_LEFT:
            return self.move_left()
        if action == Action.MOVE_RIGHT:
            return self.move_right()
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.TOGGLE_PAUSE:
            return self.toggle_pause()
        if action == Action.RESET:
            self.reset()
            return True
        return False

    # Time

    def tick(self) -> None:
        """One gravity step for the active pair; lands it when it cannot fall."""
        if not self._can_control():
            return
        moved = move_pair(self.pair, self.field, 1, 0)
        if moved is not self.pair:
            self.pair = moved
            return
        self._land()

    def _land(self) -> None:
        assert self.pair is not None
        self.field.place(self.pair.positions, self.pair.colors)
        logger.debug("pair landed at %s", self.pair.positions)
        self.pairs_placed += 1
        self.pair = None
        self.settlement = Settlement(self.field, self.rules, self.config.min_group_size)
        self.state = SessionState.SETTLING
        self._drop_elapsed = 0
        self._settle_elapsed = 0
        self._settle_wait = 0

    def _phase_delay(self, phase: SettlePhase) -> int:
        if phase is SettlePhase.ERASE:
            return self.config.erase_delay_ms
        if phase is SettlePhase.COMPACT:
            return self.config.compact_delay_ms
        if phase is SettlePhase.FIND:
            return self.config.chain_delay_ms
        return 0

    def _advance_settlement(self) -> None:
        assert self.settlement is not None
        result = self.settlement.result
        recorded = len(result.steps)
        phase = self.settlement.advance()
        for step in result.steps[recorded:]:
            self.score += step.gained
            self.total_cleared += step.cleared
        if phase is SettlePhase.DONE:
            self._finish_settlement()
        else:
            self._settle_wait = self._phase_delay(phase)

    def _finish_settlement(self) -> None:
        assert self.settlement is not None
        result = self.settlement.result
        self.settlement = None
        # Cells left hanging by a sideways landing fall before the next spawn.
        self.field.compact()
        self.last_chain = result.chains
        self.max_chain = max(self.max_chain, result.chains)
        if result.chains:
            logger.debug("%d chain(s) cleared %d cells for %d points", result.chains, result.cleared, result.score)
        self._settle_elapsed = 0
        self._settle_wait = 0
        self.pair = self.next_pair
        self.next_pair = self._new_pair()
        if is_blocked_from_spawning(self.field, self.pair):
            logger.debug("spawn blocked at %s, game over with score %d", self.pair.positions, self.score)
            self.state = SessionState.GAME_OVER
        else:
            self.state = SessionState.DROPPING

    def settle_now(self) -> None:
        """Finish any settlement in progress without waiting on its delays."""
        while self.state is SessionState.SETTLING and self.settlement is not None:
            self._advance_settlement()

    def update(self, elapsed_ms: int) -> None:
        if self.state is SessionState.DROPPING:
            self._drop_elapsed += elapsed_ms
            interval = self.config.drop_interval_ms
            while self.state is SessionState.DROPPING and self._drop_elapsed >= interval:
                self._drop_elapsed -= interval
                self.tick()
            if self.state is not SessionState.SETTLING:
                return
            # A fresh landing starts settling right away; leftover time is dropped.
            elapsed_ms = 0
        if self.state is SessionState.SETTLING:
            self._settle_elapsed += elapsed_ms
            while self.state is SessionState.SETTLING and self._settle_elapsed >= self._settle_wait:
                self._settle_elapsed -= self._settle_wait
                self._advance_settlement()

    # Read surface

    @property
    def game_over(self) -> bool:
        return self.state is SessionState.GAME_OVER

    @property
    def erasing(self) -> Tuple[Group, ...]:
        if self.settlement is None:
            return ()
        return self.settlement.erasing

    def get_state(self) -> np.ndarray:
        pair = None if self.state is SessionState.GAME_OVER else self.pair
        return present(self.field, pair, self.erasing)

    def get_info(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "state": self.state.value,
            "last_chain": self.last_chain,
            "max_chain": self.max_chain,
            "total_cleared": self.total_cleared,
            "pairs_placed": self.pairs_placed,
            "stack_height": self.field.get_max_height(),
        }
