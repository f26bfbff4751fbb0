"""Game module for Puyo Chain RL.

Exports the core game engine and supporting classes:
- Field, Color: Grid representation, bounds and occupancy checks, compaction
- Pair, Orientation: Falling pair with move/rotate (wall-kick) rules
- find_groups, Group: Same-color connectivity detection
- Settlement, resolve_chain: Erase/compact chain loop with chain scoring
- ScoringRules: Chain scoring configuration
- PuyoGame, GameConfig: Session state machine (drop ticks, landing, pause, reset)
- present: Composite display view of a field, falling pair and erasing groups
"""

from .field import Color, Field, DEFAULT_PALETTE, FIVE_COLOR_PALETTE, EMPTY, format_field
from .pairs import Orientation, Pair, spawn_pair, move_pair, rotate_pair, is_blocked_from_spawning
from .groups import Group, find_groups
from .rules import ScoringRules
from .settle import ChainResult, ChainStep, Settlement, SettlePhase, resolve_chain
from .core import Action, ConfigError, GameConfig, PuyoGame, SessionState
from .present import ERASING_OFFSET, present

__all__ = [
    "Color",
    "Field",
    "DEFAULT_PALETTE",
    "FIVE_COLOR_PALETTE",
    "EMPTY",
    "format_field",
    "Orientation",
    "Pair",
    "spawn_pair",
    "move_pair",
    "rotate_pair",
    "is_blocked_from_spawning",
    "Group",
    "find_groups",
    "ScoringRules",
    "ChainResult",
    "ChainStep",
    "Settlement",
    "SettlePhase",
    "resolve_chain",
    "Action",
    "ConfigError",
    "GameConfig",
    "PuyoGame",
    "SessionState",
    "ERASING_OFFSET",
    "present",
]
