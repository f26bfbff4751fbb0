from __future__ import annotations

from typing import Sequence

from puyo_chain_rl.game import Color, Field, GameConfig, PuyoGame


class ScriptedColors:
    """Stand-in for `random.Random` that hands out colors in a fixed cycle."""

    def __init__(self, colors: Sequence[Color]) -> None:
        self.colors = list(colors)
        self.index = 0

    def choice(self, palette):
        color = self.colors[self.index % len(self.colors)]
        self.index += 1
        return color


def make_game(colors: Sequence[Color] = (Color.RED, Color.BLUE), **options) -> PuyoGame:
    """Game with deterministic pair colors; every spawn takes two colors from `colors`."""
    return PuyoGame(GameConfig(**options), rng=ScriptedColors(colors))


def load_field(game: PuyoGame, lines: Sequence[str]) -> None:
    game.field.cells[:, :] = Field.from_strings(lines).cells
