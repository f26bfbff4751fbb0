from __future__ import annotations

import argparse
from typing import Dict, Optional

import pygame

from puyo_chain_rl.game import FIVE_COLOR_PALETTE, DEFAULT_PALETTE, Action, GameConfig, PuyoGame, SessionState
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_z: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.TOGGLE_PAUSE,
    pygame.K_ESCAPE: Action.RESET,
}


def _overlay_text(game: PuyoGame) -> Optional[str]:
    if game.state is SessionState.GAME_OVER:
        return "Game Over - Esc to retry"
    if game.state is SessionState.PAUSED:
        return "Paused"
    return None


def run(config: Optional[GameConfig] = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = PuyoGame(config)
        renderer = Renderer(cell_size=40)
        screen = pygame.display.set_mode(renderer.window_size(game.config.rows, game.config.cols))
        pygame.display.set_caption("Puyo Chain - Human Play")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_q:
                        running = False
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.handle(action)

            game.update(clock.get_time())
            renderer.draw(screen, game.get_state(), game.next_pair.colors, game.score, _overlay_text(game))
            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Puyo Chain with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--five-colors", action="store_true", help="use the five-color palette")
    p.add_argument("--no-wall-kick", action="store_true")
    p.add_argument("--drop-ms", type=int, default=900, help="drop tick interval in milliseconds")
    return p


def main() -> None:
    args = build_parser().parse_args()
    config = GameConfig(
        palette=FIVE_COLOR_PALETTE if args.five_colors else DEFAULT_PALETTE,
        drop_interval_ms=args.drop_ms,
        wall_kick=not args.no_wall_kick,
        random_seed=args.seed,
    )
    run(config)


if __name__ == "__main__":  # pragma: no cover
    main()
