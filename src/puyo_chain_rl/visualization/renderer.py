from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import pygame

from puyo_chain_rl.game import ERASING_OFFSET, Color


BACKGROUND = (30, 30, 36)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: BACKGROUND,
        1: (231, 76, 60),   # red
        2: (52, 152, 219),  # blue
        3: (46, 204, 113),  # green
        4: (241, 196, 15),  # yellow
        5: (155, 89, 182),  # purple
    }
    if v > ERASING_OFFSET:
        # Dim cells that are about to be erased
        r, g, b = palette.get(v - ERASING_OFFSET, (200, 200, 200))
        return ((r + BACKGROUND[0] * 2) // 3, (g + BACKGROUND[1] * 2) // 3, (b + BACKGROUND[2] * 2) // 3)
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 40, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        side_panel_w = 4 * self.cell_size
        return (cols * self.cell_size + side_panel_w + self.margin * 3, rows * self.cell_size + self.margin * 2)

    def _draw_cell(self, surf: pygame.Surface, x: int, y: int, v: int) -> None:
        color = _color_for_value(v)
        if v == 0:
            rect = pygame.Rect(x, y, self.cell_size - 1, self.cell_size - 1)
            pygame.draw.rect(surf, color, rect)
            return
        center = (x + self.cell_size // 2, y + self.cell_size // 2)
        pygame.draw.circle(surf, color, center, self.cell_size // 2 - 2)

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((20, 20, 26))
        for y in range(h):
            for x in range(w):
                self._draw_cell(surf, x * self.cell_size, y * self.cell_size, int(state[y, x]))
        return surf

    def draw(self, screen: pygame.Surface, state: np.ndarray, next_colors: Sequence[Color],
             score: int, overlay: Optional[str] = None) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        grid_surf = self._grid_surface(state)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))

        panel_x = self.margin * 2 + grid_surf.get_width()
        screen.blit(self._font.render("NEXT", True, (230, 230, 230)), (panel_x, self.margin))
        for i, color in enumerate(next_colors):
            self._draw_cell(screen, panel_x, self.margin + 30 + i * self.cell_size, int(color))
        score_y = self.margin + 40 + 2 * self.cell_size
        screen.blit(self._font.render("SCORE", True, (230, 230, 230)), (panel_x, score_y))
        screen.blit(self._font.render(str(score), True, (255, 255, 255)), (panel_x, score_y + 26))

        if overlay:
            text = self._font.render(overlay, True, (255, 255, 255))
            rect = text.get_rect(center=(self.margin + grid_surf.get_width() // 2, screen.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
