from __future__ import annotations

from typing import Tuple

import pygame

from tetris_device.device import GameSnapshot


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v < 0:
        return (240, 200, 60)  # falling piece
    if v > 0:
        return (70, 200, 120)
    return (20, 20, 26)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_height: int = 60) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_height = panel_height
        self._font = None

    def window_size(self, snapshot: GameSnapshot) -> Tuple[int, int]:
        h, w = snapshot.board.shape
        return (w * self.cell_size + self.margin * 2,
                h * self.cell_size + self.margin * 2 + self.panel_height)

    def grid_surface(self, snapshot: GameSnapshot) -> pygame.Surface:
        h, w = snapshot.board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(snapshot.board[y, x])), rect)
        return surf

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.fill((10, 10, 14))
        screen.blit(self.grid_surface(snapshot), (self.margin, self.margin))

        text_y = self.margin * 2 + snapshot.board.shape[0] * self.cell_size
        score = self._font.render(f"Score: {snapshot.score}", True, (230, 230, 230))
        screen.blit(score, (self.margin, text_y))
        if snapshot.game_over:
            over = self._font.render("GAME OVER! Press R to restart", True, (240, 90, 90))
            screen.blit(over, (self.margin, text_y + 26))
        pygame.display.flip()
