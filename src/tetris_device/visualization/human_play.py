from __future__ import annotations

from typing import Dict

import pygame

from tetris_device.device import create
from tetris_device.game import Action
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_r: Action.RESET,
}


def run(gravity_ms: int = 600) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        session = create()
        renderer = Renderer(cell_size=28)

        screen = pygame.display.set_mode(renderer.window_size(session.snapshot()))
        pygame.display.set_caption("Tetris Device - Human Play")

        last_fall = pygame.time.get_ticks()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            session.apply_control_code(action)

            # Gravity is an external tick; the engine never falls on its own
            now = pygame.time.get_ticks()
            if now - last_fall >= gravity_ms:
                session.apply_control_code(Action.DOWN)
                last_fall = now

            renderer.draw(screen, session.snapshot())
            clock.tick(60)
        print(f"Final score: {session.score}")
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
