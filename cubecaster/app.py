"""Window, event loop and command-line entry point."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

import pygame

from .events import Game, Key
from .raycast import TITLE, Frame
from .scene import SceneError, parse_args

_PYGAME_KEYS = {
    pygame.K_ESCAPE: Key.ESC,
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
}


def key_from_pygame(key: int) -> Optional[Key]:
    """Map a pygame key code to a game key, or None if it has no use."""
    return _PYGAME_KEYS.get(key)


def _show(screen: pygame.Surface, frame: Frame) -> None:
    image = pygame.image.frombuffer(bytes(frame.pixels),
                                    (frame.width, frame.height), "RGBX")
    screen.blit(image, (0, 0))
    pygame.display.flip()


def run(game: Game) -> None:
    """Open a window and play until it is closed or Escape is pressed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.frame.width, game.frame.height))
        pygame.display.set_caption(TITLE)
        _show(screen, game.render())
        clock = pygame.time.Clock()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                    break
                if event.type != pygame.KEYDOWN:
                    continue
                key = key_from_pygame(event.key)
                if key is None:
                    continue
                if not game.handle_key(key):
                    break
                _show(screen, game.frame)
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse the scene named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        scene = parse_args(args)
        run(Game.from_scene(scene))
    except (SceneError, pygame.error) as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())