"""Game state and keyboard handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from . import raycast
from .raycast import Frame, Player, find_player
from .scene import Scene

MOVE_SPEED = 0.5


class Key(IntEnum):
    """X11 key symbols the game understands."""

    ESC = 65307
    W = 119
    D = 100
    S = 115
    A = 97
    UP = 65362
    DOWN = 65364
    LEFT = 65361
    RIGHT = 65363


@dataclass
class Game:
    """A running game: the map, the player and the frame being drawn.

    ``map_x`` and ``map_y`` hold the cell reached by the most recent ray;
    movement collision is tested against that row and column.
    """

    rows: list[str]
    player: Player
    floor: int
    ceiling: int
    frame: Frame = field(default_factory=Frame)
    running: bool = True
    map_x: int = field(init=False)
    map_y: int = field(init=False)

    def __post_init__(self) -> None:
        self.map_x = int(self.player.pos.x)
        self.map_y = int(self.player.pos.y)

    @classmethod
    def from_scene(cls, scene: Scene) -> Game:
        """Start a game on a validated scene."""
        return cls(
            rows=list(scene.rows),
            player=find_player(scene.rows),
            floor=scene.floor,
            ceiling=scene.ceiling,
        )

    def render(self) -> Frame:
        """Redraw the frame and remember the cell the last ray reached."""
        hits = raycast.render(self.frame, self.rows, self.player,
                              self.ceiling, self.floor)
        last = hits[-1]
        self.map_x, self.map_y = last.map_x, last.map_y
        return self.frame

    def _cell(self, y: int, x: int) -> str:
        if 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y]):
            return self.rows[y][x]
        return ""

    def _motion(self, key: int) -> tuple[float, float] | None:
        dir_x, dir_y = self.player.dir.x, self.player.dir.y
        return {
            Key.W: (dir_x, dir_y),
            Key.S: (-dir_x, -dir_y),
            Key.D: (dir_y, -dir_x),
            Key.A: (-dir_y, dir_x),
        }.get(key)

    def handle_key(self, key: int) -> bool:
        """Apply a key press; return False once the game should stop."""
        if key == Key.ESC:
            self.running = False
            return False
        motion = self._motion(key)
        if motion is not None:
            step_x, step_y = motion
            pos = self.player.pos
            new_x = pos.x + step_x * MOVE_SPEED
            if self._cell(self.map_y, int(new_x)) == "0":
                pos.x = new_x
            new_y = pos.y + step_y * MOVE_SPEED
            if self._cell(int(new_y), self.map_x) == "0":
                pos.y = new_y
        self.render()
        return True