"""Grid ray casting and the frame buffer it draws into."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

TITLE = "cub3D"
WIDTH = 1280
HEIGHT = 720
WALL_COLOR = 0x0000FF

_FAR = 1e30
_PLANE_X = 0.0
_PLANE_Y = 0.66
_DIRECTIONS = {
    "E": (1.0, 0.0),
    "S": (0.0, 1.0),
    "W": (-1.0, 0.0),
    "N": (0.0, -1.0),
}


@dataclass
class Vec:
    """A 2-D vector in map coordinates."""

    x: float
    y: float


@dataclass
class Player:
    """The viewer: a position on the map and a facing direction."""

    pos: Vec
    dir: Vec


class Wall(Enum):
    """Which side of a wall cell a ray struck."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


@dataclass(frozen=True)
class RayHit:
    """Where a ray stopped and its distance perpendicular to the camera."""

    map_x: int
    map_y: int
    wall: Wall
    perp_wall: float


class Frame:
    """A row-major RGBX pixel buffer."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame dimensions must be positive")
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height * 4)

    def _offset(self, x: int, y: int) -> int | None:
        if 0 <= x < self.width and 0 <= y < self.height:
            return (y * self.width + x) * 4
        return None

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel to ``0xRRGGBB``; coordinates outside are ignored."""
        offset = self._offset(x, y)
        if offset is None:
            return
        self.pixels[offset:offset + 3] = bytes(
            ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)
        )

    def get_pixel(self, x: int, y: int) -> int:
        """Return one pixel as ``0xRRGGBB``; 0 outside the frame."""
        offset = self._offset(x, y)
        if offset is None:
            return 0
        red, green, blue = self.pixels[offset:offset + 3]
        return (red << 16) | (green << 8) | blue


def find_player(rows: Sequence[str]) -> Player:
    """Locate the first player start cell, scanning rows top to bottom."""
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if cell in _DIRECTIONS:
                dir_x, dir_y = _DIRECTIONS[cell]
                return Player(Vec(float(x), float(y)), Vec(dir_x, dir_y))
    raise ValueError("map has no player start")


def _blocks(rows: Sequence[str], map_x: int, map_y: int) -> bool:
    if map_y < 0 or map_y >= len(rows):
        return True
    row = rows[map_y]
    if map_x < 0 or map_x >= len(row):
        return True
    return row[map_x] == "1"


def cast_ray(rows: Sequence[str], player: Player, camera_x: float) -> RayHit:
    """Step a ray through the grid until it meets a wall or leaves the map."""
    dir_x = player.dir.x + _PLANE_X * camera_x
    dir_y = player.dir.y + _PLANE_Y * camera_x
    map_x = int(player.pos.x)
    map_y = int(player.pos.y)
    delta_x = _FAR if dir_x == 0 else abs(1 / dir_x)
    delta_y = _FAR if dir_y == 0 else abs(1 / dir_y)

    if dir_x < 0:
        step_x = -1
        side_x = (player.pos.x - map_x) * delta_x
    else:
        step_x = 1
        side_x = (map_x + 1.0 - player.pos.x) * delta_x
    if dir_y < 0:
        step_y = -1
        side_y = (player.pos.y - map_y) * delta_y
    else:
        step_y = 1
        side_y = (map_y + 1.0 - player.pos.y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            wall = Wall.EAST if step_x > 0 else Wall.WEST
        else:
            side_y += delta_y
            map_y += step_y
            wall = Wall.SOUTH if step_y > 0 else Wall.NORTH
        if _blocks(rows, map_x, map_y):
            break

    if wall in (Wall.EAST, Wall.WEST):
        perp_wall = side_x - delta_x
    else:
        perp_wall = side_y - delta_y
    return RayHit(map_x, map_y, wall, perp_wall)


def draw_column(frame: Frame, x: int, perp_wall: float, ceiling: int, floor: int) -> None:
    """Paint column ``x``: ceiling above, the wall slice, floor below."""
    height = frame.height
    line_height = int(height / perp_wall) if perp_wall > 0 else height
    start = max(-(line_height // 2) + height // 2, 0)
    end = min(line_height // 2 + height // 2, height - 1)
    for y in range(height):
        if y < start:
            color = ceiling
        elif y <= end:
            color = WALL_COLOR
        else:
            color = floor
        frame.put_pixel(x, y, color)


def render(frame: Frame, rows: Sequence[str], player: Player,
           ceiling: int, floor: int) -> list[RayHit]:
    """Cast one ray per frame column and draw it; return the hits in order."""
    hits = []
    for x in range(frame.width):
        camera_x = 2 * x / float(frame.width) - 1
        hit = cast_ray(rows, player, camera_x)
        draw_column(frame, x, hit.perp_wall, ceiling, floor)
        hits.append(hit)
    return hits