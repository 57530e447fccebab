"""Reading and validating ``.cub`` scene files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from itertools import takewhile
from typing import Optional

from PIL import Image

LONG_MAX = 2**63 - 1

_SPACES = " \t\n\v\f\r"
_DIGITS = "0123456789"
_MAP_CHARS = "01NSEW"
_PLAYER_CHARS = "NSEW"
_ELEMENT_KEYS = ("NO", "SO", "WE", "EA", "F", "C")
_TEXTURE_KEYS = ("NO", "SO", "WE", "EA")
_NUMBER = re.compile(r"[ \t\n\v\f\r]*[-+]?[0-9]*[ \t\n\v\f\r]*")


class SceneError(Exception):
    """Raised when a scene file or its contents are invalid."""


@dataclass
class Texture:
    """A wall texture: its path and, once loaded, its RGB image."""

    path: str
    image: Optional[Image.Image] = None
    width: int = 0
    height: int = 0


@dataclass
class Scene:
    """A fully validated scene: textures, colours and map rows."""

    textures: dict[str, Texture]
    floor: int
    ceiling: int
    rows: list[str] = field(default_factory=list)


def is_space(char: str) -> bool:
    """True for a blank or one of the control characters TAB to CR."""
    return char == " " or "\t" <= char <= "\r"


def is_all_space(text: Optional[str]) -> bool:
    """True if ``text`` holds only whitespace; False for ``None``."""
    if text is None:
        return False
    return all(is_space(char) for char in text)


def parse_long(text: str) -> int:
    """Parse a leading signed decimal integer, as ``atol`` would.

    Leading whitespace and one sign are accepted; parsing stops at the
    first non-digit. Raises ``OverflowError`` past a signed 64-bit long.
    """
    rest = text.lstrip(_SPACES)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = "".join(takewhile(lambda char: char in _DIGITS, rest))
    value = int(digits) if digits else 0
    if value > LONG_MAX:
        raise OverflowError(f"{text!r} does not fit in a long")
    return sign * value


def valid_number(text: str) -> bool:
    """True if ``text`` is a single colour component between 0 and 255."""
    if not _NUMBER.fullmatch(text) or is_all_space(text) or text in ("-", "+"):
        return False
    try:
        value = parse_long(text)
    except OverflowError:
        return False
    return 0 <= value <= 255


def parse_rgb(text: str) -> int:
    """Parse ``R,G,B`` into a packed ``0xRRGGBB`` integer."""
    if text.count(",") != 2:
        raise SceneError("Invalid color format (R,G,B)")
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3 or not all(valid_number(part) for part in parts):
        raise SceneError("Invalid RGB value")
    red, green, blue = (parse_long(part) for part in parts)
    return (red << 16) | (green << 8) | blue


def valid_file_name(name: Optional[str]) -> bool:
    """True if ``name`` ends with ``.cub``."""
    return bool(name) and len(name) >= 4 and name.endswith(".cub")


def read_lines(path: str) -> list[str]:
    """Read a file as lines split on newline, each keeping its newline."""
    try:
        with open(path, "rb") as handle:
            return [line.decode("latin-1") for line in handle]
    except OSError as exc:
        raise SceneError("Invalid file path or permissions") from exc


def _element_value(rest: str) -> str:
    if rest and not is_space(rest[0]):
        raise SceneError("Need space between element and value")
    value = rest.strip(_SPACES)
    if not value:
        raise SceneError("Empty Element value")
    return value


def parse_elements(lines: list[str]) -> tuple[dict[str, str], list[Optional[str]]]:
    """Pick the six scene elements out of ``lines``.

    Returns the element values keyed by identifier, and ``lines`` with
    every consumed element line replaced by ``None``.
    """
    counts = dict.fromkeys(_ELEMENT_KEYS, 0)
    elements: dict[str, str] = {}
    remaining: list[Optional[str]] = []
    for line in lines:
        if any(count > 1 for count in counts.values()):
            raise SceneError("Duplicate Element")
        stripped = line.lstrip(_SPACES)
        key = next((k for k in _ELEMENT_KEYS if stripped.startswith(k)), None)
        if key is None:
            if stripped and stripped[0] not in _MAP_CHARS:
                raise SceneError("Invalid Map Character")
            remaining.append(line)
            continue
        counts[key] += 1
        elements[key] = _element_value(stripped[len(key):])
        remaining.append(None)
    if len(elements) != len(_ELEMENT_KEYS):
        raise SceneError("Missing Element")
    return elements, remaining


def _check_characters(line: str) -> None:
    for char in line:
        if char not in _MAP_CHARS and not is_space(char):
            raise SceneError("Invalid Map Character")
        if char == "\t":
            raise SceneError("Map should not contain tabs")


def build_map(lines: list[Optional[str]]) -> list[str]:
    """Turn the lines left after the elements into map rows."""
    start = next(
        (index for index, line in enumerate(lines)
         if line is not None and not is_all_space(line)),
        len(lines),
    )
    body = lines[start:]
    rows: list[str] = []
    for line, following in zip(body, [*body[1:], None]):
        if line is None:
            raise SceneError("Element after Map")
        if not is_all_space(line) and is_all_space(following):
            raise SceneError("Incorrect Map Structure: one or more empty lines")
        _check_characters(line)
        rows.append(line.rstrip("\n"))
    return rows


def _touches_void(rows: list[str], i: int, j: int) -> bool:
    row = rows[i]
    if i == 0 or j == 0 or i == len(rows) - 1 or j == len(row) - 1:
        return True
    above, below = rows[i - 1], rows[i + 1]
    if j >= len(below) or j >= len(above):
        return True
    return any(is_space(char) for char in (row[j - 1], row[j + 1], above[j], below[j]))


def check_map(rows: list[str]) -> None:
    """Raise unless every floor and player cell is enclosed by walls."""
    for i, row in enumerate(rows):
        for j, cell in enumerate(row):
            if cell != "0" and cell not in _PLAYER_CHARS:
                continue
            if _touches_void(rows, i, j):
                if cell == "0":
                    raise SceneError("Map must be surrounded by walls")
                raise SceneError("Player can't be outside the map")


def check_player(rows: list[str]) -> None:
    """Raise unless the map holds exactly one player start."""
    count = sum(1 for row in rows for cell in row if cell in _PLAYER_CHARS)
    if count == 0:
        raise SceneError("Map must have a player (N, S, E, W)")
    if count > 1:
        raise SceneError("Map must have only one player")


def load_texture(path: str, label: str) -> Texture:
    """Load an image file as an RGB texture."""
    try:
        with Image.open(path) as opened:
            image = opened.convert("RGB")
    except (OSError, ValueError) as exc:
        raise SceneError(f"Failed to load the {label} texture file") from exc
    return Texture(path, image, image.width, image.height)


def parse_scene(path: str, load_textures: bool = True) -> Scene:
    """Read and validate a whole scene file."""
    lines = read_lines(path)
    if not lines:
        raise SceneError("Empty Map File")
    elements, remaining = parse_elements(lines)
    textures = {
        key: load_texture(elements[key], key) if load_textures else Texture(elements[key])
        for key in _TEXTURE_KEYS
    }
    floor = parse_rgb(elements["F"])
    ceiling = parse_rgb(elements["C"])
    rows = build_map(remaining)
    check_map(rows)
    check_player(rows)
    return Scene(textures=textures, floor=floor, ceiling=ceiling, rows=rows)


def parse_args(argv: list[str], load_textures: bool = True) -> Scene:
    """Validate the command-line arguments (without program name) and parse."""
    if len(argv) != 1:
        raise SceneError("Invalid Argument: takes one argument")
    if not valid_file_name(argv[0]):
        raise SceneError("Invalid file name: must end with .cub")
    return parse_scene(argv[0], load_textures)