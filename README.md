# cubecaster

A small first-person grid raycaster. It reads a `.cub` scene file that names
wall textures, floor and ceiling colours and a map. It checks the file
thoroughly and then opens a 1280×720 window where you can walk around the map.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Running

```
cubecaster path/to/level.cub
```

The command takes exactly one argument: the path of a scene file whose name
ends in `.cub`. If the arguments or the file are wrong, or the window cannot be
opened, it prints `Error` and a one-line reason to standard error. It then exits
with status 1.

### Controls

| Key   | Action              |
|-------|---------------------|
| W     | move forward        |
| S     | move backward       |
| A / D | strafe left / right |
| Esc   | quit                |

Closing the window also quits. A step is half a cell. The x and y parts of a
step are each applied only if the cell they lead into is open floor (`0`).

## Scene file format

Before the map, a scene file holds six elements, one per line and in any order.
Blank lines between them are allowed:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE`, `EA`: image paths for each wall face. Each file must open
  as an image, in any format Pillow can read.
- `F`, `C`: floor and ceiling colours written as `R,G,B`. Each part is a whole
  number from 0 to 255 and may have surrounding whitespace.
- An identifier must be followed by whitespace and then a value. All six
  elements are required, and a repeated element is reported as a duplicate.
- Any other line before the map must start with a map character.

The map comes last:

```
111111
100101
1010N1
111111
```

- `0` is open floor, `1` is a wall, and spaces are void.
- Exactly one of `N`, `S`, `E`, `W` marks where the player starts and which way
  the player faces.
- The map must be closed by walls. No floor or player cell may lie on the edge
  of the map or next to a void cell.
- The map may not contain tabs or blank lines, and nothing may follow it. A
  blank line after the last row also counts as an error.

## What it does not do

- Walls are drawn in a single flat blue. The texture images are loaded and
  checked, but they are not drawn.
- The camera cannot turn. The arrow keys are recognised, but they only redraw
  the view.
- There is no minimap, sprites, doors, mouse look or sound.

## Using it as a library

```python
from cubecaster.scene import parse_scene, SceneError
from cubecaster.events import Game, Key

try:
    scene = parse_scene("level.cub", load_textures=False)
except SceneError as exc:
    print(exc)
else:
    game = Game.from_scene(scene)
    game.handle_key(Key.W)          # moves if possible, then redraws
    frame = game.render()
    print(hex(frame.get_pixel(640, 0)))  # top pixel of the middle column
```

The package has these modules:

- `cubecaster.scene`: `parse_scene` and `parse_args` read a scene and return a
  `Scene` (textures, `floor`, `ceiling` and map `rows`). They raise
  `SceneError` with a readable message on any problem. The separate steps are
  available too: `read_lines`, `parse_elements`, `parse_rgb`, `build_map`,
  `check_map`, `check_player` and `load_texture`.
- `cubecaster.raycast`: `find_player`, `cast_ray` (which returns a `RayHit`
  with the cell, the `Wall` side and the perpendicular distance), `draw_column`
  and `render`. They work on plain lists of map rows and a `Frame`, an RGBX
  pixel buffer with `put_pixel` and `get_pixel`.
- `cubecaster.events`: `Game`, which holds the game state. `Game.handle_key`
  takes a `Key` and returns `False` once Escape has been pressed.
- `cubecaster.app`: `run` shows a `Game` in a pygame window. `main` is the
  command-line entry point.