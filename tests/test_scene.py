import pytest
from PIL import Image

from cubecaster.scene import (
    LONG_MAX,
    SceneError,
    Texture,
    build_map,
    check_map,
    check_player,
    is_all_space,
    is_space,
    load_texture,
    parse_args,
    parse_elements,
    parse_long,
    parse_rgb,
    parse_scene,
    read_lines,
    valid_file_name,
    valid_number,
)

HEADER = (
    "NO ./north.xpm\n"
    "SO ./south.xpm\n"
    "WE ./west.xpm\n"
    "EA ./east.xpm\n"
    "\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
    "\n"
)
MAP = "1111\n1N01\n1111\n"


def _write(tmp_path, text, name="level.cub"):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


@pytest.mark.parametrize(
    "char, expected",
    [(" ", True), ("\t", True), ("\n", True), ("\r", True), ("\v", True),
     ("a", False), ("0", False), ("", False)],
)
def test_is_space(char, expected):
    assert is_space(char) is expected


def test_is_all_space():
    assert is_all_space("  \t\n") is True
    assert is_all_space("") is True
    assert is_all_space(" 1 ") is False
    assert is_all_space(None) is False


def test_parse_long_basic():
    assert parse_long("  -42") == -42
    assert parse_long("+17") == 17
    assert parse_long("12abc") == 12
    assert parse_long("") == 0


def test_parse_long_limits():
    assert parse_long(str(LONG_MAX)) == LONG_MAX
    with pytest.raises(OverflowError):
        parse_long("9223372036854775808")
    with pytest.raises(OverflowError):
        parse_long("-9223372036854775808")


@pytest.mark.parametrize(
    "text, expected",
    [("255", True), ("0", True), (" 7 ", True), ("+3", True),
     ("256", False), ("-1", False), ("+", False), ("-", False),
     ("", False), ("   ", False), ("1a", False), ("1 2", False),
     ("99999999999999999999", False)],
)
def test_valid_number(text, expected):
    assert valid_number(text) is expected


def test_parse_rgb_channels():
    value = parse_rgb(" 12 , 34 , 56 ")
    assert value >> 16 == 12
    assert (value >> 8) & 0xFF == 34
    assert value & 0xFF == 56


@pytest.mark.parametrize(
    "text, message",
    [("1,2", "Invalid color format (R,G,B)"),
     ("1,2,3,4", "Invalid color format (R,G,B)"),
     ("1,,2", "Invalid RGB value"),
     ("1,2,300", "Invalid RGB value")],
)
def test_parse_rgb_errors(text, message):
    with pytest.raises(SceneError) as info:
        parse_rgb(text)
    assert str(info.value) == message


@pytest.mark.parametrize(
    "name, expected",
    [("map.cub", True), (".cub", True), ("cub", False), ("map.cube", False),
     ("map.cub.txt", False), ("", False), (None, False)],
)
def test_valid_file_name(name, expected):
    assert valid_file_name(name) is expected


def test_read_lines_keeps_newlines(tmp_path):
    path = _write(tmp_path, "a\nb\n\nc", name="x.cub")
    assert read_lines(path) == ["a\n", "b\n", "\n", "c"]


def test_read_lines_missing_file(tmp_path):
    with pytest.raises(SceneError) as info:
        read_lines(str(tmp_path / "absent.cub"))
    assert str(info.value) == "Invalid file path or permissions"


def test_parse_elements_marks_consumed_lines():
    lines = HEADER.splitlines(keepends=True) + MAP.splitlines(keepends=True)
    elements, remaining = parse_elements(lines)
    assert elements["NO"] == "./north.xpm"
    assert elements["F"] == "220,100,0"
    assert len(remaining) == len(lines)
    assert remaining[:4] == [None, None, None, None]
    assert remaining[-3:] == ["1111\n", "1N01\n", "1111\n"]


def test_build_map_skips_leading_blank_and_element_lines():
    rows = build_map(["\n", None, "  \n", "111\n", "1N1\n", "111"])
    assert rows == ["111", "1N1", "111"]


@pytest.mark.parametrize(
    "lines, message",
    [(["111\n", "\n", "111\n"], "Incorrect Map Structure: one or more empty lines"),
     (["111\n", None], "Element after Map"),
     (["1X1\n"], "Invalid Map Character"),
     (["1\t1\n"], "Map should not contain tabs")],
)
def test_build_map_errors(lines, message):
    with pytest.raises(SceneError) as info:
        build_map(lines)
    assert str(info.value) == message


def test_check_map_accepts_closed_map():
    rows = ["  111", "11101", "1N001", "11111"]
    check_map(rows)
    check_player(rows)
    assert rows == ["  111", "11101", "1N001", "11111"]


@pytest.mark.parametrize(
    "rows, message",
    [(["1111", "1N00", "1111"], "Map must be surrounded by walls"),
     (["1111", "10 1", "1111"], "Map must be surrounded by walls"),
     (["N111", "1001", "1111"], "Player can't be outside the map")],
)
def test_check_map_errors(rows, message):
    with pytest.raises(SceneError) as info:
        check_map(rows)
    assert str(info.value) == message


@pytest.mark.parametrize(
    "rows, message",
    [(["111", "101", "111"], "Map must have a player (N, S, E, W)"),
     (["1N1", "1S1"], "Map must have only one player")],
)
def test_check_player_errors(rows, message):
    with pytest.raises(SceneError) as info:
        check_player(rows)
    assert str(info.value) == message


def test_parse_scene_valid(tmp_path):
    scene = parse_scene(_write(tmp_path, HEADER + MAP), load_textures=False)
    assert scene.rows == ["1111", "1N01", "1111"]
    assert scene.textures["NO"] == Texture("./north.xpm")
    assert scene.textures["EA"].path == "./east.xpm"
    assert scene.floor >> 16 == 220
    assert (scene.floor >> 8) & 0xFF == 100
    assert scene.ceiling & 0xFF == 0


@pytest.mark.parametrize(
    "text, message",
    [("", "Empty Map File"),
     (HEADER.replace("C 225,30,0\n", "") + MAP, "Missing Element"),
     (HEADER + "NO ./again.xpm\n" + MAP, "Duplicate Element"),
     (HEADER.replace("NO ./north.xpm", "NO./north.xpm") + MAP,
      "Need space between element and value"),
     (HEADER.replace("SO ./south.xpm", "SO   ") + MAP, "Empty Element value"),
     (HEADER + "X\n" + MAP, "Invalid Map Character"),
     (HEADER.replace("F 220,100,0", "F 256,0,0") + MAP, "Invalid RGB value"),
     (HEADER.replace("C 225,30,0\n", "") + MAP + "C 225,30,0\n", "Element after Map"),
     (HEADER + MAP + "\n", "Incorrect Map Structure: one or more empty lines")],
    ids=["empty_file", "missing_element", "duplicate_element", "no_space",
         "empty_value", "invalid_line", "bad_colour", "element_after_map",
         "trailing_blank_line"],
)
def test_parse_scene_errors(tmp_path, text, message):
    path = _write(tmp_path, text)
    with pytest.raises(SceneError) as info:
        parse_scene(path, load_textures=False)
    assert str(info.value) == message


def test_load_texture(tmp_path):
    path = tmp_path / "wall.png"
    Image.new("RGB", (4, 3), (10, 20, 30)).save(path)
    texture = load_texture(str(path), "NO")
    assert (texture.width, texture.height) == (4, 3)
    assert texture.image.getpixel((0, 0)) == (10, 20, 30)


def test_load_texture_missing(tmp_path):
    with pytest.raises(SceneError) as info:
        load_texture(str(tmp_path / "none.png"), "NO")
    assert str(info.value) == "Failed to load the NO texture file"


def test_parse_scene_loads_textures(tmp_path):
    paths = {}
    for key in ("NO", "SO", "WE", "EA"):
        image_path = tmp_path / f"{key}.png"
        Image.new("RGB", (4, 3)).save(image_path)
        paths[key] = str(image_path)
    header = "".join(f"{key} {paths[key]}\n" for key in paths) + "F 1,2,3\nC 4,5,6\n\n"
    scene = parse_scene(_write(tmp_path, header + MAP))
    assert all(scene.textures[key].width == 4 for key in paths)
    assert scene.textures["WE"].path == paths["WE"]


def test_parse_args(tmp_path):
    path = _write(tmp_path, HEADER + MAP)
    scene = parse_args([path], load_textures=False)
    assert scene.rows == ["1111", "1N01", "1111"]


@pytest.mark.parametrize(
    "argv, message",
    [([], "Invalid Argument: takes one argument"),
     (["a.cub", "b.cub"], "Invalid Argument: takes one argument"),
     (["level.txt"], "Invalid file name: must end with .cub")],
)
def test_parse_args_errors(argv, message):
    with pytest.raises(SceneError) as info:
        parse_args(argv, load_textures=False)
    assert str(info.value) == message