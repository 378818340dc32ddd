"""
Maze layouts and the level -> layout table.

Legend: ' ' empty, '.' dot, 'P' power pill, '$' fruit, 'p' player start,
'#' wall, '-' ghost gate, 'H' ghost house, ';' tunnel.
"""
import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

MAZE_SMALL = [
    "############################",  # 0
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#P####.#####.##.#####.####P#",
    "#..........................#",
    "#.####.##.########.##.####.#",  # 5
    "#......##....##....##......#",
    "######.##### ## #####.######",
    "     #.##          ##.#     ",
    "     #.## ###--### ##.#     ",
    "######.## # HHHH # ##.######",  # 10
    ";;;;;;.   # HHHH #   .;;;;;;",
    "######.## # HHHH # ##.######",
    "     #.## ######## ##.#     ",
    "     #.##    $     ##.#     ",
    "######.## ######## ##.######",  # 15
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#P..##........p.......##..P#",
    "###.##.##.########.##.##.###",
    "#......##....##....##......#",  # 20
    "#.##########.##.##########.#",
    "#..........................#",
    "############################",
]

MAZE_REGULAR = [
    "############################",  # 0
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#P####.#####.##.#####.####P#",
    "#.####.#####.##.#####.####.#",
    "#..........................#",  # 5
    "#.####.##.########.##.####.#",
    "#.####.##.########.##.####.#",
    "#......##....##....##......#",
    "######.##### ## #####.######",
    "     #.##### ## #####.#     ",  # 10
    "     #.##          ##.#     ",
    "     #.## ###--### ##.#     ",
    "######.## #HHHHHH# ##.######",
    ";;;;;;.   #HHHHHH#   .;;;;;;",
    "######.## #HHHHHH# ##.######",  # 15
    "     #.##    $     ##.#     ",
    "     #.## ######## ##.#     ",
    "     #.## ######## ##.#     ",
    "######.## ######## ##.######",
    "#............##............#",  # 20
    "#.####.#####.##.#####.####.#",
    "#.####.#####.##.#####.####.#",
    "#P..##.......p .......##..P#",
    "###.##.##.########.##.##.###",
    "###.##.##.########.##.##.###",  # 25
    "#......##....##....##......#",
    "#.##########.##.##########.#",
    "#.##########.##.##########.#",
    "#..........................#",
    "############################",  # 30
]

MAZE_PINK = [
    "############################",  # 0
    "#......##..........##......#",
    "#P####.##.########.##.####P#",
    "#.####.##.########.##.####.#",
    "#..........................#",
    "###.##.#####.##.#####.##.###",  # 5
    "###.##.#####.##.#####.##.###",
    ";;;.##.......##.......##.;;;",
    "###.#####.########.#####.###",
    "###.#####.########.#####.###",
    "###......          ......###",  # 10
    "######.## ###--### ##.######",
    "######.## #HHHHHH# ##.######",
    ";;;;;;.   #HHHHHH#   .;;;;;;",
    "######.## #HHHHHH# ##.######",
    "######.## ######## ##.######",  # 15
    "######.##    $     ##.######",
    "######.## ######## ##.######",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#P..##.......p........##..P#",  # 20
    "###.##.##.########.##.##.###",
    "#......##....##....##......#",
    "#.##########.##.##########.#",
    "#..........................#",
    "############################",  # 25
]

DEFAULT_LAYOUTS: Dict[str, List[str]] = {
    "Pacman Small": MAZE_SMALL,
    "Pacman Regular": MAZE_REGULAR,
    "Ms. Pacman Pink": MAZE_PINK,
}

DEFAULT_LEVELS: Dict[int, str] = {
    0: "Pacman Small",
    2: "Ms. Pacman Pink",
}

DEFAULT_MAZE = "Pacman Regular"


class MazeError(ValueError):
    """A maze layout that cannot be played: bad symbol, wrong width, missing landmark."""


@dataclass
class MazeTable:
    """Maps a level number to a named maze layout."""

    layouts: Dict[str, List[str]] = field(default_factory=lambda: dict(DEFAULT_LAYOUTS))
    levels: Dict[int, str] = field(default_factory=lambda: dict(DEFAULT_LEVELS))
    default: str = DEFAULT_MAZE

    def layout_for(self, level: int) -> Tuple[str, List[str]]:
        """Return (maze name, rows) for `level`."""
        name = self.levels.get(level, self.default)
        if name not in self.layouts:
            # board.py turns this into a MazeError
            raise KeyError(name)
        return name, self.layouts[name]

    @classmethod
    def from_json(cls, path: str, base: Optional["MazeTable"] = None) -> "MazeTable":
        """
        Load layouts from a JSON file: {"mazes": {name: [rows]}, "levels": {"0": name}, "default": name}.
        Entries extend (and override) `base`, or the shipped table when no base is given.
        """
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise MazeError(f"cannot read maze file {path}: {e}") from e
        if not isinstance(data, dict):
            raise MazeError(f"maze file {path}: expected a JSON object at the top level")
        mazes = data.get("mazes", {})
        level_names = data.get("levels", {})
        if not isinstance(mazes, dict) or not isinstance(level_names, dict):
            raise MazeError(f"maze file {path}: 'mazes' and 'levels' must be JSON objects")

        table = base or cls()
        layouts = dict(table.layouts)
        for name, rows in mazes.items():
            if not isinstance(rows, list) or not all(isinstance(line, str) for line in rows):
                raise MazeError(f"maze file {path}: maze {name!r} must be a list of row strings")
            layouts[name] = list(rows)
        levels = dict(table.levels)
        for level, name in level_names.items():
            try:
                levels[int(level)] = str(name)
            except ValueError as e:
                raise MazeError(f"maze file {path}: level {level!r} is not a number") from e
        default = data.get("default", table.default)
        if not isinstance(default, str):
            raise MazeError(f"maze file {path}: 'default' must be a maze name")
        return cls(layouts=layouts, levels=levels, default=default)
