"""
Board: one level's maze as a grid of squares, plus landmarks derived at construction
(gates, the squares in front of them, fruit, player start, ghost spawn corners).
"""
from enum import Enum
from typing import List, Optional, Tuple

from mazechase.grid import WIDTH, Direction, Position
from mazechase.mazes import MazeError, MazeTable


class Square(Enum):
    EMPTY = " "
    DOT = "."
    PILL = "P"
    FRUIT = "$"
    START = "p"
    WALL = "#"
    GATE = "-"
    HOUSE = "H"
    TUNNEL = ";"

    @classmethod
    def from_char(cls, ch: str) -> "Square":
        try:
            return cls(ch)
        except ValueError:
            raise MazeError(f"not a valid maze symbol: {ch!r}") from None


# Squares nobody walks through outside the ghost house.
BLOCKING = frozenset({Square.WALL, Square.GATE, Square.HOUSE})


def is_passable(square: Square) -> bool:
    return square not in BLOCKING


def _parse(rows: List[str]) -> Tuple[List[Square], int, int]:
    if not rows:
        raise MazeError("maze has no rows")
    width = len(rows[0])
    if width != WIDTH:
        raise MazeError(f"maze has wrong width {width} expected {WIDTH}")
    for i, line in enumerate(rows):
        if len(line) != width:
            raise MazeError(f"maze row {i} has width {len(line)} expected {width}")
    squares = [Square.from_char(ch) for line in rows for ch in line]
    return squares, width, len(rows)


def _find_exactly(squares: List[Square], kind: Square, count: int, what: str) -> List[Position]:
    found = [Position(i) for i, sq in enumerate(squares) if sq is kind]
    if len(found) != count:
        raise MazeError(f"expected {count} {what} on map, found {len(found)}")
    return found


class Board:
    """
    A levelled maze. Only squares change after construction (dots and pills are eaten);
    the whole board is replaced when the level advances.
    """

    def __init__(self, level: int, mazes: Optional[MazeTable] = None):
        mazes = mazes or MazeTable()
        try:
            self.maze_name, rows = mazes.layout_for(level)
        except KeyError as e:
            raise MazeError(f"no maze layout named {e.args[0]!r} for level {level}") from None
        self._squares, self.width, self.height = _parse(rows)

        # Gates are found in scan order: gate1 is the left one on a horizontal gate.
        self.gate1, self.gate2 = _find_exactly(self._squares, Square.GATE, 2, "ghost gates")
        self.front_of_gate1 = self.gate1.go(Direction.UP)
        self.front_of_gate2 = self.gate2.go(Direction.UP)
        (self.fruit,) = _find_exactly(self._squares, Square.FRUIT, 1, "bonus fruit squares")
        (self.start,) = _find_exactly(self._squares, Square.START, 1, "player start squares")

        house = [Position(i) for i, sq in enumerate(self._squares) if sq is Square.HOUSE]
        if not house:
            raise MazeError("no ghost house on map")
        min_col = min(p.col for p in house)
        max_col = max(p.col for p in house)
        min_row = min(p.row for p in house)
        max_row = max(p.row for p in house)
        self.ghost_start: Tuple[Position, Position, Position, Position] = (
            Position.from_xy(min_col, min_row),
            Position.from_xy(max_col, min_row),
            Position.from_xy(min_col, max_row),
            Position.from_xy(max_col, max_row),
        )

        if self.dots() == 0:
            raise MazeError("no dots on map")

    def __getitem__(self, pos: Position) -> Square:
        return self._squares[pos.index]

    def __setitem__(self, pos: Position, square: Square) -> None:
        self._squares[pos.index] = square

    def dots(self) -> int:
        """Number of uneaten dots (pills are not counted)."""
        return sum(1 for sq in self._squares if sq is Square.DOT)

    def is_tunnel(self, pos: Position) -> bool:
        return self[pos] is Square.TUNNEL

    def rows(self) -> List[List[Square]]:
        """Squares grouped by row, for renderers."""
        return [self._squares[r * self.width:(r + 1) * self.width] for r in range(self.height)]
