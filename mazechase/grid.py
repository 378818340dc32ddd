"""
Grid geometry: row-major positions, directions, distances and tunnel wraparound.
"""
from dataclasses import dataclass
from enum import Enum

# Every maze is 28 columns wide; rows vary per layout.
WIDTH = 28


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]


_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Position:
    """Index into a row-major grid of WIDTH columns."""

    index: int

    @classmethod
    def from_xy(cls, col: int, row: int) -> "Position":
        return cls(row * WIDTH + col)

    @property
    def col(self) -> int:
        return self.index % WIDTH

    @property
    def row(self) -> int:
        return self.index // WIDTH

    def dist_city(self, other: "Position") -> int:
        """Manhattan distance; used for every pathfinding comparison."""
        return abs(self.col - other.col) + abs(self.row - other.row)

    def dist_sqr(self, other: "Position") -> int:
        return (self.col - other.col) ** 2 + (self.row - other.row) ** 2

    def average(self, other: "Position") -> "Position":
        return Position.from_xy((self.col + other.col) // 2, (self.row + other.row) // 2)

    def go(self, direction: Direction) -> "Position":
        """
        Adjacent position in `direction`. Left/right wrap to the other edge of the
        same row (tunnels); up/down never wrap, the outer wall keeps them in bounds.
        """
        if direction is Direction.RIGHT:
            if self.col == WIDTH - 1:
                return Position(self.index - (WIDTH - 1))
            return Position(self.index + 1)
        if direction is Direction.LEFT:
            if self.col == 0:
                return Position(self.index + (WIDTH - 1))
            return Position(self.index - 1)
        if direction is Direction.DOWN:
            return Position(self.index + WIDTH)
        return Position(self.index - WIDTH)

    def __repr__(self) -> str:
        return f"Position({self.col}, {self.row})"
