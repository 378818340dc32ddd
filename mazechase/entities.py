"""
Entities: Player and Ghost (position, direction, state, timers) and the four ghost roles.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from mazechase.grid import WIDTH, Direction, Position

PLAYER_ANIM_FRAMES = 6
PLAYER_ANIM_FRAME_MS = 100


class GhostState(Enum):
    HOME = "home"          # wandering inside the house
    GATEWAY = "gateway"    # standing on a gate, leaves next tick
    OUTSIDE = "outside"    # chasing, scattering or fleeing in the maze
    DEAD = "dead"          # eyes heading back to the house


class Role(Enum):
    """Spawn slot of a ghost; decides its chase target and scatter corner."""

    PINKY = 0    # targets the player
    BLINKY = 1   # targets 4 squares ahead of the player
    INKY = 2     # targets the midpoint of the player and BLINKY
    CLYDE = 3    # targets the player when close, else its own corner

    @property
    def scatter_corner(self) -> Position:
        return SCATTER_CORNERS[self.value]


SCATTER_CORNERS = (
    Position.from_xy(2, 0),
    Position.from_xy(WIDTH - 3, 0),
    Position.from_xy(0, 24),
    Position.from_xy(WIDTH - 1, 24),
)


@dataclass
class Player:
    pos: Position
    dead: bool = False
    last_input_direction: Direction = Direction.LEFT
    moving: Direction = Direction.LEFT  # may lag the input by a tile while the input is blocked
    anim_frame: int = 0
    anim_ms: int = 0

    def advance_animation(self, elapsed_ms: int) -> None:
        self.anim_ms += elapsed_ms
        while self.anim_ms >= PLAYER_ANIM_FRAME_MS:
            self.anim_ms -= PLAYER_ANIM_FRAME_MS
            self.anim_frame = (self.anim_frame + 1) % PLAYER_ANIM_FRAMES


@dataclass
class Ghost:
    role: Role
    pos: Position
    state: GhostState = GhostState.HOME
    vulnerable_ms: int = 0
    direction: Direction = Direction.LEFT

    @property
    def vulnerable(self) -> bool:
        return self.vulnerable_ms > 0

    def decay(self, elapsed_ms: int) -> None:
        """Count the vulnerability window down, never below zero."""
        self.vulnerable_ms = max(0, self.vulnerable_ms - elapsed_ms)


def make_ghosts(starts: Sequence[Position]) -> List[Ghost]:
    """One ghost per role, each on its spawn corner, in role order."""
    return [Ghost(role=role, pos=pos) for role, pos in zip(Role, starts)]
