"""
Game orchestrator: owns board, player, ghosts and counters, and advances them one tick per step.

The step never blocks. Anything the host should show or play (eaten ghost score, death
animation, level flash) comes back as events carrying a suggested duration.
"""
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from mazechase.board import Board, Square, is_passable
from mazechase.config import GameConfig
from mazechase.entities import Ghost, GhostState, Player, make_ghosts
from mazechase.ghosts import ghosts_at, move_ghosts
from mazechase.grid import Direction, Position
from mazechase.mazes import MazeTable
from mazechase.schedule import Period, fruit_trips, level_bonus, period, tick_interval_ms

MAX_LIVES = 6
EXTRA_LIFE_SCORE = 10000
DOT_POINTS = 10
PILL_POINTS = 50
FIRST_GHOST_SCORE = 200

SCORE_PAUSE_MS = 150
DEATH_ANIMATION_MS = 12 * 150
LEVEL_FLASH_MS = 10 * 300


class Command(Enum):
    """One input per tick from the host."""

    NONE = "none"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CHEAT = "cheat"   # make the ghosts vulnerable as if a pill was eaten
    PAUSE = "pause"   # toggles
    QUIT = "quit"

    @property
    def direction(self) -> Optional[Direction]:
        return _COMMAND_DIRECTIONS.get(self)


_COMMAND_DIRECTIONS = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}


class EventKind(Enum):
    PILL_EATEN = "pill_eaten"
    GHOST_EATEN = "ghost_eaten"
    FRUIT_SHOWN = "fruit_shown"
    FRUIT_EATEN = "fruit_eaten"
    EXTRA_LIFE = "extra_life"
    LEVEL_COMPLETE = "level_complete"
    PLAYER_DIED = "player_died"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    value: int = 0                      # points awarded, or fruit window length for FRUIT_SHOWN
    position: Optional[Position] = None
    duration_ms: int = 0                # how long the host may hold the frame to show it


class Outcome(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    QUIT = "quit"
    LIFE_LOST = "life_lost"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"


@dataclass
class StepResult:
    outcome: Outcome = Outcome.RUNNING
    events: List[Event] = field(default_factory=list)

    def kinds(self) -> List[EventKind]:
        return [e.kind for e in self.events]


class Game:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        mazes: Optional[MazeTable] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.mazes = mazes or MazeTable()
        self.level = self.config.start_level
        self.lives = self.config.lives
        self.score = 0
        self.high_score = self.config.high_score
        self.pill_duration_ms = self.config.pill_duration_ms
        self.paused = False
        self.over = False
        self._start_level()

    # ------------------------------------------------------------------
    # Level and life transitions
    # ------------------------------------------------------------------

    def _start_level(self) -> None:
        self.board = Board(self.level, self.mazes)
        dots = self.board.dots()
        self.dots_left = dots + 2  # one token per fruit trip
        self.fruit_trips = fruit_trips(dots)
        self.level_ms = 0
        self.fruit_ms = 0
        self.next_ghost_score = FIRST_GHOST_SCORE
        self._reset_actors()

    def _reset_actors(self) -> None:
        self.player = Player(pos=self.board.start)
        self.ghosts: List[Ghost] = make_ghosts(self.board.ghost_start)

    # ------------------------------------------------------------------
    # Read-only views for hosts
    # ------------------------------------------------------------------

    @property
    def period(self) -> Period:
        return period(self.level, self.level_ms)

    @property
    def fruit_active(self) -> bool:
        return self.fruit_ms > 0

    @property
    def bonus(self):
        return level_bonus(self.level)

    def any_vulnerable(self) -> bool:
        return any(g.vulnerable for g in self.ghosts)

    def tick_interval_ms(self) -> int:
        return tick_interval_ms(self.level, self.any_vulnerable())

    # ------------------------------------------------------------------
    # Simulation step
    # ------------------------------------------------------------------

    def make_ghosts_vulnerable(self, duration_ms: int) -> None:
        """Extend the vulnerability of every ghost that is out (or on its way out)."""
        for g in self.ghosts:
            if g.state in (GhostState.OUTSIDE, GhostState.GATEWAY):
                g.vulnerable_ms += duration_ms

    def step(self, elapsed_ms: int, command: Command = Command.NONE) -> StepResult:
        """Advance the game by `elapsed_ms` of wall-clock time."""
        if self.over:
            return StepResult(Outcome.GAME_OVER)
        if command is Command.QUIT:
            return StepResult(Outcome.QUIT)
        if command is Command.PAUSE:
            self.paused = not self.paused
        if self.paused:
            return StepResult(Outcome.PAUSED)

        if command.direction is not None:
            self.player.last_input_direction = command.direction
        elif command is Command.CHEAT:
            self.make_ghosts_vulnerable(self.pill_duration_ms)

        result = StepResult()
        prev_score = self.score

        self._update_player(elapsed_ms, result.events)
        self._check_player_vs_ghosts(result.events)
        move_ghosts(self.ghosts, self.board, self.player, self.level, self.level_ms, elapsed_ms, self.rng)
        self._check_player_vs_ghosts(result.events)
        self.level_ms += elapsed_ms
        self.fruit_ms = max(0, self.fruit_ms - elapsed_ms)

        if prev_score < EXTRA_LIFE_SCORE <= self.score and self.lives < MAX_LIVES:
            self.lives += 1
            result.events.append(Event(EventKind.EXTRA_LIFE))
        self.high_score = max(self.high_score, self.score)

        if self.player.dead:
            self._lose_life(result)
        elif self.dots_left == 0:
            result.events.append(Event(EventKind.LEVEL_COMPLETE, duration_ms=LEVEL_FLASH_MS))
            result.outcome = Outcome.LEVEL_COMPLETE
            self.level += 1
            self._start_level()
        elif self.dots_left in self.fruit_trips:
            self.fruit_ms = 1000 * (10 + self.rng.randrange(3))
            self.dots_left -= 1
            result.events.append(Event(EventKind.FRUIT_SHOWN, value=self.fruit_ms, position=self.board.fruit))
        return result

    def _lose_life(self, result: StepResult) -> None:
        result.events.append(
            Event(EventKind.PLAYER_DIED, position=self.player.pos, duration_ms=DEATH_ANIMATION_MS)
        )
        if self.lives == 0:
            self.over = True
            result.events.append(Event(EventKind.GAME_OVER, value=self.score))
            result.outcome = Outcome.GAME_OVER
            return
        self.lives -= 1
        self._reset_actors()
        result.outcome = Outcome.LIFE_LOST

    def _update_player(self, elapsed_ms: int, events: List[Event]) -> None:
        player = self.player
        player.advance_animation(elapsed_ms)
        # Try the requested direction first, then keep going the way we were moving.
        if self._move_player(player.pos.go(player.last_input_direction), events):
            player.moving = player.last_input_direction
        else:
            self._move_player(player.pos.go(player.moving), events)

    def _move_player(self, pos: Position, events: List[Event]) -> bool:
        """Enter `pos` if it can be walked on, eating whatever is there. True if moved."""
        square = self.board[pos]
        if not is_passable(square):
            return False
        if square is Square.DOT:
            self.score += DOT_POINTS
            self.dots_left -= 1
            self.board[pos] = Square.EMPTY
        elif square is Square.PILL:
            self.board[pos] = Square.EMPTY
            self.make_ghosts_vulnerable(self.pill_duration_ms)
            self.score += PILL_POINTS
            self.next_ghost_score = FIRST_GHOST_SCORE
            events.append(Event(EventKind.PILL_EATEN, value=PILL_POINTS, position=pos))
        elif square is Square.FRUIT and self.fruit_ms > 0:
            bonus = level_bonus(self.level)[1]
            self.score += bonus
            self.fruit_ms = 0
            events.append(Event(EventKind.FRUIT_EATEN, value=bonus, position=pos, duration_ms=SCORE_PAUSE_MS))
        self.player.pos = pos
        return True

    def _check_player_vs_ghosts(self, events: List[Event]) -> None:
        for g in ghosts_at(self.ghosts, self.player.pos):
            if not g.vulnerable:
                self.player.dead = True
                continue
            self.score += self.next_ghost_score
            events.append(
                Event(EventKind.GHOST_EATEN, value=self.next_ghost_score, position=g.pos, duration_ms=SCORE_PAUSE_MS)
            )
            self.next_ghost_score *= 2
            g.state = GhostState.DEAD
            g.vulnerable_ms = 0
