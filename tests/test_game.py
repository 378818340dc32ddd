"""Orchestrator behavior: movement, eating, collisions, counters and level/life transitions.

Scenarios run on the first level's small maze. The player starts at (14,18)
facing left, with dots to the left along row 18.
"""

from __future__ import annotations

import random

from mazechase.board import Square
from mazechase.config import GameConfig
from mazechase.entities import GhostState
from mazechase.game import (
    DEATH_ANIMATION_MS,
    LEVEL_FLASH_MS,
    Command,
    EventKind,
    Game,
    Outcome,
)
from mazechase.grid import Direction, Position
from mazechase.schedule import Period, fruit_trips

xy = Position.from_xy


def _game(seed: int = 1, **overrides) -> Game:
    return Game(GameConfig(seed=seed, **overrides))


def _park_outside(game: Game, index: int, pos: Position) -> None:
    g = game.ghosts[index]
    g.state = GhostState.OUTSIDE
    g.pos = pos


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

class TestNewGame:
    def test_initial_state(self):
        game = _game()
        assert game.level == 0
        assert (game.score, game.high_score, game.lives) == (0, 9710, 3)
        assert game.dots_left == game.board.dots() + 2
        assert game.fruit_trips == (174, 74)
        assert game.player.pos == game.board.start
        assert [g.pos for g in game.ghosts] == list(game.board.ghost_start)
        assert all(g.state is GhostState.HOME and g.vulnerable_ms == 0 for g in game.ghosts)
        assert game.period is Period.SCATTER
        assert not game.fruit_active

    def test_start_level_from_config(self):
        game = _game(start_level=2)
        assert game.board.maze_name == "Ms. Pacman Pink"
        assert game.bonus == ("peach", 500)


# ---------------------------------------------------------------------------
# Player movement and eating
# ---------------------------------------------------------------------------

class TestPlayer:
    def test_eats_a_dot(self):
        game = _game()
        dots = game.dots_left
        result = game.step(20, Command.LEFT)
        assert result.outcome is Outcome.RUNNING
        assert game.player.pos == xy(13, 18)
        assert game.score == 10
        assert game.dots_left == dots - 1
        assert game.board[xy(13, 18)] is Square.EMPTY

    def test_blocked_request_keeps_moving(self):
        game = _game()
        game.step(20, Command.UP)  # wall above the start square
        assert game.player.pos == xy(13, 18)
        assert game.player.last_input_direction is Direction.UP
        assert game.player.moving is Direction.LEFT

    def test_request_is_buffered_until_it_opens(self):
        game = _game()
        game.step(20, Command.UP)
        game.step(20)   # (12,18) has an opening above
        assert game.player.pos == xy(12, 18)
        game.step(20)
        assert game.player.pos == xy(12, 17)
        assert game.player.moving is Direction.UP

    def test_stays_put_when_both_ways_are_blocked(self):
        game = _game()
        game.player.pos = xy(1, 1)
        game.player.last_input_direction = Direction.UP
        game.player.moving = Direction.LEFT
        game.step(20)
        assert game.player.pos == xy(1, 1)

    def test_animation_advances_every_100ms(self):
        game = _game()
        game.step(250)
        assert (game.player.anim_frame, game.player.anim_ms) == (2, 50)
        game.step(450)
        assert game.player.anim_frame == (2 + 5) % 6

    def test_fruit_pays_only_while_shown(self):
        game = _game()
        game.player.pos = xy(14, 14)
        game.step(20)
        assert game.player.pos == game.board.fruit
        assert game.score == 0

        game = _game()
        game.player.pos = xy(14, 14)
        game.fruit_ms = 5000
        result = game.step(20)
        assert game.score == 100
        assert game.fruit_ms == 0
        assert result.kinds() == [EventKind.FRUIT_EATEN]
        assert result.events[0].value == 100
        assert game.board[game.board.fruit] is Square.FRUIT

    def test_fruit_window_counts_down(self):
        game = _game()
        game.fruit_ms = 100
        game.step(60)
        assert game.fruit_ms == 40
        game.step(60)
        assert game.fruit_ms == 0


# ---------------------------------------------------------------------------
# Pills and eating ghosts
# ---------------------------------------------------------------------------

class TestPills:
    def test_pill_then_two_ghosts_scores_200_then_400(self):
        game = _game(pill_duration_ms=6000)
        game.board[xy(13, 18)] = Square.PILL
        _park_outside(game, 0, xy(1, 1))
        _park_outside(game, 1, xy(26, 22))

        result = game.step(10, Command.LEFT)
        assert EventKind.PILL_EATEN in result.kinds()
        assert game.score == 50
        assert game.ghosts[0].vulnerable_ms == 5990
        assert game.ghosts[1].vulnerable_ms == 5990
        assert game.ghosts[2].vulnerable_ms == 0  # still home
        assert game.board[xy(13, 18)] is Square.EMPTY

        game.ghosts[0].pos = xy(12, 18)
        result = game.step(10)
        eaten = [e for e in result.events if e.kind is EventKind.GHOST_EATEN]
        assert [e.value for e in eaten] == [200]
        assert game.ghosts[0].state is GhostState.DEAD
        assert game.ghosts[0].vulnerable_ms == 0

        game.ghosts[1].pos = xy(11, 18)
        result = game.step(10)
        eaten = [e for e in result.events if e.kind is EventKind.GHOST_EATEN]
        assert [e.value for e in eaten] == [400]
        assert game.ghosts[1].state is GhostState.DEAD
        assert game.ghosts[1].vulnerable_ms == 0

        assert game.score == 50 + 10 + 200 + 10 + 400
        assert game.next_ghost_score == 800
        assert not game.player.dead

    def test_new_pill_resets_the_combo(self):
        game = _game()
        game.next_ghost_score = 1600
        game.board[xy(13, 18)] = Square.PILL
        game.step(10, Command.LEFT)
        assert game.next_ghost_score == 200

    def test_vulnerability_adds_up(self):
        game = _game()
        _park_outside(game, 0, xy(1, 1))
        game.ghosts[1].state = GhostState.GATEWAY
        game.ghosts[0].vulnerable_ms = 1000
        game.make_ghosts_vulnerable(6000)
        assert game.ghosts[0].vulnerable_ms == 7000
        assert game.ghosts[1].vulnerable_ms == 6000
        assert game.ghosts[2].vulnerable_ms == 0

    def test_cheat_works_like_a_pill(self):
        game = _game()
        _park_outside(game, 0, xy(1, 1))
        game.step(30, Command.CHEAT)
        assert game.ghosts[0].vulnerable_ms == 6000 - 30
        assert game.score == 10  # only the dot
        assert game.tick_interval_ms() == 120


# ---------------------------------------------------------------------------
# Deaths and game over
# ---------------------------------------------------------------------------

class TestDeath:
    def test_walking_into_a_ghost_costs_a_life(self):
        game = _game()
        game.level_ms = 5000
        _park_outside(game, 0, xy(13, 18))
        result = game.step(10, Command.LEFT)
        assert result.outcome is Outcome.LIFE_LOST
        died = result.events[-1]
        assert died.kind is EventKind.PLAYER_DIED
        assert died.position == xy(13, 18)
        assert died.duration_ms == DEATH_ANIMATION_MS
        assert game.lives == 2
        # actors reset, the board and level clock do not
        assert game.player.pos == game.board.start
        assert not game.player.dead
        assert all(g.state is GhostState.HOME for g in game.ghosts)
        assert [g.pos for g in game.ghosts] == list(game.board.ghost_start)
        assert game.board[xy(13, 18)] is Square.EMPTY
        assert game.level_ms == 5010

    def test_ghost_moving_onto_the_player_is_caught_the_same_tick(self, scripted):
        game = Game(GameConfig(), rng=scripted(value=99))
        game.player.pos = xy(1, 1)
        game.player.last_input_direction = Direction.UP
        game.player.moving = Direction.LEFT
        _park_outside(game, 0, xy(2, 1))
        game.ghosts[0].direction = Direction.LEFT
        result = game.step(10)
        assert result.outcome is Outcome.LIFE_LOST

    def test_dead_ghosts_are_harmless(self):
        game = _game()
        game.ghosts[0].state = GhostState.DEAD
        game.ghosts[0].pos = xy(13, 18)
        result = game.step(10, Command.LEFT)
        assert result.outcome is Outcome.RUNNING

    def test_last_life_ends_the_game(self):
        game = _game(lives=0)
        _park_outside(game, 0, xy(13, 18))
        result = game.step(10, Command.LEFT)
        assert result.outcome is Outcome.GAME_OVER
        assert result.kinds() == [EventKind.PLAYER_DIED, EventKind.GAME_OVER]
        assert game.over

        pos = game.player.pos
        after = game.step(10, Command.RIGHT)
        assert after.outcome is Outcome.GAME_OVER
        assert after.events == []
        assert game.player.pos == pos


# ---------------------------------------------------------------------------
# Score bookkeeping
# ---------------------------------------------------------------------------

class TestScore:
    def test_extra_life_once_at_10000(self):
        game = _game()
        game.score = 9990
        result = game.step(10, Command.LEFT)
        assert game.score == 10000
        assert game.lives == 4
        assert EventKind.EXTRA_LIFE in result.kinds()

        result = game.step(10)
        assert game.lives == 4
        assert EventKind.EXTRA_LIFE not in result.kinds()

    def test_no_extra_life_past_the_cap(self):
        game = _game(lives=6)
        game.score = 9990
        game.step(10, Command.LEFT)
        assert game.lives == 6

    def test_high_score_follows_the_score(self):
        game = _game(high_score=5)
        game.step(10, Command.LEFT)
        game.step(10)
        assert game.high_score == 20


# ---------------------------------------------------------------------------
# Dot counter, fruit and levels
# ---------------------------------------------------------------------------

class TestDotCounter:
    def _leave_one_dot(self, game: Game, keep: Position) -> None:
        for r, line in enumerate(game.board.rows()):
            for c, square in enumerate(line):
                pos = xy(c, r)
                if square is Square.DOT and pos != keep:
                    game.board[pos] = Square.EMPTY
        game.dots_left = game.board.dots() + 2
        game.fruit_trips = fruit_trips(game.board.dots())

    def test_counter_hits_zero_only_after_dots_and_both_tokens(self):
        game = _game()
        self._leave_one_dot(game, xy(13, 18))
        assert (game.dots_left, game.fruit_trips) == (3, (2, 1))

        first = game.step(10, Command.LEFT)
        assert game.board.dots() == 0
        assert first.kinds() == [EventKind.FRUIT_SHOWN]
        assert 10000 <= first.events[0].value <= 12000
        assert game.fruit_active
        assert game.dots_left == 1

        second = game.step(10)
        assert second.kinds() == [EventKind.FRUIT_SHOWN]
        assert second.outcome is Outcome.RUNNING
        assert game.dots_left == 0

        third = game.step(10)
        assert third.outcome is Outcome.LEVEL_COMPLETE
        assert third.kinds() == [EventKind.LEVEL_COMPLETE]
        assert third.events[0].duration_ms == LEVEL_FLASH_MS

    def test_level_advance_resets_the_level(self):
        game = _game()
        game.score = 1234
        game.level_ms = 40000
        game.fruit_ms = 3000
        game.dots_left = 1  # the dot eaten this tick is the last one
        result = game.step(10, Command.LEFT)
        assert result.outcome is Outcome.LEVEL_COMPLETE
        assert game.level == 1
        assert game.board.maze_name == "Pacman Regular"
        assert game.dots_left == game.board.dots() + 2
        assert (game.level_ms, game.fruit_ms) == (0, 0)
        assert game.player.pos == game.board.start
        assert game.lives == 3
        assert game.score >= 1234

    def test_fruit_trip_on_the_full_maze(self, scripted):
        game = Game(GameConfig(), rng=scripted(value=2))
        game.dots_left = 175
        result = game.step(10, Command.LEFT)
        assert EventKind.FRUIT_SHOWN in result.kinds()
        assert game.fruit_ms == 12000
        assert game.dots_left == 173  # one dot eaten, one token spent


# ---------------------------------------------------------------------------
# Commands and pacing
# ---------------------------------------------------------------------------

class TestCommands:
    def test_pause_freezes_everything(self):
        game = _game()
        assert game.step(10, Command.PAUSE).outcome is Outcome.PAUSED
        assert game.step(10, Command.LEFT).outcome is Outcome.PAUSED
        assert game.player.pos == game.board.start
        assert game.level_ms == 0
        assert game.step(10, Command.PAUSE).outcome is Outcome.RUNNING
        assert game.level_ms == 10

    def test_quit(self):
        game = _game()
        assert game.step(10, Command.QUIT).outcome is Outcome.QUIT
        assert game.player.pos == game.board.start

    def test_command_directions(self):
        assert Command.UP.direction is Direction.UP
        assert Command.CHEAT.direction is None

    def test_period_follows_the_level_clock(self):
        game = _game()
        game.level_ms = 7500
        assert game.period is Period.CHASE

    def test_tick_interval(self):
        assert _game().tick_interval_ms() == 140
        assert _game(start_level=2).tick_interval_ms() == 130
        assert _game(start_level=5).tick_interval_ms() == 120

    def test_same_seed_same_game(self):
        def run(seed):
            game = Game(GameConfig(), rng=random.Random(seed))
            for i in range(80):
                game.step(130, [Command.LEFT, Command.UP, Command.RIGHT, Command.DOWN][i // 20])
            return game.score, game.player.pos, [(g.pos, g.state) for g in game.ghosts]

        assert run(5) == run(5)
