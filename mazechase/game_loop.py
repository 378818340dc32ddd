"""
Host loop: keyboard input, real-time pacing, drawing, sounds and the pauses that events ask for.
"""
import time

import pygame

from mazechase.audio import SoundBoard
from mazechase.game import Command, Event, EventKind, Game, Outcome, StepResult
from mazechase.logger import SessionLogger
from mazechase.render import (
    ScreenConfig,
    cell_to_pixel,
    draw_blast,
    draw_game,
    draw_game_over_screen,
    draw_message,
    draw_score_at,
    draw_title_screen,
)

KEY_COMMANDS = {
    pygame.K_UP: Command.UP,
    pygame.K_DOWN: Command.DOWN,
    pygame.K_LEFT: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_v: Command.CHEAT,
    pygame.K_SPACE: Command.PAUSE,
    pygame.K_q: Command.QUIT,
}
START_KEY = pygame.K_SPACE

READY_MS = 1000
BLAST_FRAMES = 12
FLASH_FRAMES = 10


def poll_command(logger: SessionLogger) -> Command:
    """Drain pending input; the last recognised key of the frame wins."""
    command = Command.NONE
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return Command.QUIT
        if event.type == pygame.KEYDOWN:
            logger.log_key(pygame.key.name(event.key))
            command = KEY_COMMANDS.get(event.key, command)
    return command


def show_ready(screen: pygame.Surface, font: pygame.font.Font, game: Game, config: ScreenConfig) -> None:
    draw_game(screen, font, game, config)
    draw_message(screen, font, game, config, "READY!")
    pygame.display.flip()
    pygame.time.wait(READY_MS)


def show_event(screen: pygame.Surface, font: pygame.font.Font, game: Game, config: ScreenConfig, event: Event) -> None:
    """Hold the frame for events that carry a duration."""
    if event.duration_ms <= 0:
        return
    if event.kind in (EventKind.GHOST_EATEN, EventKind.FRUIT_EATEN) and event.position is not None:
        draw_score_at(screen, font, event.position, event.value, config)
        pygame.display.flip()
        pygame.time.wait(event.duration_ms)
    elif event.kind is EventKind.PLAYER_DIED and event.position is not None:
        cx, cy = cell_to_pixel(event.position, config.cell_size)
        frame_ms = event.duration_ms // BLAST_FRAMES
        for frame in range(BLAST_FRAMES):
            draw_game(screen, font, game, config)
            draw_blast(screen, cx, cy, frame / (BLAST_FRAMES - 1), config.cell_size)
            pygame.display.flip()
            pygame.time.wait(frame_ms)
    elif event.kind is EventKind.LEVEL_COMPLETE:
        frame_ms = event.duration_ms // FLASH_FRAMES
        for i in range(FLASH_FRAMES):
            draw_game(screen, font, game, config, bold=i % 2 == 0)
            pygame.display.flip()
            pygame.time.wait(frame_ms)


def handle_result(
    screen: pygame.Surface,
    font: pygame.font.Font,
    game: Game,
    config: ScreenConfig,
    result: StepResult,
    logger: SessionLogger,
    sounds: SoundBoard,
) -> None:
    for event in result.events:
        logger.log_game_event(event, game.score, game.lives)
        sounds.play_event(event.kind)
        show_event(screen, font, game, config, event)


def run_game(
    screen: pygame.Surface,
    font: pygame.font.Font,
    game: Game,
    config: ScreenConfig,
    logger: SessionLogger,
    sounds: SoundBoard,
) -> bool:
    """Play one game until game over or quit. Returns True if the user quit."""
    logger.log_level_start(game.level, game.board.maze_name, game.board.dots())
    show_ready(screen, font, game, config)

    while True:
        start = time.perf_counter()
        pygame.time.wait(game.tick_interval_ms())
        command = poll_command(logger)
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        result = game.step(elapsed_ms, command)
        if result.outcome is Outcome.QUIT:
            return True

        draw_game(screen, font, game, config)
        if result.outcome is Outcome.PAUSED:
            draw_message(screen, font, game, config, "PAUSED")
        pygame.display.flip()
        handle_result(screen, font, game, config, result, logger, sounds)

        if result.outcome is Outcome.GAME_OVER:
            return False
        if result.outcome is Outcome.LEVEL_COMPLETE:
            # the game has already moved to the next level
            logger.log_level_end(game.level - 1, game.score)
            logger.log_level_start(game.level, game.board.maze_name, game.board.dots())
        if result.outcome in (Outcome.LEVEL_COMPLETE, Outcome.LIFE_LOST):
            show_ready(screen, font, game, config)


def wait_for_start(screen: pygame.Surface, font: pygame.font.Font) -> bool:
    """Title screen until SPACE. Returns False if the window was closed."""
    draw_title_screen(screen, font)
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == START_KEY:
                return True
        pygame.time.wait(50)


def ask_another_game(screen: pygame.Surface, font: pygame.font.Font, game: Game) -> bool:
    draw_game_over_screen(screen, font, game.score, game.high_score)
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_y:
                    return True
                if event.key in (pygame.K_n, pygame.K_q):
                    return False
        pygame.time.wait(50)
