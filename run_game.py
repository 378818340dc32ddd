"""
Entry point: load config, show the title, play games until the player stops, save the session log.
"""
import argparse
import os
import random

import pygame

from mazechase.audio import SoundBoard
from mazechase.board import MazeError
from mazechase.config import load_config
from mazechase.game import Game
from mazechase.game_loop import ask_another_game, run_game, wait_for_start
from mazechase.logger import SessionLogger
from mazechase.mazes import MazeTable
from mazechase.render import ScreenConfig


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="game_config.json", help="Path to game config JSON")
    parser.add_argument("--log-dir", default=None, help="Directory for session log files")
    parser.add_argument("--seed", type=int, default=None, help="Seed for ghost and fruit randomness")
    parser.add_argument("--level", type=int, default=None, help="Level to start on (0-based)")
    parser.add_argument("--mute", action="store_true", help="Disable sound")
    args = parser.parse_args()

    if not os.path.exists(args.config):
        print(f"Config not found: {args.config} (using defaults)")
    cfg = load_config(args.config)
    if args.seed is not None:
        cfg.seed = args.seed
    if args.level is not None:
        cfg.start_level = args.level
    if args.log_dir is not None:
        cfg.log_dir = args.log_dir
    if args.mute:
        cfg.sound_enabled = False

    try:
        mazes = MazeTable.from_json(cfg.maze_file) if cfg.maze_file else MazeTable()
        game = Game(cfg, rng=random.Random(cfg.seed), mazes=mazes)
    except MazeError as e:
        print(f"Maze error: {e}")
        return

    # Tallest maze in the table sets the window height
    max_rows = max(len(rows) for rows in mazes.layouts.values())
    screen_config = ScreenConfig(cols=game.board.width, rows=max_rows, cell_size=cfg.cell_size)
    pygame.init()
    screen = pygame.display.set_mode((screen_config.width_px, screen_config.height_px))
    pygame.display.set_caption("Maze Chase")
    font = pygame.font.Font(None, 26)

    logger = SessionLogger(log_dir=cfg.log_dir)
    logger.start_session()
    sounds = SoundBoard(cfg.sound_dir, enabled=cfg.sound_enabled)

    game_index = 0
    if wait_for_start(screen, font):
        while True:
            logger.log_game_start(game_index, game.high_score)
            sounds.play("opening_song")
            user_quit = run_game(screen, font, game, screen_config, logger, sounds)
            logger.log_game_end(game_index, game.score, game.level, user_quit)
            if user_quit or not ask_another_game(screen, font, game):
                break
            cfg.high_score = game.high_score
            game = Game(cfg, rng=game.rng, mazes=mazes)
            game_index += 1

    log_path = logger.end_session()
    print(f"Session log saved to {log_path}")
    pygame.quit()


if __name__ == "__main__":
    main()
