"""
Draw maze, dots, fruit, player, ghosts, side panel and message screens.
"""
import math
from dataclasses import dataclass
from typing import Tuple

import pygame

from mazechase.board import Board, Square
from mazechase.entities import Ghost, GhostState, Player
from mazechase.game import MAX_LIVES, Game
from mazechase.grid import Direction, Position
from mazechase.schedule import Period

# Side panel for score, lives and level, right of the maze
PANEL_WIDTH_PX = 220
DEFAULT_CELL_SIZE = 24

# Colors (RGB)
BG = (0, 0, 0)
WALL = (33, 33, 222)
WALL_EDGE = (80, 100, 255)
GATE = (255, 184, 222)
DOT = (255, 184, 151)
PACMAN_YELLOW = (255, 255, 0)
PACMAN_MOUTH = (0, 0, 0)
TEXT_COLOR = (240, 240, 240)
SCORE_POPUP = (0, 255, 255)
FRUIT_COLOR = (255, 40, 40)
FRIGHTENED = (33, 33, 255)
FRIGHTENED_ENDING = (240, 240, 255)

# Ghosts blink white during the last two seconds of vulnerability
FRIGHTENED_ENDING_MS = 2000

# pink, red, cyan, orange in role order
GHOST_COLORS = [
    (255, 184, 255),
    (255, 0, 0),
    (0, 255, 255),
    (255, 184, 82),
]
GHOST_EYE_WHITE = (255, 255, 255)
GHOST_PUPIL = (0, 0, 128)

_DIRECTION_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

# pygame angles: right=0, down=90, left=180, up=270
_MOUTH_ANGLES = {
    Direction.RIGHT: 0,
    Direction.DOWN: 90,
    Direction.LEFT: 180,
    Direction.UP: 270,
}


@dataclass
class ScreenConfig:
    cols: int
    rows: int
    cell_size: int = DEFAULT_CELL_SIZE

    @property
    def width_px(self) -> int:
        return self.cols * self.cell_size + PANEL_WIDTH_PX

    @property
    def height_px(self) -> int:
        return self.rows * self.cell_size


def cell_to_pixel(pos: Position, cell_size: int = DEFAULT_CELL_SIZE) -> Tuple[int, int]:
    """Pixel (x, y) of the center of `pos`."""
    x = pos.col * cell_size + cell_size // 2
    y = pos.row * cell_size + cell_size // 2
    return (x, y)


def draw_board(surface: pygame.Surface, board: Board, config: ScreenConfig, bold: bool = False) -> None:
    cs = config.cell_size
    wall_color = WALL_EDGE if bold else WALL
    for row, squares in enumerate(board.rows()):
        for col, square in enumerate(squares):
            x, y = col * cs, row * cs
            if square is Square.WALL:
                pygame.draw.rect(surface, wall_color, (x + 1, y + 1, cs - 2, cs - 2))
                pygame.draw.rect(surface, WALL_EDGE, (x, y, cs, cs), 1)
            elif square is Square.GATE:
                pygame.draw.rect(surface, GATE, (x, y + cs // 2 - 2, cs, 4))
            elif square is Square.DOT:
                pygame.draw.circle(surface, DOT, (x + cs // 2, y + cs // 2), max(2, cs // 10))
            elif square is Square.PILL:
                pygame.draw.circle(surface, DOT, (x + cs // 2, y + cs // 2), cs // 3)


def draw_fruit(surface: pygame.Surface, game: Game, config: ScreenConfig, font: pygame.font.Font) -> None:
    """Fruit is only visible while its window is open."""
    if not game.fruit_active:
        return
    x, y = cell_to_pixel(game.board.fruit, config.cell_size)
    pygame.draw.circle(surface, FRUIT_COLOR, (x, y), config.cell_size // 2 - 2)
    label = font.render(game.bonus[0][0].upper(), True, TEXT_COLOR)
    surface.blit(label, label.get_rect(center=(x, y)))


def draw_player(surface: pygame.Surface, player: Player, config: ScreenConfig) -> None:
    """Yellow circle with a wedge mouth facing the requested direction, opening with the animation frame."""
    x, y = cell_to_pixel(player.pos, config.cell_size)
    r = config.cell_size // 2 - 1
    base_angle = _MOUTH_ANGLES[player.last_input_direction]
    # frames 0..5 open then close the mouth
    opening = (3 - abs(player.anim_frame - 3)) / 3
    spread_rad = math.radians(5 + opening * 40)
    pygame.draw.circle(surface, PACMAN_YELLOW, (x, y), r)
    a1 = math.radians(base_angle) - spread_rad
    a2 = math.radians(base_angle) + spread_rad
    p1 = (x + r * math.cos(a1), y + r * math.sin(a1))
    p2 = (x + r * math.cos(a2), y + r * math.sin(a2))
    pygame.draw.polygon(surface, PACMAN_MOUTH, [(x, y), p1, p2])


def _ghost_body_color(ghost: Ghost, board: Board) -> Tuple[int, int, int]:
    # Vulnerability only shows once the ghost has left the house
    if ghost.vulnerable and board[ghost.pos] is not Square.HOUSE:
        if ghost.vulnerable_ms < FRIGHTENED_ENDING_MS and (ghost.vulnerable_ms // 250) % 2 == 0:
            return FRIGHTENED_ENDING
        return FRIGHTENED
    return GHOST_COLORS[ghost.role.value % len(GHOST_COLORS)]


def draw_ghosts(surface: pygame.Surface, game: Game, config: ScreenConfig) -> None:
    """Classic ghosts: rounded body with wavy bottom, eyes looking where they move. Dead ghosts are eyes only."""
    cs = config.cell_size
    for g in game.ghosts:
        x, y = cell_to_pixel(g.pos, cs)
        w = cs * 0.85
        h = cs * 0.95
        left = x - w / 2
        top = y - h / 2
        if g.state is not GhostState.DEAD:
            color = _ghost_body_color(g, game.board)
            body_rect = pygame.Rect(left, top, w, h)
            pygame.draw.rect(surface, color, body_rect, border_radius=int(cs * 0.22))
            foot_r = cs * 0.14
            for i in range(4):
                fx = left + (i + 0.5) * (w / 4)
                pygame.draw.circle(surface, color, (int(fx), int(top + h)), int(foot_r))
        eye_w = cs * 0.2
        eye_h = cs * 0.26
        eye_y = top + h * 0.38
        pygame.draw.ellipse(surface, GHOST_EYE_WHITE, pygame.Rect(x - cs * 0.26 - eye_w / 2, eye_y - eye_h / 2, eye_w, eye_h))
        pygame.draw.ellipse(surface, GHOST_EYE_WHITE, pygame.Rect(x + cs * 0.06 - eye_w / 2, eye_y - eye_h / 2, eye_w, eye_h))
        dc, dr = _DIRECTION_VECTORS[g.direction]
        pupil_off = cs * 0.09
        pupil_r = max(2, int(cs * 0.07))
        pygame.draw.circle(surface, GHOST_PUPIL, (int(x - cs * 0.26 + dc * pupil_off), int(eye_y + dr * pupil_off)), pupil_r)
        pygame.draw.circle(surface, GHOST_PUPIL, (int(x + cs * 0.06 + dc * pupil_off), int(eye_y + dr * pupil_off)), pupil_r)


def draw_panel(surface: pygame.Surface, font: pygame.font.Font, game: Game, config: ScreenConfig) -> None:
    """Score, high score, level, lives and a chase indicator, right of the maze."""
    left = config.cols * config.cell_size + 16
    pygame.draw.rect(surface, BG, (left - 16, 0, PANEL_WIDTH_PX, config.height_px))
    lines = [
        f"Score : {game.score}",
        f"High  : {game.high_score}",
        f"Level : {game.level + 1}",
        f"Maze  : {game.board.maze_name}",
        f"Bonus : {game.bonus[0]} ({game.bonus[1]})",
    ]
    y = 20
    for line in lines:
        text = font.render(line, True, TEXT_COLOR)
        surface.blit(text, (left, y))
        y += 28
    r = config.cell_size // 2 - 2
    for i in range(min(game.lives, MAX_LIVES)):
        cx = left + r + i * (2 * r + 6)
        pygame.draw.circle(surface, PACMAN_YELLOW, (cx, y + 20), r)
    if game.period is Period.CHASE:
        text = font.render("CHASE", True, (255, 80, 80))
        surface.blit(text, (left, config.height_px - 40))


def draw_message(surface: pygame.Surface, font: pygame.font.Font, game: Game, config: ScreenConfig, message: str) -> None:
    """Centered message on the fruit row (READY!, PAUSED, GAME OVER)."""
    text = font.render(message, True, PACMAN_YELLOW)
    _, y = cell_to_pixel(game.board.fruit, config.cell_size)
    r = text.get_rect(center=(config.cols * config.cell_size // 2, y))
    pygame.draw.rect(surface, BG, r.inflate(8, 4))
    surface.blit(text, r)


def draw_score_at(surface: pygame.Surface, font: pygame.font.Font, pos: Position, value: int, config: ScreenConfig) -> None:
    x, y = cell_to_pixel(pos, config.cell_size)
    text = font.render(str(value), True, SCORE_POPUP)
    surface.blit(text, text.get_rect(center=(x, y)))


def draw_blast(surface: pygame.Surface, center_x: int, center_y: int, progress: float, cell_size: int) -> None:
    """Draw one frame of the death burst at (center_x, center_y). progress 0..1."""
    if progress >= 1.0:
        return
    max_r = cell_size * 1.8 * (0.3 + progress * 0.7)
    for i, (r_frac, alpha) in enumerate([
        (0.25, 220), (0.5, 180), (0.75, 120), (1.0, 60),
    ]):
        r = max_r * r_frac
        a = int(alpha * (1.0 - progress))
        if a <= 0 or r < 2:
            continue
        color = (255, 255, 80) if i < 2 else (255, 180, 40)
        s = pygame.Surface((int(r * 2.5), int(r * 2.5)))
        s.set_colorkey((0, 0, 0))
        pygame.draw.circle(s, color, (int(r * 1.25), int(r * 1.25)), int(r))
        s.set_alpha(a)
        surface.blit(s, (center_x - r * 1.25, center_y - r * 1.25))


def draw_game(surface: pygame.Surface, font: pygame.font.Font, game: Game, config: ScreenConfig, bold: bool = False) -> None:
    surface.fill(BG)
    draw_board(surface, game.board, config, bold=bold)
    draw_fruit(surface, game, config, font)
    draw_player(surface, game.player, config)
    draw_ghosts(surface, game, config)
    draw_panel(surface, font, game, config)


def draw_title_screen(surface: pygame.Surface, font: pygame.font.Font) -> None:
    surface.fill(BG)
    lines = [
        "MAZE CHASE",
        "",
        "Arrow keys to move.",
        "Eat every dot. Power pills turn the ghosts blue for a while.",
        "SPACE pauses, Q quits.",
        "",
        "Press SPACE to start.",
    ]
    y = 80
    for line in lines:
        text = font.render(line, True, TEXT_COLOR)
        surface.blit(text, (40, y))
        y += 32
    pygame.display.flip()


def draw_game_over_screen(surface: pygame.Surface, font: pygame.font.Font, score: int, high_score: int) -> None:
    overlay = pygame.Surface(surface.get_size())
    overlay.fill((40, 0, 0))
    overlay.set_alpha(200)
    surface.blit(overlay, (0, 0))
    lines = [
        ("GAME  OVER", (255, 80, 80)),
        (f"Score: {score}   High: {high_score}", PACMAN_YELLOW),
        ("Another game? Y/N", TEXT_COLOR),
    ]
    y = surface.get_height() // 2 - 50
    for line, color in lines:
        text = font.render(line, True, color)
        surface.blit(text, text.get_rect(center=(surface.get_width() // 2, y)))
        y += 40
    pygame.display.flip()
