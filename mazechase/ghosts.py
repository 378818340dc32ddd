"""
Ghost movement AI: house wandering, leaving through the gate, greedy pursuit/scatter/flee
and the trip home after being eaten. Plus ghost-player collision lookup.
"""
import random
from typing import Dict, List, Optional, Tuple

from mazechase.board import Board, Square, is_passable
from mazechase.entities import Ghost, GhostState, Player, Role
from mazechase.grid import Direction, Position
from mazechase.schedule import Period, period, slow_percent

# Candidate order of the greedy pathfinder; the first best candidate wins ties.
SEARCH_ORDER = [Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP]
WANDER_DIRS = [Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN]
EXIT_HEADINGS = [Direction.LEFT, Direction.RIGHT]

AMBUSH_LOOKAHEAD = 4
CLYDE_SHY_DIST_SQR = 64


def next_move(
    ghost: Ghost, board: Board, target: Position
) -> Tuple[Direction, Position, bool]:
    """
    Greedy one-step search toward `target` (away from it while vulnerable).

    Returns (direction, position, moved). Reversing is only allowed while vulnerable.
    With no legal candidate the ghost keeps its position and facing and `moved` is False.
    """
    flee = ghost.vulnerable
    best: Optional[Tuple[int, Direction, Position]] = None
    for d in SEARCH_ORDER:
        if not flee and d is ghost.direction.opposite:
            continue
        p = ghost.pos.go(d)
        if not is_passable(board[p]):
            continue
        dist = target.dist_city(p)
        if best is None or (dist > best[0] if flee else dist < best[0]):
            best = (dist, d, p)
    if best is None:
        return ghost.direction, ghost.pos, False
    return best[1], best[2], True


def projected_ahead(player: Player, board: Board, steps: int = AMBUSH_LOOKAHEAD) -> Position:
    """Player position `steps` squares along its movement, clamped to the board."""
    col, row = player.pos.col, player.pos.row
    if player.moving is Direction.LEFT:
        col = max(0, col - steps)
    elif player.moving is Direction.RIGHT:
        col = min(board.width - 1, col + steps)
    elif player.moving is Direction.UP:
        row = max(0, row - steps)
    else:
        row = min(board.height - 1, row + steps)
    return Position.from_xy(col, row)


def ghost_with_role(ghosts: List[Ghost], role: Role) -> Ghost:
    for g in ghosts:
        if g.role is role:
            return g
    raise LookupError(f"no ghost with role {role.name}")


def chase_target(ghost: Ghost, player: Player, ghosts: List[Ghost], board: Board) -> Position:
    """Where `ghost` heads during a chase period."""
    role = ghost.role
    if role is Role.PINKY:
        return player.pos
    if role is Role.BLINKY:
        return projected_ahead(player, board)
    if role is Role.INKY:
        return player.pos.average(ghost_with_role(ghosts, Role.BLINKY).pos)
    # CLYDE: gives up the chase and heads for its corner when far away
    if ghost.pos.dist_sqr(player.pos) < CLYDE_SHY_DIST_SQR:
        return player.pos
    return role.scatter_corner


def chase_targets(ghosts: List[Ghost], player: Player, board: Board) -> Dict[Role, Position]:
    """Chase targets for every ghost, computed before any of them moves this tick."""
    return {g.role: chase_target(g, player, ghosts, board) for g in ghosts}


def is_slowed(ghost: Ghost, board: Board, level: int, rng: random.Random) -> bool:
    pct = slow_percent(level, board.is_tunnel(ghost.pos), ghost.vulnerable)
    return rng.randrange(100) < pct


def nearest_gate_front(ghost: Ghost, board: Board) -> Position:
    fronts = (board.front_of_gate1, board.front_of_gate2)
    return min(fronts, key=lambda p: p.dist_city(ghost.pos))


def step_ghost(
    ghost: Ghost,
    board: Board,
    player: Player,
    target: Position,
    level: int,
    level_ms: int,
    rng: random.Random,
) -> None:
    """Advance one ghost by one tick. `target` is its chase target for this tick."""
    if ghost.state is GhostState.HOME:
        pos = ghost.pos.go(rng.choice(WANDER_DIRS))
        square = board[pos]
        if square is Square.HOUSE:
            ghost.direction, ghost.pos = Direction.LEFT, pos
        elif square is Square.GATE:
            ghost.state = GhostState.GATEWAY
            ghost.direction, ghost.pos = Direction.LEFT, pos

    elif ghost.state is GhostState.GATEWAY:
        ghost.state = GhostState.OUTSIDE
        ghost.direction = rng.choice(EXIT_HEADINGS)
        ghost.pos = ghost.pos.go(Direction.UP)

    elif ghost.state is GhostState.DEAD:
        if ghost.pos in (board.front_of_gate1, board.front_of_gate2):
            ghost.direction, ghost.pos = Direction.DOWN, ghost.pos.go(Direction.DOWN)
        elif ghost.pos in (board.gate1, board.gate2):
            ghost.state = GhostState.HOME
            ghost.pos = ghost.pos.go(Direction.DOWN)
        else:
            ghost.direction, ghost.pos, _ = next_move(ghost, board, nearest_gate_front(ghost, board))

    elif ghost.state is GhostState.OUTSIDE:
        if is_slowed(ghost, board, level, rng):
            return
        if ghost.vulnerable:
            goal = player.pos
        elif period(level, level_ms) is Period.CHASE:
            goal = target
        else:
            goal = ghost.role.scatter_corner
        ghost.direction, ghost.pos, _ = next_move(ghost, board, goal)


def move_ghosts(
    ghosts: List[Ghost],
    board: Board,
    player: Player,
    level: int,
    level_ms: int,
    elapsed_ms: int,
    rng: random.Random,
) -> None:
    """Decay every ghost's vulnerability and advance each one a tick, in role order."""
    targets = chase_targets(ghosts, player, board)
    for g in ghosts:
        g.decay(elapsed_ms)
        step_ghost(g, board, player, targets[g.role], level, level_ms, rng)


def ghosts_at(ghosts: List[Ghost], pos: Position) -> List[Ghost]:
    """Live (not dead) ghosts standing on `pos`."""
    return [g for g in ghosts if g.state is not GhostState.DEAD and g.pos == pos]
