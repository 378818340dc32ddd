"""
Time and level tables: scatter/chase periods, fruit bonus, ghost slow-down odds,
fruit trip counter values and host tick pacing.
"""
from enum import Enum
from typing import Tuple


class Period(Enum):
    SCATTER = "scatter"
    CHASE = "chase"


# (end_ms exclusive, period) windows of a level; chase after the last one.
PERIOD_WINDOWS = [
    (7000, Period.SCATTER),
    (27000, Period.CHASE),
    (34000, Period.SCATTER),
    (54000, Period.CHASE),
    (59000, Period.SCATTER),
]

# The first level gets one more scatter before chasing for good.
FIRST_LEVEL_EXTRA_WINDOWS = [
    (79000, Period.CHASE),
    (84000, Period.SCATTER),
]


def period(level: int, level_ms: int) -> Period:
    """Period in force `level_ms` milliseconds into `level`."""
    windows = PERIOD_WINDOWS + (FIRST_LEVEL_EXTRA_WINDOWS if level == 0 else [])
    for end_ms, p in windows:
        if level_ms < end_ms:
            return p
    return Period.CHASE


def level_bonus(level: int) -> Tuple[str, int]:
    """(fruit name, points) shown and awarded on `level`."""
    if level == 0:
        return ("cherries", 100)
    if level == 1:
        return ("strawberry", 300)
    if level <= 3:
        return ("peach", 500)
    if level <= 5:
        return ("apple", 700)
    if level <= 7:
        return ("grapes", 1000)
    if level <= 9:
        return ("galaxian", 2000)
    if level <= 11:
        return ("bell", 3000)
    return ("key", 5000)


def slow_percent(level: int, in_tunnel: bool, vulnerable: bool) -> int:
    """Chance (0-100) that an outside ghost skips its move this tick."""
    if level == 0:
        tunnel_pct, vulnerable_pct, base_pct = 60, 60, 25
    elif level <= 3:
        tunnel_pct, vulnerable_pct, base_pct = 55, 50, 15
    else:
        tunnel_pct, vulnerable_pct, base_pct = 50, 45, 5
    if in_tunnel:
        return tunnel_pct
    if vulnerable:
        return vulnerable_pct
    return base_pct


FRUIT_TRIP_HIGH = 174
FRUIT_TRIP_LOW = 74


def fruit_trips(dots: int) -> Tuple[int, int]:
    """
    Dot counter values that open the fruit window. The counter starts at dots + 2;
    both values are always reached, the extra two tokens are spent on them.
    """
    high = min(FRUIT_TRIP_HIGH, dots + 1)
    low = max(1, min(FRUIT_TRIP_LOW, high - 1))
    return (high, low)


def tick_interval_ms(level: int, any_vulnerable: bool) -> int:
    """Wall-clock pause the host takes between steps; the game speeds up with level."""
    if level == 0:
        delta = 140
    elif level <= 3:
        delta = 130
    else:
        delta = 120
    if any_vulnerable:
        delta -= 20
    return delta
