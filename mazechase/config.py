"""
Game configuration: JSON file with defaults for anything left out.
"""
import json
import os
from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class GameConfig:
    lives: int = 3
    high_score: int = 9710
    pill_duration_ms: int = 6000
    start_level: int = 0
    seed: Optional[int] = None
    cell_size: int = 24
    maze_file: Optional[str] = None
    sound_dir: str = "Audio"
    sound_enabled: bool = True
    log_dir: str = "logs"


def load_config(path: str) -> GameConfig:
    """Read `path` into a GameConfig. Unknown keys are ignored; a missing file gives defaults."""
    if not os.path.exists(path):
        return GameConfig()
    with open(path) as f:
        cfg = json.load(f)
    defaults = GameConfig()
    known = {f.name: cfg.get(f.name, getattr(defaults, f.name)) for f in fields(GameConfig)}
    return GameConfig(
        lives=int(known["lives"]),
        high_score=int(known["high_score"]),
        pill_duration_ms=int(known["pill_duration_ms"]),
        start_level=int(known["start_level"]),
        seed=None if known["seed"] is None else int(known["seed"]),
        cell_size=int(known["cell_size"]),
        maze_file=known["maze_file"],
        sound_dir=str(known["sound_dir"]),
        sound_enabled=bool(known["sound_enabled"]),
        log_dir=str(known["log_dir"]),
    )
