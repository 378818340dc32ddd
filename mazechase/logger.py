"""
Session logging: games, levels, game events and keypresses, written as one JSON file per session.
"""
import json
import os
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from mazechase.game import Event


def _ts() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _time_sec() -> float:
    return time.perf_counter()


class SessionLogger:
    def __init__(self, log_dir: str = "logs", session_id: str | None = None):
        self.log_dir = log_dir
        self.session_id = session_id or str(uuid.uuid4())[:8]
        self.session_start_sec: float | None = None
        self.events: List[Dict[str, Any]] = []
        self.keypresses: List[Dict[str, Any]] = []
        os.makedirs(log_dir, exist_ok=True)

    def start_session(self) -> None:
        self.session_start_sec = _time_sec()
        self.events.append({
            "event": "session_start",
            "session_id": self.session_id,
            "timestamp_iso": _ts(),
            "timestamp_sec": self.session_start_sec,
        })

    def log_game_start(self, game_index: int, high_score: int) -> None:
        self.events.append({
            "event": "game_start",
            "game_index": game_index,
            "high_score": high_score,
            "timestamp_sec": _time_sec(),
            "timestamp_iso": _ts(),
        })

    def log_level_start(self, level: int, maze_name: str, dots: int) -> None:
        self.events.append({
            "event": "level_start",
            "level": level,
            "maze": maze_name,
            "dots": dots,
            "timestamp_sec": _time_sec(),
            "timestamp_iso": _ts(),
        })

    def log_level_end(self, level: int, score: int) -> None:
        self.events.append({
            "event": "level_end",
            "level": level,
            "score": score,
            "timestamp_sec": _time_sec(),
            "timestamp_iso": _ts(),
        })

    def log_game_event(self, event: Event, score: int, lives: int) -> None:
        pos = event.position
        self.events.append({
            "event": event.kind.value,
            "value": event.value,
            "cell": None if pos is None else (pos.col, pos.row),
            "score": score,
            "lives": lives,
            "timestamp_sec": _time_sec(),
            "timestamp_iso": _ts(),
        })

    def log_game_end(self, game_index: int, score: int, level: int, user_quit: bool) -> None:
        self.events.append({
            "event": "game_end",
            "game_index": game_index,
            "score": score,
            "level": level,
            "user_quit": user_quit,
            "timestamp_sec": _time_sec(),
            "timestamp_iso": _ts(),
        })

    def log_key(self, key_name: str) -> None:
        self.keypresses.append({
            "key": key_name,
            "timestamp_sec": _time_sec(),
            "timestamp_iso": _ts(),
        })

    def end_session(self) -> str:
        self.events.append({
            "event": "session_end",
            "timestamp_sec": _time_sec(),
            "timestamp_iso": _ts(),
        })
        path = os.path.join(
            self.log_dir,
            f"session_{self.session_id}_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}.json",
        )
        data = {
            "session_id": self.session_id,
            "events": self.events,
            "keypresses": self.keypresses,
        }
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        return path
