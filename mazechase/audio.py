"""
Sound effects through pygame.mixer. Any audio failure silences the sound instead of
interrupting the game.
"""
import os
from typing import Dict, Optional

import pygame

from mazechase.game import EventKind

SOUND_FILES = {
    "die": "die.ogg",
    "eat_pill": "eatpill.ogg",
    "eat_ghost": "eatghost.ogg",
    "extra_life": "extra_lives.ogg",
    "opening_song": "opening_song.ogg",
}

EVENT_SOUNDS = {
    EventKind.PILL_EATEN: "eat_pill",
    EventKind.FRUIT_EATEN: "eat_pill",
    EventKind.GHOST_EATEN: "eat_ghost",
    EventKind.EXTRA_LIFE: "extra_life",
    EventKind.LEVEL_COMPLETE: "opening_song",
    EventKind.PLAYER_DIED: "die",
}


class SoundBoard:
    def __init__(self, sound_dir: str = "Audio", enabled: bool = True):
        self.sound_dir = sound_dir
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.enabled = enabled and self._init_mixer()
        if self.enabled:
            self._load()

    @staticmethod
    def _init_mixer() -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            return True
        except pygame.error as e:
            print(f"[audio] mixer init failed, sound disabled: {e}")
            return False

    def _load(self) -> None:
        for name, filename in SOUND_FILES.items():
            path = os.path.join(self.sound_dir, filename)
            if not os.path.exists(path):
                continue
            try:
                self.sounds[name] = pygame.mixer.Sound(path)
            except pygame.error as e:
                print(f"[audio] failed to load {path}: {e}")

    def play(self, name: str) -> Optional[pygame.mixer.Channel]:
        """Play `name` if it is loaded. Returns the channel, or None when nothing played."""
        if not self.enabled:
            return None
        sound = self.sounds.get(name)
        if sound is None:
            return None
        try:
            return sound.play()
        except pygame.error as e:
            print(f"[audio] playback of {name} failed: {e}")
            return None

    def play_event(self, kind: EventKind) -> None:
        name = EVENT_SOUNDS.get(kind)
        if name is not None:
            self.play(name)
