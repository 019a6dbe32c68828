"""Short tone cues played in response to engine events."""

from __future__ import annotations

import logging
import math
from array import array
from dataclasses import dataclass
from typing import Dict, Tuple

import pygame

from .events import BonusAppeared, FoodEaten, GameEvent, GameOver

logger = logging.getLogger(__name__)

# ===========================
#  Tone Configuration
# ===========================


@dataclass(frozen=True)
class Note:
    freq: float
    duration_ms: int
    waveform: str = "sine"  # "sine", "square", "sawtooth"
    gain: float = 0.1
    delay_ms: int = 0  # offset from the start of the cue


# One cue can chain several notes, e.g. the rising bonus arpeggio
CUES: Dict[str, Tuple[Note, ...]] = {
    "eat": (Note(600, 100, "sine", 0.1),),
    "bonus_appear": (
        Note(880, 100, "sine", 0.1),
        Note(1320, 100, "sine", 0.08, delay_ms=100),
        Note(1760, 100, "sine", 0.06, delay_ms=200),
    ),
    "bonus_eat": (
        Note(440, 100, "square", 0.1),
        Note(880, 200, "square", 0.1, delay_ms=100),
    ),
    "over": (
        Note(440, 100, "sawtooth", 0.1),
        Note(220, 300, "sawtooth", 0.1, delay_ms=100),
    ),
}


def cue_for(event: GameEvent) -> str | None:
    """Map an engine event to the name of the cue that should play."""
    if isinstance(event, FoodEaten):
        return "bonus_eat" if event.is_bonus else "eat"
    if isinstance(event, BonusAppeared):
        return "bonus_appear"
    if isinstance(event, GameOver):
        return "over"
    return None


def render_cue(notes: Tuple[Note, ...], sample_rate: int, channels: int = 1) -> array:
    """Mix the notes of a cue into a signed 16-bit buffer (interleaved)."""
    end_ms = max(note.delay_ms + note.duration_ms for note in notes)
    samples = [0.0] * max(1, int(sample_rate * end_ms / 1000))
    two_pi = 2.0 * math.pi

    for note in notes:
        start = int(sample_rate * note.delay_ms / 1000)
        count = int(sample_rate * note.duration_ms / 1000)
        # Short linear fade at both ends to avoid clicks
        fade = max(1, min(count // 10, int(sample_rate * 0.005)))
        for idx in range(count):
            t = idx / sample_rate
            cycle_pos = (note.freq * t) % 1.0
            if note.waveform == "square":
                wave = 1.0 if cycle_pos < 0.5 else -1.0
            elif note.waveform == "sawtooth":
                wave = 2.0 * cycle_pos - 1.0
            else:
                wave = math.sin(two_pi * note.freq * t)
            env = min(1.0, idx / fade, (count - idx) / fade)
            samples[start + idx] += wave * note.gain * env

    return array(
        "h",
        (
            int(max(-32767, min(32767, val * 32767)))
            for val in samples
            for _ in range(channels)
        ),
    )


# ===========================
#   Audio Subscriber
# ===========================


class AudioCues:
    """EventSink listener that plays a tone per event through pygame.mixer."""

    def __init__(self, master_volume: float = 1.0) -> None:
        self.enabled = False
        self.sample_rate: int = 32000
        self.channels: int = 1
        self.master_volume = master_volume
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self._init_audio()

    def _init_audio(self) -> None:
        """Initialise pygame.mixer and synthesise the cues we need."""
        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=1)
        except pygame.error as exc:
            logger.warning("Audio disabled, mixer failed to initialise: %s", exc)
            self.enabled = False
            self.sounds.clear()
            return

        mixer_info = pygame.mixer.get_init()
        if mixer_info:
            self.sample_rate = mixer_info[0]
            self.channels = mixer_info[2]
        for name, notes in CUES.items():
            buffer = render_cue(notes, self.sample_rate, self.channels)
            sound = pygame.mixer.Sound(buffer=buffer)
            sound.set_volume(self.master_volume)
            self.sounds[name] = sound
        self.enabled = True

    def __call__(self, event: GameEvent) -> None:
        name = cue_for(event)
        if name is not None:
            self.play(name)

    def play(self, name: str) -> None:
        """Play the named cue; unknown names are ignored."""
        if not self.enabled:
            return
        sound = self.sounds.get(name)
        if not sound:
            return
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("Audio disabled after playback error: %s", exc)
            self.enabled = False
