from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List

logger = logging.getLogger(__name__)


@dataclass
class SimulationClock:
    """
    Simulation time for one scene. Starts at (0, playing) and only moves
    forward, and only while playing.
    """
    elapsed_s: float = 0.0
    playing: bool = True

    def __post_init__(self):
        if self.elapsed_s < 0:
            raise ValueError(f"Elapsed time must be non-negative. Got: {self.elapsed_s}")

    def advance(self, dt_s: float) -> float:
        """Add dt_s while playing. Negative deltas are ignored."""
        if self.playing and dt_s > 0:
            self.elapsed_s += dt_s
        return self.elapsed_s


@dataclass
class PlaybackController:
    """
    Play/pause control over a SimulationClock.

    Only decides whether simulation time advances; the frame loop keeps
    running either way, so resuming never jumps ahead.
    """
    clock: SimulationClock
    listeners: List[Callable[[bool], None]] = field(default_factory=list)

    @property
    def playing(self) -> bool:
        return self.clock.playing

    @playing.setter
    def playing(self, value: bool) -> None:
        value = bool(value)
        if value == self.clock.playing:
            return
        self.clock.playing = value
        logger.info(f"Playback {'resumed' if value else 'paused'} at t={self.clock.elapsed_s:.3f}s")
        for listener in self.listeners:
            listener(value)

    def toggle(self) -> bool:
        self.playing = not self.playing
        return self.playing

    def play(self) -> None:
        self.playing = True

    def pause(self) -> None:
        self.playing = False

    def subscribe(self, listener: Callable[[bool], None]) -> None:
        self.listeners.append(listener)
