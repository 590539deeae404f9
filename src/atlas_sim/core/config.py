"""
Scene configuration.

Every pacing and presentation constant of the animation lives here so a host
can tune the look without touching the frame systems. Defaults reproduce the
stock ATLAS demonstration.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from atlas_sim.core import constants as C


@dataclass(frozen=True)
class SceneConfig:
    # Fractions of elapsed time fed to the orbit function, per role
    tracker_time_scale: float = C.TRACKER_TIME_SCALE
    target_time_scale: float = C.TARGET_TIME_SCALE
    background_time_scale: float = C.BACKGROUND_TIME_SCALE
    heading_lookahead: float = C.HEADING_LOOKAHEAD

    observation_range: float = C.OBSERVATION_RANGE
    link_visible_opacity: float = C.LINK_VISIBLE_OPACITY
    link_dim_opacity: float = C.LINK_DIM_OPACITY
    pulse_rate: float = C.PULSE_RATE
    pulse_offset: float = C.PULSE_OFFSET

    camera_rate: float = C.CAMERA_RATE
    camera_radius: float = C.CAMERA_RADIUS
    camera_height_base: float = C.CAMERA_HEIGHT_BASE
    camera_height_amplitude: float = C.CAMERA_HEIGHT_AMPLITUDE
    camera_height_rate: float = C.CAMERA_HEIGHT_RATE

    orbit_path_segments: int = C.ORBIT_PATH_SEGMENTS
    background_count: int = C.BACKGROUND_COUNT

    def __post_init__(self):
        for name in ("tracker_time_scale", "target_time_scale", "background_time_scale"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be finite and non-negative. Got: {value}")
        if self.heading_lookahead <= 0:
            raise ValueError(f"Heading lookahead must be positive. Got: {self.heading_lookahead}")
        if self.observation_range <= 0:
            raise ValueError(f"Observation range must be positive. Got: {self.observation_range}")
        for name in ("link_visible_opacity", "link_dim_opacity"):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise ValueError(f"{name} must be in range [0, 1]. Got: {value}")
        if self.pulse_rate <= 0:
            raise ValueError(f"Pulse rate must be positive. Got: {self.pulse_rate}")
        if self.camera_radius <= 0:
            raise ValueError(f"Camera radius must be positive. Got: {self.camera_radius}")
        if self.orbit_path_segments < 3:
            raise ValueError(f"Orbit path needs at least 3 segments. Got: {self.orbit_path_segments}")
        if self.background_count < 0:
            raise ValueError(f"Background count must be non-negative. Got: {self.background_count}")


DEFAULT_CONFIG = SceneConfig()
