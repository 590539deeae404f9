from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict

from atlas_sim.core.config import DEFAULT_CONFIG, SceneConfig
from atlas_sim.core.constants import CAMERA_HEIGHT_AMPLITUDE, CAMERA_HEIGHT_BASE, CAMERA_RADIUS
from atlas_sim.core.frames import ORIGIN, Vector3
from atlas_sim.objects.body import Body, BodyRole
from atlas_sim.physics.visibility import ObservationLink, PulseMarker
from atlas_sim.simulation.playback import SimulationClock
from atlas_sim.simulation.scenario import Scenario


@dataclass
class CameraState:
    angle: float = 0.0
    radius: float = CAMERA_RADIUS
    height_base: float = CAMERA_HEIGHT_BASE
    height_amplitude: float = CAMERA_HEIGHT_AMPLITUDE
    height: float = CAMERA_HEIGHT_BASE
    aspect: float = 1.0
    look_at: Vector3 = ORIGIN

    @property
    def position(self) -> Vector3:
        return (math.sin(self.angle) * self.radius, self.height, math.cos(self.angle) * self.radius)


@dataclass
class SceneState:
    """
    Everything one frame update reads and writes.

    Frame systems are the only writers of body frame state, links, pulses and
    camera; everyone else reads the latest snapshot.
    """
    scenario: Scenario
    config: SceneConfig = DEFAULT_CONFIG
    clock: SimulationClock = field(default_factory=SimulationClock)
    camera: CameraState = field(default_factory=CameraState)
    links: Dict[str, ObservationLink] = field(default_factory=dict)
    pulses: Dict[str, PulseMarker] = field(default_factory=dict)

    earth_rotation_y: float = 0.0
    target_glow_scale: float = 1.0
    frame: int = 0

    @property
    def elapsed_s(self) -> float:
        return self.clock.elapsed_s

    def time_scale_for(self, role: BodyRole) -> float:
        if role is BodyRole.TRACKER:
            return self.config.tracker_time_scale
        if role is BodyRole.TARGET:
            return self.config.target_time_scale
        return self.config.background_time_scale

    def orbit_time(self, body: Body) -> float:
        """Orbit-function time for a body at the current elapsed time."""
        return self.clock.elapsed_s * self.time_scale_for(body.role)
