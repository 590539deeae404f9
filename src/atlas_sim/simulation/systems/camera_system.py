from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from atlas_sim.core.frames import ORIGIN
from atlas_sim.simulation.engine import SimulationLog
from atlas_sim.simulation.state import SceneState


@dataclass
class CameraSystem:
    """Slow fly-around: fixed radius, bobbing height, always aimed at the origin."""
    name: str = "camera"

    def on_step(self, state: SceneState, log: Optional[SimulationLog]) -> None:
        cfg = state.config
        cam = state.camera
        t = state.elapsed_s

        cam.radius = cfg.camera_radius
        cam.height_base = cfg.camera_height_base
        cam.height_amplitude = cfg.camera_height_amplitude
        cam.angle = t * cfg.camera_rate
        cam.height = cam.height_base + math.sin(t * cfg.camera_height_rate) * cam.height_amplitude
        cam.look_at = ORIGIN
