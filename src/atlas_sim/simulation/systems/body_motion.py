from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from atlas_sim.core.constants import EARTH_ROTATION_RATE, TARGET_GLOW_AMPLITUDE, TARGET_GLOW_RATE
from atlas_sim.objects.body import BodyRole
from atlas_sim.physics.orbit import heading, heading_rotation
from atlas_sim.simulation.engine import SimulationLog
from atlas_sim.simulation.state import SceneState


@dataclass
class BodyMotionSystem:
    """
    Moves every body along its orbit at its role's time scale.

    Trackers face their direction of travel; debris tumbles. Also drives the
    Earth spin and the target glow pulse.
    """
    name: str = "body_motion"

    def on_step(self, state: SceneState, log: Optional[SimulationLog]) -> None:
        t = state.elapsed_s
        lookahead = state.config.heading_lookahead

        for body in state.scenario.body_list():
            t_orbit = state.orbit_time(body)
            body.position = body.position_at(t_orbit)

            if body.role is BodyRole.TRACKER:
                body.heading = heading(body.params, t_orbit, lookahead)
                body.rotation = heading_rotation(body.heading)
            elif body.role is BodyRole.TARGET:
                body.rotation = (t * 0.5, t * 0.3, 0.0)
            else:
                body.rotation = (t * 0.3, 0.0, t * 0.2)

        state.earth_rotation_y = t * EARTH_ROTATION_RATE
        state.target_glow_scale = 1.0 + math.sin(t * TARGET_GLOW_RATE) * TARGET_GLOW_AMPLITUDE
