from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from atlas_sim.physics.visibility import evaluate_link, pulse_marker
from atlas_sim.simulation.engine import SimulationLog
from atlas_sim.simulation.state import SceneState


@dataclass
class ObservationSystem:
    """
    Re-evaluates each tracker -> target link and its pulse marker.
    Expects body positions for this frame to be current.
    """
    name: str = "observation"

    def on_step(self, state: SceneState, log: Optional[SimulationLog]) -> None:
        target = state.scenario.target
        if target is None:
            state.links.clear()
            state.pulses.clear()
            return

        cfg = state.config
        t = state.elapsed_s
        for index, tracker in enumerate(state.scenario.trackers()):
            link = evaluate_link(
                tracker.body_id,
                tracker.position,
                target.position,
                range_threshold=cfg.observation_range,
                previous=state.links.get(tracker.body_id),
                visible_opacity=cfg.link_visible_opacity,
                dim_opacity=cfg.link_dim_opacity,
            )
            state.links[tracker.body_id] = link
            state.pulses[tracker.body_id] = pulse_marker(
                link, t, index, offset=cfg.pulse_offset, rate=cfg.pulse_rate,
            )
