from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from atlas_sim.simulation.engine import SimulationLog
from atlas_sim.simulation.state import SceneState


@dataclass
class StateRecorderSystem:
    name: str = "state_recorder"

    def on_step(self, state: SceneState, log: Optional[SimulationLog]) -> None:
        if log is None:
            return
        for body in state.scenario.body_list():
            log.record_position(body.body_id, state.elapsed_s, body.position)


@dataclass
class LinkRecorderSystem:
    """Records link activity per frame plus acquired/lost transitions."""
    name: str = "link_recorder"

    def on_step(self, state: SceneState, log: Optional[SimulationLog]) -> None:
        if log is None:
            return
        t = state.elapsed_s
        for tracker_id, link in state.links.items():
            history = log.link_activity.get(tracker_id)
            if history and history[-1][1] != link.active:
                log.record_event(
                    t, "link_acquired" if link.active else "link_lost",
                    tracker_id=tracker_id, distance=link.distance,
                )
            log.record_link(tracker_id, t, link.active)
