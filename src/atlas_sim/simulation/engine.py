from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple

from atlas_sim.core.frames import Vector3
from atlas_sim.physics.visibility import compute_access_windows
from atlas_sim.simulation.state import SceneState


class System(Protocol):
    """
    Plugin interface for frame systems.
    Each system runs once per frame, in order, and may write to the log.
    """
    name: str

    def on_step(self, state: SceneState, log: Optional["SimulationLog"]) -> None:
        ...


@dataclass
class SimulationLog:
    """
    Stores outputs from a recorded run.
    Keep it simple and serializable.
    """
    # Positions: body_id -> list of (t, position)
    body_positions: Dict[str, List[Tuple[float, Vector3]]] = field(default_factory=dict)

    # Link activity: tracker_id -> list of (t, active)
    link_activity: Dict[str, List[Tuple[float, bool]]] = field(default_factory=dict)

    # Link acquired / lost transitions
    events: List[Dict[str, Any]] = field(default_factory=list)

    def record_position(self, body_id: str, t_s: float, position: Vector3) -> None:
        self.body_positions.setdefault(body_id, []).append((t_s, position))

    def record_link(self, tracker_id: str, t_s: float, active: bool) -> None:
        self.link_activity.setdefault(tracker_id, []).append((t_s, active))

    def record_event(self, t_s: float, kind: str, **details: Any) -> None:
        self.events.append({"t": t_s, "event": kind, **details})

    def link_windows(self, tracker_id: str) -> List[Tuple[float, float]]:
        samples = self.link_activity.get(tracker_id, [])
        return compute_access_windows([t for t, _ in samples], [a for _, a in samples])


def step_scene(state: SceneState, systems: List[System], log: Optional[SimulationLog] = None) -> SceneState:
    """Run every system once against state, in order."""
    for sys in systems:
        sys.on_step(state, log)
    state.frame += 1
    return state


@dataclass
class Engine:
    """
    Fixed-step replay engine.
    Deterministic: given same scenario + dt + start/end => same output.
    Sets simulation time directly, independent of play/pause.
    """
    dt_s: float
    systems: List[System] = field(default_factory=list)

    def run(self, state: SceneState, t_start_s: float, t_end_s: float) -> SimulationLog:
        if self.dt_s <= 0:
            raise ValueError("dt_s must be positive.")
        if t_start_s < 0:
            raise ValueError("t_start_s must be non-negative.")
        if t_end_s < t_start_s:
            raise ValueError("t_end_s must be >= t_start_s.")

        log = SimulationLog()
        step = 0

        # Inclusive end if it lands exactly; otherwise last tick < end
        while True:
            t = t_start_s + step * self.dt_s
            if t > t_end_s + 1e-9:
                break
            state.clock.elapsed_s = t
            step_scene(state, self.systems, log)
            step += 1

        return log
