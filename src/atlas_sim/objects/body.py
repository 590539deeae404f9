from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from atlas_sim.core.frames import ORIGIN, Vector3
from atlas_sim.physics.orbit import OrbitParams, orbital_position


class BodyRole(Enum):
    TRACKER = "tracker"
    TARGET = "target"
    BACKGROUND = "background"


@dataclass
class Body:
    """
    A body moving on a circular orbit in the scene.

    position/rotation are derived per frame from (params, time), heading for
    trackers only. Only the scene update writes them.
    """
    body_id: str
    name: str
    role: BodyRole
    params: OrbitParams
    color: int = 0xFFFFFF

    position: Vector3 = ORIGIN
    rotation: Vector3 = ORIGIN
    heading: Vector3 = (0.0, 0.0, 1.0)

    def __post_init__(self):
        if not self.body_id.strip():
            raise ValueError("Body ID cannot be empty or whitespace.")
        if not isinstance(self.role, BodyRole):
            raise ValueError(f"Unknown body role: {self.role!r}")
        if not (0 <= self.color <= 0xFFFFFF):
            raise ValueError(f"Color must be a 24-bit RGB value. Got: {self.color}")

    def position_at(self, t: float) -> Vector3:
        """Position at orbit time t. Does not touch the cached frame state."""
        return orbital_position(self.params, t)
