from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from atlas_sim.core.constants import HEADING_LOOKAHEAD, ORBIT_PATH_SEGMENTS, TWO_PI
from atlas_sim.core.frames import Vector3, norm, normalize, rot_x, rot_y, sub


@dataclass(frozen=True)
class OrbitParams:
    """
    Simplified circular orbit used by the animation.

    Units:
        radius: scene units
        inclination: tilt of the orbital plane about the X axis, radians
        raan: swing of the tilted plane about the vertical (Y) axis, radians
        phase: angular offset at t=0, radians
        period: orbit time units per radian of travel (one revolution takes period * 2π)
    """
    radius: float
    inclination: float
    raan: float
    phase: float = 0.0
    period: float = 1.0

    def __post_init__(self):
        if not math.isfinite(self.radius) or self.radius <= 0:
            raise ValueError(f"Orbit radius must be positive. Got: {self.radius}")
        if not math.isfinite(self.period) or self.period <= 0:
            raise ValueError(f"Orbit period must be positive. Got: {self.period}")
        if not math.isfinite(self.inclination):
            raise ValueError(f"Inclination must be finite. Got: {self.inclination}")
        if not math.isfinite(self.raan):
            raise ValueError(f"RAAN must be finite. Got: {self.raan}")
        if not math.isfinite(self.phase):
            raise ValueError(f"Phase must be finite. Got: {self.phase}")

    @property
    def revolution_time(self) -> float:
        """Orbit time needed for one full revolution."""
        return self.period * TWO_PI


def orbital_position(params: OrbitParams, t: float) -> Vector3:
    """
    Position on the orbit at orbit time t.

    The point starts on a circle in the XZ plane, is tilted by the inclination
    about X and then swung about Y by the RAAN. Pure: no cached state.
    """
    angle = t / params.period + params.phase
    x = math.cos(angle) * params.radius
    z = math.sin(angle) * params.radius

    # Inclination (y is zero in-plane, so only z contributes)
    y_inclined = -z * math.sin(params.inclination)
    z_inclined = z * math.cos(params.inclination)

    # RAAN
    x_final = x * math.cos(params.raan) + z_inclined * math.sin(params.raan)
    z_final = -x * math.sin(params.raan) + z_inclined * math.cos(params.raan)

    return (x_final, y_inclined, z_final)


def orbit_path(params: OrbitParams, segments: int = ORBIT_PATH_SEGMENTS) -> List[Vector3]:
    """
    Closed polyline of one revolution: segments + 1 points, first == last.
    """
    if segments < 3:
        raise ValueError(f"Orbit path needs at least 3 segments. Got: {segments}")
    rev = params.revolution_time
    return [orbital_position(params, rev * i / segments) for i in range(segments + 1)]


def orbit_tangent(params: OrbitParams, t: float) -> Vector3:
    """Unit tangent of the orbit at orbit time t, in the direction of travel."""
    angle = t / params.period + params.phase
    in_plane = (-math.sin(angle), 0.0, math.cos(angle))
    return rot_y(params.raan, rot_x(params.inclination, in_plane))


def heading(params: OrbitParams, t: float, lookahead: float = HEADING_LOOKAHEAD) -> Vector3:
    """
    Unit direction of travel, from the displacement over a small lookahead.

    Falls back to the exact tangent when the lookahead is lost to rounding
    (very large t), so this never fails for a valid orbit.
    """
    if lookahead <= 0:
        raise ValueError(f"Lookahead must be positive. Got: {lookahead}")
    here = orbital_position(params, t)
    ahead = orbital_position(params, t + lookahead)
    step = sub(ahead, here)
    if norm(step) == 0:
        return orbit_tangent(params, t)
    return normalize(step)


def heading_rotation(direction: Vector3) -> Vector3:
    """
    Euler angles (pitch, yaw, roll) in YXZ order that turn an object's +Z
    axis to point along direction. Roll is always zero.
    """
    dx, dy, dz = normalize(direction)
    yaw = math.atan2(dx, dz)
    pitch = math.atan2(-dy, math.hypot(dx, dz))
    return (pitch, yaw, 0.0)
