from __future__ import annotations

import math
from typing import Tuple

Vector3 = Tuple[float, float, float]

ORIGIN: Vector3 = (0.0, 0.0, 0.0)


def rot_x(angle_rad: float, v: Vector3) -> Vector3:
    """Rotation about the X axis (tilts the orbital plane by inclination)."""
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (x, c * y - s * z, s * y + c * z)


def rot_y(angle_rad: float, v: Vector3) -> Vector3:
    """Rotation about the vertical Y axis (swings the plane by RAAN)."""
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (c * x + s * z, y, -s * x + c * z)


def dot(a: Vector3, b: Vector3) -> float:
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]-b[0], a[1]-b[1], a[2]-b[2])


def norm(a: Vector3) -> float:
    return math.sqrt(dot(a, a))


def distance(a: Vector3, b: Vector3) -> float:
    return norm(sub(a, b))


def lerp(a: Vector3, b: Vector3, t: float) -> Vector3:
    return (
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    )


def normalize(a: Vector3) -> Vector3:
    n = norm(a)
    if n == 0:
        raise ValueError("Cannot normalize a zero vector.")
    return (a[0]/n, a[1]/n, a[2]/n)
