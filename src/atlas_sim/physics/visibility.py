from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from atlas_sim.core.constants import (
    LINK_DIM_OPACITY,
    LINK_VISIBLE_OPACITY,
    OBSERVATION_RANGE,
    PULSE_OFFSET,
    PULSE_RATE,
    PULSE_SCALE_AMPLITUDE,
)
from atlas_sim.core.frames import ORIGIN, Vector3, distance, lerp

# Line endpoints before a link has ever been active
IDLE_ENDPOINTS: Tuple[Vector3, Vector3] = (ORIGIN, (1.0, 0.0, 0.0))


@dataclass
class ObservationLink:
    tracker_id: str
    endpoint_a: Vector3
    endpoint_b: Vector3
    active: bool
    opacity: float
    distance: float


@dataclass
class PulseMarker:
    tracker_id: str
    position: Vector3
    scale: float
    visible: bool
    pulse_t: float


def can_observe(tracker_pos: Vector3, target_pos: Vector3, range_threshold: float = OBSERVATION_RANGE) -> bool:
    """
    Range-gated line of sight: strictly inside the threshold.
    Coincident positions count as observable.
    """
    return distance(tracker_pos, target_pos) < range_threshold


def evaluate_link(
    tracker_id: str,
    tracker_pos: Vector3,
    target_pos: Vector3,
    range_threshold: float = OBSERVATION_RANGE,
    previous: Optional[ObservationLink] = None,
    visible_opacity: float = LINK_VISIBLE_OPACITY,
    dim_opacity: float = LINK_DIM_OPACITY,
) -> ObservationLink:
    """
    Observation link between one tracker and the target.

    Active links span tracker -> target at the visible opacity. Inactive links
    keep the endpoints of the previous evaluation (or the idle segment) and
    drop to the dim opacity.
    """
    if range_threshold <= 0:
        raise ValueError(f"Range threshold must be positive. Got: {range_threshold}")

    d = distance(tracker_pos, target_pos)
    if can_observe(tracker_pos, target_pos, range_threshold):
        return ObservationLink(
            tracker_id=tracker_id,
            endpoint_a=tracker_pos,
            endpoint_b=target_pos,
            active=True,
            opacity=visible_opacity,
            distance=d,
        )

    if previous is not None:
        a, b = previous.endpoint_a, previous.endpoint_b
    else:
        a, b = IDLE_ENDPOINTS
    return ObservationLink(
        tracker_id=tracker_id,
        endpoint_a=a,
        endpoint_b=b,
        active=False,
        opacity=dim_opacity,
        distance=d,
    )


def pulse_t(t: float, index: int, offset: float = PULSE_OFFSET, rate: float = PULSE_RATE) -> float:
    """Sweep parameter in [0, 1); restarts every 1/rate time units."""
    return (rate * t + index * offset) % 1.0


def pulse_scale(pt: float) -> float:
    """1 at both ends of the sweep, 1.5 at the middle."""
    return 1.0 + math.sin(pt * math.pi) * PULSE_SCALE_AMPLITUDE


def pulse_marker(
    link: ObservationLink,
    t: float,
    index: int,
    offset: float = PULSE_OFFSET,
    rate: float = PULSE_RATE,
) -> PulseMarker:
    """
    Marker travelling tracker -> target along an active link.
    Hidden (and parked on the tracker end) while the link is inactive.
    """
    pt = pulse_t(t, index, offset=offset, rate=rate)
    if not link.active:
        return PulseMarker(link.tracker_id, link.endpoint_a, 1.0, False, pt)
    return PulseMarker(
        tracker_id=link.tracker_id,
        position=lerp(link.endpoint_a, link.endpoint_b, pt),
        scale=pulse_scale(pt),
        visible=True,
        pulse_t=pt,
    )


def compute_access_windows(
    times_s: List[float],
    active_flags: List[bool],
) -> List[Tuple[float, float]]:
    """
    Convert a boolean link-activity time series into windows [t_start, t_end].
    Assumes times_s is sorted and evenly-ish spaced (works best with uniform dt).
    """
    if len(times_s) != len(active_flags):
        raise ValueError("times_s and active_flags must be same length.")

    windows: List[Tuple[float, float]] = []
    in_pass = False
    t_start: Optional[float] = None

    for t, active in zip(times_s, active_flags):
        if active and not in_pass:
            in_pass = True
            t_start = t
        elif (not active) and in_pass:
            in_pass = False
            windows.append((t_start if t_start is not None else times_s[0], t))
            t_start = None

    if in_pass and t_start is not None:
        windows.append((t_start, times_s[-1]))

    return windows
