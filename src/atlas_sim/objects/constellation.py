"""
Orbit parameters for the ATLAS demonstration constellation.

Trackers and the target use fixed, hand-picked planes so the three sensor
orbits visibly diverge. Background debris is rolled once per body from an
injected random source.
"""
from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, Tuple

from atlas_sim.core.constants import BACKGROUND_COUNT, TWO_PI
from atlas_sim.objects.body import Body, BodyRole
from atlas_sim.physics.orbit import OrbitParams
from atlas_sim.simulation.scenario import Scenario

logger = logging.getLogger(__name__)

# (name, main color) per tracker
TRACKER_STYLES: List[Tuple[str, int]] = [
    ("ATLAS-1", 0x00D4FF),
    ("ATLAS-2", 0x8B5CF6),
    ("ATLAS-3", 0x10B981),
]
TARGET_COLOR: int = 0xEF4444
BACKGROUND_COLOR: int = 0x6B7280

_TRACKER_ORBITS: List[OrbitParams] = [
    OrbitParams(radius=9.0, inclination=math.pi * 0.15, raan=0.0, phase=0.0),
    OrbitParams(radius=9.5, inclination=math.pi * 0.25, raan=math.pi * 0.67, phase=math.pi * 0.4),
    OrbitParams(radius=8.5, inclination=math.pi * 0.1, raan=math.pi * 1.33, phase=math.pi * 0.8),
]

_TARGET_ORBIT = OrbitParams(
    radius=10.5,
    inclination=math.pi * 0.18,
    raan=math.pi * 0.3,
    phase=0.0,
    period=1.2,
)

# Background draw ranges
BG_RADIUS_RANGE: Tuple[float, float] = (7.0, 13.0)
BG_INCLINATION_MAX: float = math.pi * 0.2
BG_PERIOD_RANGE: Tuple[float, float] = (0.8, 2.3)

TRACKER_COUNT: int = len(_TRACKER_ORBITS)


def tracker_params(index: int) -> OrbitParams:
    if not (0 <= index < TRACKER_COUNT):
        raise IndexError(f"Tracker index must be in range [0, {TRACKER_COUNT - 1}]. Got: {index}")
    return _TRACKER_ORBITS[index]


def target_params() -> OrbitParams:
    return _TARGET_ORBIT


def background_params(rng: random.Random) -> OrbitParams:
    """
    One background orbit, drawn uniformly:
      radius in [7, 13], inclination in [-0.2π, 0.2π],
      raan and phase in [0, 2π), period in [0.8, 2.3].
    """
    return OrbitParams(
        radius=rng.uniform(*BG_RADIUS_RANGE),
        inclination=(rng.random() - 0.5) * 2.0 * BG_INCLINATION_MAX,
        raan=rng.random() * TWO_PI,
        phase=rng.random() * TWO_PI,
        period=rng.uniform(*BG_PERIOD_RANGE),
    )


def build_default_scenario(
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    background_count: int = BACKGROUND_COUNT,
) -> Scenario:
    """
    Three trackers, one target and background_count untracked debris.
    Pass seed (or a ready rng) for a reproducible background.
    """
    if background_count < 0:
        raise ValueError(f"Background count must be non-negative. Got: {background_count}")
    if rng is None:
        rng = random.Random(seed)

    scenario = Scenario(name="ATLAS multi-sensor acquisition")

    for i, (name, color) in enumerate(TRACKER_STYLES):
        scenario.add_body(Body(
            body_id=f"SAT-{i + 1:03d}",
            name=name,
            role=BodyRole.TRACKER,
            params=tracker_params(i),
            color=color,
        ))

    scenario.add_body(Body(
        body_id="DEB-TARGET",
        name="Target Debris",
        role=BodyRole.TARGET,
        params=target_params(),
        color=TARGET_COLOR,
    ))

    for i in range(background_count):
        scenario.add_body(Body(
            body_id=f"DEB-{i + 1:03d}",
            name=f"Debris {i + 1}",
            role=BodyRole.BACKGROUND,
            params=background_params(rng),
            color=BACKGROUND_COLOR,
        ))

    logger.info(f"Built scenario '{scenario.name}' with {len(scenario.bodies)} bodies ({background_count} background).")
    return scenario
