from __future__ import annotations

import math

# Per-role fractions of elapsed time fed to the orbit function
TRACKER_TIME_SCALE: float = 0.4
TARGET_TIME_SCALE: float = 0.3
BACKGROUND_TIME_SCALE: float = 0.25

# Lookahead (orbit time units) used to orient a body along its track
HEADING_LOOKAHEAD: float = 0.01

# Observation links
OBSERVATION_RANGE: float = 15.0
LINK_VISIBLE_OPACITY: float = 0.6
LINK_DIM_OPACITY: float = 0.1
PULSE_RATE: float = 2.0
PULSE_OFFSET: float = 0.3
PULSE_SCALE_AMPLITUDE: float = 0.5

# Camera orbit around the scene origin
CAMERA_RATE: float = 0.08
CAMERA_RADIUS: float = 38.0
CAMERA_HEIGHT_BASE: float = 18.0
CAMERA_HEIGHT_AMPLITUDE: float = 5.0
CAMERA_HEIGHT_RATE: float = 0.15

# Decorative motion
EARTH_RADIUS: float = 5.0
EARTH_ROTATION_RATE: float = 0.05
TARGET_GLOW_RATE: float = 3.0
TARGET_GLOW_AMPLITUDE: float = 0.2

ORBIT_PATH_SEGMENTS: int = 128
BACKGROUND_COUNT: int = 8

TWO_PI: float = 2.0 * math.pi
