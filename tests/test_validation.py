import math
import pytest

from atlas_sim.core.config import SceneConfig
from atlas_sim.objects.body import Body, BodyRole
from atlas_sim.physics.orbit import OrbitParams
from atlas_sim.simulation.playback import SimulationClock


def test_orbit_params_reject_zero_period():
    with pytest.raises(ValueError, match="Orbit period must be positive"):
        OrbitParams(radius=9.0, inclination=0.0, raan=0.0, period=0.0)


def test_orbit_params_reject_negative_period():
    with pytest.raises(ValueError, match="Orbit period must be positive"):
        OrbitParams(radius=9.0, inclination=0.0, raan=0.0, period=-1.0)


def test_orbit_params_reject_non_positive_radius():
    with pytest.raises(ValueError, match="Orbit radius must be positive"):
        OrbitParams(radius=0.0, inclination=0.0, raan=0.0)

    with pytest.raises(ValueError, match="Orbit radius must be positive"):
        OrbitParams(radius=-3.0, inclination=0.0, raan=0.0)


def test_orbit_params_reject_non_finite_angles():
    with pytest.raises(ValueError, match="Inclination must be finite"):
        OrbitParams(radius=9.0, inclination=math.nan, raan=0.0)

    with pytest.raises(ValueError, match="RAAN must be finite"):
        OrbitParams(radius=9.0, inclination=0.0, raan=math.inf)

    with pytest.raises(ValueError, match="Phase must be finite"):
        OrbitParams(radius=9.0, inclination=0.0, raan=0.0, phase=-math.inf)


def test_orbit_params_are_immutable():
    params = OrbitParams(radius=9.0, inclination=0.0, raan=0.0)
    with pytest.raises(AttributeError):
        params.radius = 10.0


def test_body_validates_id():
    params = OrbitParams(radius=9.0, inclination=0.0, raan=0.0)
    with pytest.raises(ValueError, match="Body ID cannot be empty"):
        Body(body_id="  ", name="X", role=BodyRole.TRACKER, params=params)


def test_body_validates_role():
    params = OrbitParams(radius=9.0, inclination=0.0, raan=0.0)
    with pytest.raises(ValueError, match="Unknown body role"):
        Body(body_id="SAT-1", name="X", role="tracker", params=params)


def test_body_validates_color():
    params = OrbitParams(radius=9.0, inclination=0.0, raan=0.0)
    with pytest.raises(ValueError, match="24-bit"):
        Body(body_id="SAT-1", name="X", role=BodyRole.TRACKER, params=params, color=0x1000000)


def test_clock_rejects_negative_elapsed():
    with pytest.raises(ValueError, match="Elapsed time must be non-negative"):
        SimulationClock(elapsed_s=-1.0)


def test_scene_config_validation():
    with pytest.raises(ValueError, match="tracker_time_scale"):
        SceneConfig(tracker_time_scale=-0.1)

    with pytest.raises(ValueError, match="Observation range must be positive"):
        SceneConfig(observation_range=0.0)

    with pytest.raises(ValueError, match="link_dim_opacity"):
        SceneConfig(link_dim_opacity=1.5)

    with pytest.raises(ValueError, match="Pulse rate must be positive"):
        SceneConfig(pulse_rate=0.0)

    with pytest.raises(ValueError, match="at least 3 segments"):
        SceneConfig(orbit_path_segments=2)

    with pytest.raises(ValueError, match="Background count"):
        SceneConfig(background_count=-1)


def test_scene_config_defaults():
    cfg = SceneConfig()
    assert cfg.tracker_time_scale == 0.4
    assert cfg.target_time_scale == 0.3
    assert cfg.background_time_scale == 0.25
    assert cfg.observation_range == 15.0
    assert cfg.camera_radius == 38.0
