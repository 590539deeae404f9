"""
Tests for the frame systems (motion, observation, camera, recorders).
"""
import math

import pytest

from atlas_sim.core.config import SceneConfig
from atlas_sim.physics.orbit import orbital_position
from atlas_sim.simulation.engine import SimulationLog, step_scene
from atlas_sim.simulation.state import SceneState
from atlas_sim.simulation.systems.body_motion import BodyMotionSystem
from atlas_sim.simulation.systems.camera_system import CameraSystem
from atlas_sim.simulation.systems.observation_system import ObservationSystem
from atlas_sim.simulation.systems.state_recorder import LinkRecorderSystem, StateRecorderSystem


def frame_systems():
    return [BodyMotionSystem(), ObservationSystem(), CameraSystem()]


class TestBodyMotionSystem:
    def test_system_creation(self):
        assert BodyMotionSystem().name == "body_motion"

    def test_per_role_time_scales(self, scene_state):
        scene_state.clock.elapsed_s = 10.0
        BodyMotionSystem().on_step(scene_state, None)

        scenario = scene_state.scenario
        for tracker in scenario.trackers():
            assert tracker.position == orbital_position(tracker.params, 10.0 * 0.4)
        target = scenario.target
        assert target.position == orbital_position(target.params, 10.0 * 0.3)
        for debris in scenario.background():
            assert debris.position == orbital_position(debris.params, 10.0 * 0.25)

    def test_trackers_face_direction_of_travel(self, scene_state):
        scene_state.clock.elapsed_s = 3.0
        BodyMotionSystem().on_step(scene_state, None)
        for tracker in scene_state.scenario.trackers():
            pitch, yaw, roll = tracker.rotation
            dx, dy, dz = tracker.heading
            assert yaw == pytest.approx(math.atan2(dx, dz))
            assert roll == 0.0

    def test_heading_only_for_trackers(self, scene_state):
        scene_state.clock.elapsed_s = 3.0
        BodyMotionSystem().on_step(scene_state, None)
        scenario = scene_state.scenario
        assert scenario.target.heading == (0.0, 0.0, 1.0)
        for debris in scenario.background():
            assert debris.heading == (0.0, 0.0, 1.0)

    def test_motion_far_into_the_run(self, scene_state):
        scene_state.clock.elapsed_s = 1e15
        step_scene(scene_state, frame_systems())
        for tracker in scene_state.scenario.trackers():
            assert math.hypot(*tracker.heading) == pytest.approx(1.0)
            assert all(math.isfinite(a) for a in tracker.rotation)

    def test_decor(self, scene_state):
        scene_state.clock.elapsed_s = 2.0
        BodyMotionSystem().on_step(scene_state, None)
        assert scene_state.earth_rotation_y == pytest.approx(0.1)
        assert scene_state.target_glow_scale == pytest.approx(1.0 + math.sin(6.0) * 0.2)
        assert scene_state.scenario.target.rotation == pytest.approx((1.0, 0.6, 0.0))

    def test_zero_time_scale_freezes_role(self, scenario):
        state = SceneState(scenario=scenario, config=SceneConfig(tracker_time_scale=0.0))
        state.clock.elapsed_s = 50.0
        BodyMotionSystem().on_step(state, None)
        for tracker in scenario.trackers():
            assert tracker.position == orbital_position(tracker.params, 0.0)


class TestObservationSystem:
    def test_system_creation(self):
        assert ObservationSystem().name == "observation"

    def test_links_at_start(self, scene_state):
        step_scene(scene_state, frame_systems())
        assert set(scene_state.links) == {"SAT-001", "SAT-002", "SAT-003"}

        link = scene_state.links["SAT-001"]
        tracker = scene_state.scenario.body("SAT-001")
        target = scene_state.scenario.target
        # ATLAS-1 starts ~9 units from the target
        assert link.active is True
        assert link.endpoint_a == tracker.position
        assert link.endpoint_b == target.position

        pulse = scene_state.pulses["SAT-001"]
        assert pulse.visible is True
        assert pulse.pulse_t == 0.0
        assert pulse.position == pytest.approx(tracker.position)
        assert pulse.scale == 1.0

    def test_links_follow_configured_range(self, scenario):
        state = SceneState(scenario=scenario, config=SceneConfig(observation_range=0.5))
        step_scene(state, frame_systems())
        assert all(not link.active for link in state.links.values())
        assert all(link.opacity == 0.1 for link in state.links.values())
        assert all(not pulse.visible for pulse in state.pulses.values())

    def test_no_target_clears_links(self, scene_state):
        step_scene(scene_state, frame_systems())
        target_id = scene_state.scenario.target.body_id
        del scene_state.scenario.bodies[target_id]
        step_scene(scene_state, frame_systems())
        assert scene_state.links == {}
        assert scene_state.pulses == {}


class TestCameraSystem:
    def test_start_position(self, scene_state):
        CameraSystem().on_step(scene_state, None)
        assert scene_state.camera.position == pytest.approx((0.0, 18.0, 38.0))
        assert scene_state.camera.look_at == (0.0, 0.0, 0.0)

    def test_orbit(self, scene_state):
        t = 12.5
        scene_state.clock.elapsed_s = t
        CameraSystem().on_step(scene_state, None)
        angle = t * 0.08
        assert scene_state.camera.angle == pytest.approx(angle)
        assert scene_state.camera.position == pytest.approx((
            math.sin(angle) * 38.0,
            18.0 + math.sin(t * 0.15) * 5.0,
            math.cos(angle) * 38.0,
        ))


class TestRecorders:
    def test_state_recorder(self, scene_state):
        log = SimulationLog()
        systems = frame_systems() + [StateRecorderSystem()]
        step_scene(scene_state, systems, log)
        scene_state.clock.elapsed_s = 1.0
        step_scene(scene_state, systems, log)

        samples = log.body_positions["SAT-001"]
        assert [t for t, _ in samples] == [0.0, 1.0]
        assert samples[0][1] != samples[1][1]
        assert len(log.body_positions) == len(scene_state.scenario.bodies)

    def test_recorders_ignore_missing_log(self, scene_state):
        step_scene(scene_state, frame_systems() + [StateRecorderSystem(), LinkRecorderSystem()], None)

    def test_link_recorder_records_transitions(self, scene_state):
        log = SimulationLog()
        systems = frame_systems() + [LinkRecorderSystem()]
        for t in [0.0, 14.6]:
            scene_state.clock.elapsed_s = t
            step_scene(scene_state, systems, log)

        assert log.link_activity["SAT-001"] == [(0.0, True), (14.6, False)]
        lost = [e for e in log.events if e["tracker_id"] == "SAT-001"]
        assert len(lost) == 1
        assert lost[0]["event"] == "link_lost"
        assert lost[0]["t"] == 14.6
