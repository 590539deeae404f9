"""
Scene update driver.

Owns the per-frame loop: advance the clock (only while playing), run the
frame systems, push the result onto the render surface and render. The loop
reschedules itself every frame whether playing or paused.

Lifecycle: STOPPED --start()--> RUNNING --dispose()--> DISPOSED. dispose() is
also valid from STOPPED and is idempotent.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Hashable, List, Optional, Set

from atlas_sim.objects.body import BodyRole
from atlas_sim.physics.orbit import orbit_path
from atlas_sim.physics.visibility import IDLE_ENDPOINTS
from atlas_sim.render.surface import RenderSurface, RenderSurfaceUnavailable, Scheduler, Viewport
from atlas_sim.simulation.engine import SimulationLog, System, step_scene
from atlas_sim.simulation.playback import PlaybackController
from atlas_sim.simulation.state import SceneState
from atlas_sim.simulation.systems.body_motion import BodyMotionSystem
from atlas_sim.simulation.systems.camera_system import CameraSystem
from atlas_sim.simulation.systems.observation_system import ObservationSystem

logger = logging.getLogger(__name__)

EARTH_ID = "earth"
EARTH_COLOR = 0x1A4A7A
ORBIT_PATH_OPACITY = 0.3


def default_frame_systems() -> List[System]:
    """Motion first; links read this frame's positions."""
    return [BodyMotionSystem(), ObservationSystem(), CameraSystem()]


def link_line_id(tracker_id: str) -> str:
    return f"link:{tracker_id}"


def pulse_marker_id(tracker_id: str) -> str:
    return f"pulse:{tracker_id}"


def orbit_path_id(body_id: str) -> str:
    return f"orbit:{body_id}"


def glow_marker_id(body_id: str) -> str:
    return f"glow:{body_id}"


class DriverStatus(Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    DISPOSED = "disposed"


class SceneDriver:
    def __init__(
        self,
        state: SceneState,
        scheduler: Scheduler,
        systems: Optional[List[System]] = None,
        playback: Optional[PlaybackController] = None,
        log: Optional[SimulationLog] = None,
    ):
        self.state = state
        self.scheduler = scheduler
        self.systems = systems if systems is not None else default_frame_systems()
        self.playback = playback if playback is not None else PlaybackController(state.clock)
        if self.playback.clock is not state.clock:
            raise ValueError("Playback controller must drive the scene's own clock.")
        self.log = log

        self.status = DriverStatus.STOPPED
        self.surface: Optional[RenderSurface] = None
        self.viewport: Optional[Viewport] = None
        self.skipped_frames = 0
        self._handle: Optional[Hashable] = None
        self._last_timestamp: Optional[float] = None
        # Objects already created on a surface, so a retried start() finishes the setup
        self._setup_surface: Optional[RenderSurface] = None
        self._created: Set[str] = set()

    @property
    def running(self) -> bool:
        return self.status is DriverStatus.RUNNING

    def start(self, surface: Optional[RenderSurface], viewport: Optional[Viewport] = None) -> bool:
        """
        Build the scene on surface and schedule the first frame.
        Returns False (and stays inert) when there is nothing to render to.
        """
        if self.status is DriverStatus.DISPOSED:
            logger.warning("Scene driver already disposed; ignoring start().")
            return False
        if self.running:
            return True
        if surface is None:
            logger.warning("No render surface available; animation loop not started.")
            return False

        try:
            self._build_scene(surface)
        except RenderSurfaceUnavailable as e:
            logger.warning(f"Render surface unavailable during setup ({e}); animation loop not started.")
            return False

        self.surface = surface
        self.viewport = viewport
        if viewport is not None:
            self.on_resize(*viewport.size())

        self.status = DriverStatus.RUNNING
        self._last_timestamp = None
        self._handle = self.scheduler.schedule(self.tick)
        logger.info(f"Scene driver running with {len(self.state.scenario.bodies)} bodies.")
        return True

    def tick(self, timestamp_s: float) -> None:
        """One frame. Called by the scheduler."""
        if not self.running:
            return
        self._handle = None

        if self._last_timestamp is None:
            dt = 0.0
        else:
            dt = max(0.0, timestamp_s - self._last_timestamp)
        self._last_timestamp = timestamp_s

        self.state.clock.advance(dt)
        step_scene(self.state, self.systems, self.log)

        try:
            self._write_frame(self.surface)
            self.surface.render()
        except RenderSurfaceUnavailable as e:
            self.skipped_frames += 1
            logger.debug(f"Frame {self.state.frame} skipped: {e}")

        if self.running:
            self._handle = self.scheduler.schedule(self.tick)

    def on_resize(self, width: int, height: int) -> None:
        """Viewport changed: update aspect and output size only."""
        surface = self.surface
        if self.status is DriverStatus.DISPOSED or surface is None:
            return
        if width <= 0 or height <= 0:
            return

        cam = self.state.camera
        cam.aspect = width / height
        try:
            surface.set_size(width, height)
            surface.set_camera(cam.position, cam.look_at, cam.aspect)
        except RenderSurfaceUnavailable as e:
            logger.debug(f"Resize ignored: {e}")

    def dispose(self) -> None:
        if self.status is DriverStatus.DISPOSED:
            return
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        if self.surface is not None:
            self.surface.dispose()
            self.surface = None
        self.viewport = None
        self._setup_surface = None
        self._created.clear()
        self.status = DriverStatus.DISPOSED
        logger.info(f"Scene driver disposed at t={self.state.elapsed_s:.3f}s after {self.state.frame} frames.")

    def _create_once(self, object_id: str, create, *args) -> None:
        if object_id in self._created:
            return
        create(object_id, *args)
        self._created.add(object_id)

    def _build_scene(self, surface: RenderSurface) -> None:
        scenario = self.state.scenario
        config = self.state.config

        if surface is not self._setup_surface:
            self._setup_surface = surface
            self._created = set()

        self._create_once(EARTH_ID, surface.create_body, "earth", EARTH_COLOR)

        for body in scenario.body_list():
            self._create_once(body.body_id, surface.create_body, body.role.value, body.color)
            if body.role is not BodyRole.BACKGROUND:
                self._create_once(
                    orbit_path_id(body.body_id),
                    surface.create_orbit_path,
                    orbit_path(body.params, config.orbit_path_segments),
                    body.color,
                    ORBIT_PATH_OPACITY,
                )

        target = scenario.target
        if target is not None:
            self._create_once(glow_marker_id(target.body_id), surface.create_marker, target.color)
            surface.set_visible(glow_marker_id(target.body_id), True)

        for tracker in scenario.trackers():
            line_id = link_line_id(tracker.body_id)
            self._create_once(line_id, surface.create_line, tracker.color, config.link_visible_opacity)
            surface.set_line(line_id, *IDLE_ENDPOINTS, config.link_visible_opacity)
            self._create_once(pulse_marker_id(tracker.body_id), surface.create_marker, tracker.color)

    def _write_frame(self, surface: RenderSurface) -> None:
        state = self.state

        surface.set_rotation(EARTH_ID, (0.0, state.earth_rotation_y, 0.0))

        for body in state.scenario.body_list():
            surface.set_position(body.body_id, body.position)
            surface.set_rotation(body.body_id, body.rotation)

        target = state.scenario.target
        if target is not None:
            glow_id = glow_marker_id(target.body_id)
            surface.set_position(glow_id, target.position)
            surface.set_scale(glow_id, state.target_glow_scale)

        for tracker_id, link in state.links.items():
            surface.set_line(link_line_id(tracker_id), link.endpoint_a, link.endpoint_b, link.opacity)
        for tracker_id, pulse in state.pulses.items():
            marker_id = pulse_marker_id(tracker_id)
            surface.set_visible(marker_id, pulse.visible)
            if pulse.visible:
                surface.set_position(marker_id, pulse.position)
                surface.set_scale(marker_id, pulse.scale)

        cam = state.camera
        surface.set_camera(cam.position, cam.look_at, cam.aspect)
