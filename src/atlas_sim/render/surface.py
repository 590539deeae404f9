"""
Collaborator interfaces the scene driver talks to.

The driver never imports a concrete renderer: a host wires in anything that
satisfies RenderSurface (a WebGL bridge, the in-memory SceneGraph, ...), a
Viewport that reports the container size, and a Scheduler that calls back
once per display frame.
"""
from __future__ import annotations

from typing import Callable, Hashable, List, Protocol, Tuple

from atlas_sim.core.frames import Vector3

FrameCallback = Callable[[float], None]


class RenderSurfaceUnavailable(RuntimeError):
    """The render surface cannot take draw calls right now (lost context, disposed)."""


class RenderSurface(Protocol):
    def create_body(self, body_id: str, role: str, color: int) -> None: ...

    def create_line(self, line_id: str, color: int, opacity: float) -> None: ...

    def create_marker(self, marker_id: str, color: int) -> None: ...

    def create_orbit_path(self, path_id: str, points: List[Vector3], color: int, opacity: float) -> None: ...

    def set_position(self, object_id: str, position: Vector3) -> None: ...

    def set_rotation(self, object_id: str, rotation: Vector3) -> None: ...

    def set_scale(self, object_id: str, scale: float) -> None: ...

    def set_visible(self, object_id: str, visible: bool) -> None: ...

    def set_line(self, line_id: str, a: Vector3, b: Vector3, opacity: float) -> None: ...

    def set_camera(self, position: Vector3, target: Vector3, aspect: float) -> None: ...

    def set_size(self, width: int, height: int) -> None: ...

    def render(self) -> None: ...

    def dispose(self) -> None: ...


class Viewport(Protocol):
    def size(self) -> Tuple[int, int]: ...


class Scheduler(Protocol):
    def schedule(self, callback: FrameCallback) -> Hashable: ...

    def cancel(self, handle: Hashable) -> None: ...
