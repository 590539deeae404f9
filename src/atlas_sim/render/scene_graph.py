from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from atlas_sim.core.frames import ORIGIN, Vector3
from atlas_sim.render.surface import RenderSurfaceUnavailable

logger = logging.getLogger(__name__)


@dataclass
class SceneObject:
    object_id: str
    kind: str                     # "body", "line", "marker" or "orbit_path"
    color: int
    role: Optional[str] = None
    position: Vector3 = ORIGIN
    rotation: Vector3 = ORIGIN
    scale: float = 1.0
    visible: bool = True
    opacity: float = 1.0
    points: List[Vector3] = field(default_factory=list)


@dataclass
class FixedViewport:
    width: int = 1280
    height: int = 720

    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass
class SceneGraph:
    """
    In-memory render surface.

    Holds the latest state of every scene object so headless runs can be
    inspected or exported. Set available=False to simulate a lost context.
    """
    objects: Dict[str, SceneObject] = field(default_factory=dict)
    camera_position: Vector3 = ORIGIN
    camera_target: Vector3 = ORIGIN
    aspect: float = 1.0
    width: int = 0
    height: int = 0
    render_count: int = 0
    available: bool = True
    disposed: bool = False

    def _require(self) -> None:
        if self.disposed:
            raise RenderSurfaceUnavailable("Scene graph has been disposed.")
        if not self.available:
            raise RenderSurfaceUnavailable("Scene graph is unavailable.")

    def _add(self, obj: SceneObject) -> None:
        self._require()
        if obj.object_id in self.objects:
            raise ValueError(f"Duplicate scene object ID: {obj.object_id}")
        self.objects[obj.object_id] = obj

    def _get(self, object_id: str) -> SceneObject:
        self._require()
        try:
            return self.objects[object_id]
        except KeyError:
            raise KeyError(f"Unknown scene object: {object_id}") from None

    def create_body(self, body_id: str, role: str, color: int) -> None:
        self._add(SceneObject(body_id, "body", color, role=role))

    def create_line(self, line_id: str, color: int, opacity: float) -> None:
        self._add(SceneObject(line_id, "line", color, opacity=opacity, points=[ORIGIN, (1.0, 0.0, 0.0)]))

    def create_marker(self, marker_id: str, color: int) -> None:
        self._add(SceneObject(marker_id, "marker", color, visible=False))

    def create_orbit_path(self, path_id: str, points: List[Vector3], color: int, opacity: float) -> None:
        self._add(SceneObject(path_id, "orbit_path", color, opacity=opacity, points=list(points)))

    def set_position(self, object_id: str, position: Vector3) -> None:
        self._get(object_id).position = position

    def set_rotation(self, object_id: str, rotation: Vector3) -> None:
        self._get(object_id).rotation = rotation

    def set_scale(self, object_id: str, scale: float) -> None:
        self._get(object_id).scale = scale

    def set_visible(self, object_id: str, visible: bool) -> None:
        self._get(object_id).visible = visible

    def set_line(self, line_id: str, a: Vector3, b: Vector3, opacity: float) -> None:
        line = self._get(line_id)
        line.points = [a, b]
        line.opacity = opacity

    def set_camera(self, position: Vector3, target: Vector3, aspect: float) -> None:
        self._require()
        self.camera_position = position
        self.camera_target = target
        self.aspect = aspect

    def set_size(self, width: int, height: int) -> None:
        self._require()
        self.width = width
        self.height = height

    def render(self) -> None:
        self._require()
        self.render_count += 1

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        logger.debug(f"Scene graph disposed after {self.render_count} renders.")

    def of_kind(self, kind: str) -> List[SceneObject]:
        return [o for o in self.objects.values() if o.kind == kind]
