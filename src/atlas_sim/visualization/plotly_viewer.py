from __future__ import annotations

import math
from pathlib import Path
from typing import List, Sequence, Tuple

import plotly.graph_objects as go

from atlas_sim.core.constants import EARTH_RADIUS
from atlas_sim.core.frames import Vector3
from atlas_sim.render.scene_graph import SceneGraph


def hex_color(color: int) -> str:
    return f"#{color:06x}"


def scene_xyz(points: Sequence[Vector3]) -> Tuple[List[float], List[float], List[float]]:
    """
    Split scene points into plotly x/y/z lists.
    The scene is Y-up; plotly is Z-up, so scene y and z are swapped.
    """
    xs = [p[0] for p in points]
    ys = [p[2] for p in points]
    zs = [p[1] for p in points]
    return xs, ys, zs


def earth_mesh(radius: float = EARTH_RADIUS, n_lat: int = 30, n_lon: int = 60):
    # Create a sphere mesh (parametric)
    lats = [(-math.pi / 2) + i * (math.pi / (n_lat - 1)) for i in range(n_lat)]
    lons = [(-math.pi) + j * (2 * math.pi / (n_lon - 1)) for j in range(n_lon)]

    x, y, z = [], [], []
    for lat in lats:
        row_x, row_y, row_z = [], [], []
        for lon in lons:
            row_x.append(radius * math.cos(lat) * math.cos(lon))
            row_y.append(radius * math.cos(lat) * math.sin(lon))
            row_z.append(radius * math.sin(lat))
        x.append(row_x); y.append(row_y); z.append(row_z)
    return x, y, z


def scene_layout(title: str) -> dict:
    return dict(
        title=title,
        scene=dict(
            xaxis_title="X",
            yaxis_title="Z",
            zaxis_title="Y (up)",
            aspectmode="data",
        ),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
        paper_bgcolor="#000000",
        font=dict(color="#e6edf3"),
    )


def build_snapshot_figure(graph: SceneGraph, show_earth: bool = True) -> go.Figure:
    """
    Static figure of the current scene graph:
      - Earth sphere
      - Orbit paths
      - Bodies at their current positions
      - Observation links (dim ones drawn faint) and visible pulse markers
    """
    fig = go.Figure()

    if show_earth:
        ex, ey, ez = earth_mesh()
        fig.add_trace(go.Surface(x=ex, y=ey, z=ez, showscale=False, opacity=0.35, name="Earth"))

    for path in graph.of_kind("orbit_path"):
        xs, ys, zs = scene_xyz(path.points)
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode="lines",
            name=path.object_id,
            opacity=path.opacity,
            line=dict(color=hex_color(path.color)),
        ))

    for body in graph.of_kind("body"):
        if body.role == "earth":
            continue
        xs, ys, zs = scene_xyz([body.position])
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode="markers",
            name=body.object_id,
            marker=dict(size=6 if body.role != "background" else 3, color=hex_color(body.color)),
        ))

    for line in graph.of_kind("line"):
        xs, ys, zs = scene_xyz(line.points)
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode="lines",
            name=line.object_id,
            opacity=line.opacity,
            line=dict(color=hex_color(line.color), width=4),
        ))

    for marker in graph.of_kind("marker"):
        if not marker.visible or marker.object_id.startswith("glow:"):
            continue
        xs, ys, zs = scene_xyz([marker.position])
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode="markers",
            name=marker.object_id,
            marker=dict(size=3 * marker.scale, color=hex_color(marker.color)),
        ))

    fig.update_layout(**scene_layout("ATLAS — Multi-Sensor Acquisition (Snapshot)"))
    return fig


def render_scene_snapshot(
    graph: SceneGraph,
    out_html: str = "out/atlas_snapshot.html",
    show_earth: bool = True,
) -> str:
    fig = build_snapshot_figure(graph, show_earth=show_earth)
    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html
