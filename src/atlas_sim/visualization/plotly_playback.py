from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import plotly.graph_objects as go

from atlas_sim.physics.orbit import orbit_path
from atlas_sim.objects.body import BodyRole
from atlas_sim.simulation.engine import SimulationLog
from atlas_sim.simulation.scenario import Scenario
from atlas_sim.visualization.plotly_viewer import earth_mesh, hex_color, scene_layout, scene_xyz


def build_playback_figure(
    scenario: Scenario,
    log: SimulationLog,
    show_earth: bool = True,
    frame_stride: int = 1,
) -> go.Figure:
    """
    Animated playback of a recorded run.
    Assumes all bodies were logged at the same time stamps.
    """
    body_ids = [b.body_id for b in scenario.body_list() if b.body_id in log.body_positions]
    if not body_ids:
        raise ValueError("No body positions found in log.")

    ref = log.body_positions[body_ids[0]]
    times_full = [t for (t, _r) in ref]
    idxs = list(range(0, len(times_full), max(1, frame_stride)))
    times = [times_full[i] for i in idxs]

    for bid in body_ids:
        if len(log.body_positions[bid]) != len(times_full):
            raise ValueError(f"Body {bid} has {len(log.body_positions[bid])} samples, expected {len(times_full)}.")

    target = scenario.target
    fig = go.Figure()

    if show_earth:
        ex, ey, ez = earth_mesh()
        fig.add_trace(go.Surface(x=ex, y=ey, z=ez, showscale=False, opacity=0.35, name="Earth"))

    # Static orbit paths
    for body in scenario.body_list():
        if body.role is BodyRole.BACKGROUND:
            continue
        xs, ys, zs = scene_xyz(orbit_path(body.params))
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs, mode="lines", opacity=0.3,
            name=f"{body.name} orbit", line=dict(color=hex_color(body.color)),
        ))

    # One marker trace per body (updated each frame)
    marker_trace_idxs: Dict[str, int] = {}
    for bid in body_ids:
        body = scenario.body(bid)
        xs, ys, zs = scene_xyz([log.body_positions[bid][0][1]])
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs, mode="markers", name=body.name,
            marker=dict(size=3 if body.role is BodyRole.BACKGROUND else 6, color=hex_color(body.color)),
        ))
        marker_trace_idxs[bid] = len(fig.data) - 1

    # One link trace per tracker (empty while the link is down)
    link_trace_idxs: Dict[str, int] = {}
    if target is not None:
        for tracker_id in log.link_activity:
            tracker = scenario.body(tracker_id)
            fig.add_trace(go.Scatter3d(
                x=[], y=[], z=[], mode="lines", name=f"{tracker.name} link",
                line=dict(color=hex_color(tracker.color), width=4),
            ))
            link_trace_idxs[tracker_id] = len(fig.data) - 1

    frames: List[go.Frame] = []
    for fi, i in enumerate(idxs):
        frame_data = []
        frame_traces = []

        for bid in body_ids:
            xs, ys, zs = scene_xyz([log.body_positions[bid][i][1]])
            frame_data.append(go.Scatter3d(x=xs, y=ys, z=zs, mode="markers"))
            frame_traces.append(marker_trace_idxs[bid])

        for tracker_id, trace_idx in link_trace_idxs.items():
            samples = log.link_activity[tracker_id]
            active = i < len(samples) and samples[i][1]
            if active:
                a = log.body_positions[tracker_id][i][1]
                b = log.body_positions[target.body_id][i][1]
                xs, ys, zs = scene_xyz([a, b])
            else:
                xs, ys, zs = [], [], []
            frame_data.append(go.Scatter3d(x=xs, y=ys, z=zs, mode="lines"))
            frame_traces.append(trace_idx)

        frames.append(go.Frame(name=str(fi), data=frame_data, traces=frame_traces))

    fig.frames = frames

    # Slider steps (don't include every step if huge)
    step_stride = max(1, len(times) // 50)
    slider_steps = [
        dict(
            method="animate",
            args=[[str(i)], {"mode": "immediate", "frame": {"duration": 0, "redraw": True}}],
            label=f"{times[i]:.1f}s",
        )
        for i in range(0, len(times), step_stride)
    ]

    fig.update_layout(
        **scene_layout("ATLAS — Multi-Sensor Acquisition Playback"),
        updatemenus=[dict(
            type="buttons",
            showactive=True,
            buttons=[
                dict(label="Play", method="animate",
                     args=[None, {"frame": {"duration": 40, "redraw": True}, "fromcurrent": True}]),
                dict(label="Pause", method="animate",
                     args=[[None], {"frame": {"duration": 0, "redraw": False}, "mode": "immediate"}]),
            ],
        )],
        sliders=[dict(steps=slider_steps, active=0)],
    )
    return fig


def render_playback(
    scenario: Scenario,
    log: SimulationLog,
    out_html: str = "out/atlas_playback.html",
    show_earth: bool = True,
    frame_stride: int = 1,
) -> str:
    fig = build_playback_figure(scenario, log, show_earth=show_earth, frame_stride=frame_stride)
    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html
