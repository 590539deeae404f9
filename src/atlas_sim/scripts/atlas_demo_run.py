"""
Headless ATLAS demo.

Runs the live scene driver for a few seconds on the in-memory scene graph
(with a pause in the middle), writes a snapshot, then records a fixed-step
replay and writes an animated playback + JSON log.
"""
import logging

from atlas_sim.core.logging_config import setup_logging
from atlas_sim.objects.constellation import build_default_scenario
from atlas_sim.render.scene_graph import FixedViewport, SceneGraph
from atlas_sim.simulation.driver import SceneDriver, default_frame_systems
from atlas_sim.simulation.engine import Engine
from atlas_sim.simulation.scheduler import ManualScheduler
from atlas_sim.simulation.state import SceneState
from atlas_sim.simulation.systems.state_recorder import LinkRecorderSystem, StateRecorderSystem
from atlas_sim.visualization.export_log import export_log_to_json
from atlas_sim.visualization.plotly_playback import render_playback
from atlas_sim.visualization.plotly_viewer import render_scene_snapshot

FRAME_DT = 1.0 / 60.0


def main(seed: int = 7) -> None:
    setup_logging(level=logging.INFO)

    # Live loop, driven frame by frame
    state = SceneState(scenario=build_default_scenario(seed=seed))
    scheduler = ManualScheduler()
    graph = SceneGraph()
    driver = SceneDriver(state, scheduler)
    driver.start(graph, FixedViewport(1280, 720))

    scheduler.run_frames(180, FRAME_DT)
    driver.playback.pause()
    scheduler.run_frames(60, FRAME_DT)
    driver.playback.play()
    scheduler.run_frames(180, FRAME_DT)

    for tracker_id, link in state.links.items():
        print(f"  {tracker_id}: active={link.active} distance={link.distance:6.2f}")

    print("Wrote:", render_scene_snapshot(graph, out_html="out/atlas_snapshot.html"))
    driver.dispose()

    # Fixed-step replay over one target revolution
    replay = SceneState(scenario=build_default_scenario(seed=seed))
    target = replay.scenario.target
    t_end = target.params.revolution_time / replay.config.target_time_scale
    engine = Engine(dt_s=0.25, systems=default_frame_systems() + [StateRecorderSystem(), LinkRecorderSystem()])
    log = engine.run(replay, t_start_s=0.0, t_end_s=t_end)

    for tracker in replay.scenario.trackers():
        windows = log.link_windows(tracker.body_id)
        print(f"{tracker.name}: {len(windows)} observation windows")
        for a, b in windows:
            print(f"  start={a:7.2f}s  end={b:7.2f}s  duration={(b - a):6.2f}s")

    print("Exported:", export_log_to_json(log, out_path="out/atlas_log.json"))
    print("Wrote:", render_playback(replay.scenario, log, out_html="out/atlas_playback.html", frame_stride=2))


if __name__ == "__main__":
    main()
