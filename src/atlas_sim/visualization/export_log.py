from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from atlas_sim.simulation.engine import SimulationLog


def log_to_dict(log: SimulationLog) -> Dict[str, Any]:
    """
    Minimal playback data:
      {
        "body_positions": {"SAT-001": [{"t": 0.0, "r": [x, y, z]}, ...], ...},
        "link_activity": {"SAT-001": [{"t": 0.0, "active": true}, ...], ...},
        "link_windows": {"SAT-001": [[t_start, t_end], ...], ...},
        "events": [...]
      }
    """
    return {
        "body_positions": {
            body_id: [{"t": t, "r": [r[0], r[1], r[2]]} for (t, r) in samples]
            for body_id, samples in log.body_positions.items()
        },
        "link_activity": {
            tracker_id: [{"t": t, "active": active} for (t, active) in samples]
            for tracker_id, samples in log.link_activity.items()
        },
        "link_windows": {
            tracker_id: [[a, b] for (a, b) in log.link_windows(tracker_id)]
            for tracker_id in log.link_activity
        },
        "events": list(log.events),
    }


def export_log_to_json(log: SimulationLog, out_path: str = "out/atlas_log.json") -> str:
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(log_to_dict(log), f)
    return out_path
