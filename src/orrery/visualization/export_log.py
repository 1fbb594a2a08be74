from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from orrery.simulation.engine import SimulationLog
from orrery.simulation.scenario import Scenario


def export_playback_bundle(
    log: SimulationLog,
    out_path: str = "out/playback_bundle.json",
    scenario: Optional[Scenario] = None,
) -> str:
    """
    Export a bundle for a web viewer:

    {
      "times_s": [0,0.1,0.2,...],
      "positions": { "Earth": [[x,y,z], ...], ... },
      "rotations": { "Earth": [angle, ...], ... },
      "bodies": { "Earth": {"type": "planet", "radius": ..., "orbits": null,
                            "rotation_axis": "y", "tilt_rad": ...}, ... }
    }

    Positions are render space (y up).
    """
    names = sorted(log.body_positions.keys())
    if not names:
        raise ValueError("No body positions found in log.")

    # Reference times (assume uniform sampling across bodies)
    times_s: List[float] = [t for (t, _r) in log.body_positions[names[0]]]

    data: Dict[str, Any] = {
        "times_s": times_s,
        "positions": {},
        "rotations": {},
        "bodies": {},
    }

    for name in names:
        samples = log.body_positions[name]
        if len(samples) != len(times_s):
            raise ValueError(f"{name} samples length mismatch.")
        data["positions"][name] = [[r[0], r[1], r[2]] for (_t, r) in samples]
        data["rotations"][name] = [a for (_t, a) in log.body_rotations.get(name, [])]

    if scenario is not None:
        for name, body in scenario.bodies.items():
            data["bodies"][name] = {
                "type": body.body_type,
                "radius": body.radius,
                "orbits": body.orbits,
                "rotation_axis": body.rotation_axis,
                "tilt_rad": body.tilt_rad,
                "min_camera_distance": body.min_camera_distance(),
            }

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    return out_path
