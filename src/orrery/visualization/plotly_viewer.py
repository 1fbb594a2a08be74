from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import plotly.graph_objects as go

from orrery.core.frames import to_render_axes
from orrery.simulation.engine import SimulationLog
from orrery.simulation.scenario import Scenario


def _plot_xyz(samples):
    # Render (x, y-up, z) back to a z-up plot frame
    pts = [to_render_axes(r) for r in samples]
    return [p[0] for p in pts], [p[1] for p in pts], [p[2] for p in pts]


def render_orrery_playback(
    log: SimulationLog,
    out_html: str = "out/orrery.html",
    scenario: Optional[Scenario] = None,
    frame_stride: int = 1,
    trail_len: int = 200,
    path_samples: int = 256,
) -> str:
    """
    Animated multi-body playback.
    Assumes all bodies were logged at the same time stamps.
    With a scenario, the static orbit path of each top-level body is drawn too.
    """
    names = sorted(log.body_positions.keys())
    if not names:
        raise ValueError("No body positions found in log.")

    # Use first body as time reference
    ref = log.body_positions[names[0]]
    times_full = [t for (t, _r) in ref]

    # Stride frames for performance
    idxs = list(range(0, len(times_full), max(1, frame_stride)))
    times = [times_full[i] for i in idxs]

    pos: Dict[str, Dict[str, List[float]]] = {}
    for name in names:
        samples = log.body_positions[name]
        if len(samples) != len(times_full):
            raise ValueError(f"Body {name} has {len(samples)} samples, expected {len(times_full)}.")
        xs, ys, zs = _plot_xyz([samples[i][1] for i in idxs])
        pos[name] = {"x": xs, "y": ys, "z": zs}

    fig = go.Figure()

    if scenario is not None:
        for body in scenario.body_list():
            if body.orbits is not None:
                continue
            px, py, pz = _plot_xyz(body.orbit_path(path_samples))
            fig.add_trace(go.Scatter3d(
                x=px, y=py, z=pz,
                mode="lines",
                line=dict(width=1),
                opacity=0.4,
                name=f"{body.name} path",
            ))

    marker_trace_idxs: Dict[str, int] = {}
    trail_trace_idxs: Dict[str, int] = {}

    for name in names:
        fig.add_trace(go.Scatter3d(
            x=[pos[name]["x"][0]],
            y=[pos[name]["y"][0]],
            z=[pos[name]["z"][0]],
            mode="lines",
            name=f"{name} trail",
        ))
        trail_trace_idxs[name] = len(list(fig.data)) - 1

        fig.add_trace(go.Scatter3d(
            x=[pos[name]["x"][0]],
            y=[pos[name]["y"][0]],
            z=[pos[name]["z"][0]],
            mode="markers",
            name=name,
            marker=dict(size=6),
        ))
        marker_trace_idxs[name] = len(list(fig.data)) - 1

    # Build frames: update marker positions + trailing segments
    frames: List[go.Frame] = []
    for fi in range(len(times)):
        frame_data = []
        frame_traces = []

        for name in names:
            start = max(0, fi - trail_len)
            frame_data.append(go.Scatter3d(
                x=pos[name]["x"][start:fi + 1],
                y=pos[name]["y"][start:fi + 1],
                z=pos[name]["z"][start:fi + 1],
                mode="lines",
            ))
            frame_traces.append(trail_trace_idxs[name])

            frame_data.append(go.Scatter3d(
                x=[pos[name]["x"][fi]],
                y=[pos[name]["y"][fi]],
                z=[pos[name]["z"][fi]],
                mode="markers",
                marker=dict(size=6),
            ))
            frame_traces.append(marker_trace_idxs[name])

        frames.append(go.Frame(name=str(fi), data=frame_data, traces=frame_traces))

    fig.frames = frames

    step_stride = max(1, len(times) // 50)
    slider_steps = [
        dict(
            method="animate",
            args=[[str(i)], {"mode": "immediate", "frame": {"duration": 0, "redraw": True}}],
            label=f"{times[i]:.1f}s"
        )
        for i in range(0, len(times), step_stride)
    ]

    fig.update_layout(
        title="Orrery Playback",
        scene=dict(
            xaxis_title="X",
            yaxis_title="Y",
            zaxis_title="Z",
            aspectmode="data",
        ),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
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

    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html
