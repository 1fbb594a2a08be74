from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Tuple

from orrery.core.frames import Vector3
from orrery.simulation.scenario import Scenario


class System(Protocol):
    """
    Plugin interface for simulation systems.
    Each system runs per tick and can write to the log.
    """
    name: str

    def on_step(self, t_s: float, scenario: Scenario, log: "SimulationLog") -> None:
        ...


@dataclass
class FrameClock:
    """
    Cumulative elapsed time handed to every tick.
    Non-decreasing: a stalled frame just produces a larger step.
    """
    elapsed_s: float = 0.0

    def advance(self, dt_s: float) -> float:
        if dt_s < 0:
            raise ValueError("Clock cannot run backwards.")
        self.elapsed_s += dt_s
        return self.elapsed_s


@dataclass
class SimulationLog:
    """
    Stores outputs from a simulation run.
    Keep it simple and serializable.
    """
    # Positions: body name -> list of (t, r_render)
    body_positions: Dict[str, List[Tuple[float, Vector3]]] = field(default_factory=dict)

    # Spin: body name -> list of (t, angle_rad)
    body_rotations: Dict[str, List[Tuple[float, float]]] = field(default_factory=dict)

    def record_position(self, name: str, t_s: float, r: Vector3) -> None:
        self.body_positions.setdefault(name, []).append((t_s, r))

    def record_rotation(self, name: str, t_s: float, angle_rad: float) -> None:
        self.body_rotations.setdefault(name, []).append((t_s, angle_rad))


@dataclass
class Engine:
    """
    Fixed-step simulation engine.
    Deterministic replay: given same scenario + dt + start/end => same output.
    """
    dt_s: float
    systems: List[System] = field(default_factory=list)

    def run(self, scenario: Scenario, t_start_s: float, t_end_s: float) -> SimulationLog:
        if self.dt_s <= 0:
            raise ValueError("dt_s must be positive.")
        if t_end_s < t_start_s:
            raise ValueError("t_end_s must be >= t_start_s.")

        log = SimulationLog()
        n_steps = int((t_end_s - t_start_s) / self.dt_s + 1e-9)

        # Times come from the step index so long runs don't accumulate drift
        for k in range(n_steps + 1):
            t = t_start_s + k * self.dt_s
            for sys in self.systems:
                sys.on_step(t, scenario, log)

        return log
