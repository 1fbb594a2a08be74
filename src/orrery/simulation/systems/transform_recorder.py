from __future__ import annotations

from dataclasses import dataclass

from orrery.simulation.scenario import Scenario
from orrery.simulation.engine import SimulationLog


@dataclass
class TransformRecorderSystem:
    """Ticks every body and records world positions and spin angles."""
    name: str = "transform_recorder"

    def on_step(self, t_s: float, scenario: Scenario, log: SimulationLog) -> None:
        transforms = scenario.tick(t_s)
        for body_name, tf in transforms.items():
            log.record_position(body_name, t_s, scenario.world_position(body_name, transforms))
            log.record_rotation(body_name, t_s, tf.rotation_angle)
