from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from orrery.core.config import SimulationConfig
from orrery.core.errors import ConfigurationError
from orrery.core.frames import Vector3, add
from orrery.objects.body import BodyConfig, PlanetaryBody, RenderTransform

logger = logging.getLogger(__name__)


@dataclass
class Scenario:
    """
    Container for all bodies in a simulation run.
    Bodies are independent; the only link between them is the `orbits`
    parent used to place a moon relative to its planet.
    """
    name: str
    bodies: Dict[str, PlanetaryBody] = field(default_factory=dict)

    def add_body(self, body: PlanetaryBody) -> None:
        if body.name in self.bodies:
            raise ConfigurationError(f"Duplicate body name: {body.name}")
        if body.orbits is not None and body.orbits not in self.bodies:
            raise ConfigurationError(f"{body.name}: parent body '{body.orbits}' has not been added.")
        self.bodies[body.name] = body

    def add_from_configs(self, records: Iterable[Dict[str, Any]],
                         config: Optional[SimulationConfig] = None,
                         rng: Optional[random.Random] = None) -> List[str]:
        """
        Build and add bodies from raw records.
        A malformed record is logged and skipped so the rest still load.

        Returns:
            Names (or indices) of the rejected records
        """
        rejected: List[str] = []
        for i, record in enumerate(records):
            label = str(record.get("name", f"#{i}"))
            try:
                self.add_body(PlanetaryBody(BodyConfig.from_dict(record), config=config, rng=rng))
            except ConfigurationError as exc:
                logger.error("Rejected body %s: %s", label, exc)
                rejected.append(label)
        return rejected

    def body_list(self) -> List[PlanetaryBody]:
        return list(self.bodies.values())

    def tick(self, t_s: float) -> Dict[str, RenderTransform]:
        return {name: body.tick(t_s) for name, body in self.bodies.items()}

    def world_position(self, name: str, transforms: Dict[str, RenderTransform]) -> Vector3:
        """Position of `name` with its parent chain applied (moon -> planet -> ...)."""
        pos = transforms[name].position
        parent = self.bodies[name].orbits
        while parent is not None:
            pos = add(pos, transforms[parent].position)
            parent = self.bodies[parent].orbits
        return pos
