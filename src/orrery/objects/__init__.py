from orrery.objects.body import (
    BodyConfig,
    CircularOrbit,
    EllipticalOrbit,
    PlanetaryBody,
    RenderTransform,
)

__all__ = ["BodyConfig", "CircularOrbit", "EllipticalOrbit", "PlanetaryBody", "RenderTransform"]
