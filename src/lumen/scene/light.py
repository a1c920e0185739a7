"""Spherical point light for direct lighting."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from lumen.core.ray import Vec3, as_vec3
from lumen.core.spectrum import Radiance


@dataclass
class Light:
    """A spherical point light used by the ray tracer.

    Attributes:
        position: Center of the light in world space.
        emission: Radiance emitted by the light.
        radius: Radius of the light, which determines its angular coverage.
    """

    position: Sequence[float] | Vec3
    emission: Radiance
    radius: float = 1.0

    def __post_init__(self) -> None:
        self.position = as_vec3(self.position)
        if self.radius <= 0.0:
            raise ValueError(f"Light radius must be positive, got {self.radius}")
