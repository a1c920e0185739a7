"""Blackbody (pure emitter) material.

A blackbody reflects nothing and emits its radiance with a cosine-weighted
distribution around the surface normal, which appears equally bright from
every viewing angle.

Example:
    >>> from lumen.core.spectrum import Radiance
    >>> from lumen.materials.blackbody import Blackbody
    >>> light = Blackbody(Radiance.gray(15.0))
"""

from __future__ import annotations

from dataclasses import dataclass

from lumen.core.spectrum import Radiance
from lumen.geometry.base import Intersection
from lumen.materials.bsdf import Bsdf, Emission, Material
from lumen.materials.distribution import Cosine


@dataclass
class Blackbody(Material):
    """A pure emitter of light.

    Attributes:
        radiance: The emitted radiance (RGB, may exceed 1 for bright lights).
    """

    radiance: Radiance

    def shade(self, intersection: Intersection) -> Bsdf:
        return Bsdf([Emission(self.radiance, Cosine())])
