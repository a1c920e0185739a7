"""Lambertian (ideal diffuse) material implementation.

A Lambertian surface scatters incident light with a cosine-weighted
distribution around the surface normal, so it appears equally bright from
all viewing directions. Its BSDF holds a single diffuse reflection effect:

    DiffuseReflection(albedo, Cosine)

Importance sampling the cosine lobe is the optimal strategy for this BSDF;
the integrator draws directions from the effect's distribution directly.

Example:
    >>> from lumen.core.spectrum import Albedo
    >>> from lumen.materials.lambertian import Lambertian
    >>> red_wall = Lambertian(Albedo(0.65, 0.05, 0.05))
"""

from __future__ import annotations

from dataclasses import dataclass

from lumen.core.spectrum import Albedo
from lumen.geometry.base import Intersection
from lumen.materials.bsdf import Bsdf, DiffuseReflection, Material
from lumen.materials.distribution import Cosine


@dataclass
class Lambertian(Material):
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance color (RGB). Values in [0, 1] conserve
            energy, but this is not enforced.
    """

    albedo: Albedo

    def shade(self, intersection: Intersection) -> Bsdf:
        return Bsdf([DiffuseReflection(self.albedo, Cosine())])
