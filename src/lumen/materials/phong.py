"""Phong material: emission, diffuse and specular reflection combined.

Each component is included in the BSDF only when it is non-zero:

    Emission(emission, Cosine)                       if emission != none
    DiffuseReflection(diffuse, Cosine)               if diffuse != black
    SpecularReflection(specular, CosineExp(shininess)) if specular != black

Materials are built fluently from an empty (black, non-emissive) base:

Example:
    >>> from lumen.core.spectrum import Albedo
    >>> from lumen.materials.phong import Phong
    >>> plastic = Phong().color(Albedo(0.8, 0.1, 0.1)).highlight(Albedo.gray(0.3), 40.0)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from lumen.core.spectrum import Albedo, Radiance
from lumen.geometry.base import Intersection
from lumen.materials.bsdf import Bsdf, DiffuseReflection, Emission, Material, SpecularReflection
from lumen.materials.distribution import Cosine, CosineExp


@dataclass(frozen=True)
class Phong(Material):
    """A combination of emission, diffuse and specular reflection.

    Attributes:
        emission: Emitted radiance.
        diffuse: Diffuse reflectance.
        specular: Specular reflectance.
        shininess: Exponent of the specular lobe.
    """

    emission: Radiance = field(default_factory=Radiance.none)
    diffuse: Albedo = field(default_factory=Albedo.black)
    specular: Albedo = field(default_factory=Albedo.black)
    shininess: float = 0.0

    def glow(self, emission: Radiance) -> Phong:
        """Return a copy with the emission component set."""
        return replace(self, emission=emission)

    def color(self, diffuse: Albedo) -> Phong:
        """Return a copy with the diffuse reflection color set."""
        return replace(self, diffuse=diffuse)

    def highlight(self, specular: Albedo, shininess: float) -> Phong:
        """Return a copy with the specular color and exponent set."""
        return replace(self, specular=specular, shininess=shininess)

    def shade(self, intersection: Intersection) -> Bsdf:
        bsdf = Bsdf()

        if self.emission != Radiance.none():
            bsdf.add(Emission(self.emission, Cosine()))

        if self.diffuse != Albedo.black():
            bsdf.add(DiffuseReflection(self.diffuse, Cosine()))

        if self.specular != Albedo.black():
            bsdf.add(SpecularReflection(self.specular, CosineExp(self.shininess)))

        return bsdf
