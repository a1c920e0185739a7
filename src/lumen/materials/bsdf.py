"""Scattering effects, BSDFs and the material interface.

The appearance of a surface point is described as a small ordered set of
``Effect``s (a BSDF). Each effect pairs a color quantity with a directional
``Distribution``:

- Emission: light emitted independently of incoming light
- DiffuseReflection: reflection centered on the surface normal
- SpecularReflection: reflection centered on the mirrored incident direction
- DiffuseRefraction: refraction centered on the inverted surface normal
- SpecularRefraction: refraction centered on the refracted incident direction

The order of effects is insertion order and carries no meaning beyond
enumeration. A ``Material`` maps an intersection to a BSDF.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from lumen.core.spectrum import Albedo, Radiance
from lumen.geometry.base import Intersection
from lumen.materials.distribution import Distribution


class Effect:
    """Base class of all scattering effects."""


@dataclass(frozen=True)
class Emission(Effect):
    radiance: Radiance
    distribution: Distribution


@dataclass(frozen=True)
class DiffuseReflection(Effect):
    albedo: Albedo
    distribution: Distribution


@dataclass(frozen=True)
class SpecularReflection(Effect):
    albedo: Albedo
    distribution: Distribution


@dataclass(frozen=True)
class DiffuseRefraction(Effect):
    albedo: Albedo
    ior: float
    distribution: Distribution


@dataclass(frozen=True)
class SpecularRefraction(Effect):
    albedo: Albedo
    ior: float
    distribution: Distribution


class Bsdf:
    """Ordered collection of the effects at a surface point.

    Example:
        >>> bsdf = Bsdf([DiffuseReflection(Albedo.gray(0.5), Cosine())])
        >>> len(bsdf)
        1
    """

    def __init__(self, effects: Iterable[Effect] = ()) -> None:
        self.effects: list[Effect] = list(effects)

    def add(self, effect: Effect) -> Bsdf:
        """Append an effect and return the BSDF for chaining."""
        self.effects.append(effect)
        return self

    def __iter__(self) -> Iterator[Effect]:
        return iter(self.effects)

    def __len__(self) -> int:
        return len(self.effects)

    def __repr__(self) -> str:
        return f"Bsdf({self.effects!r})"


class Material(ABC):
    """Maps a surface point to its BSDF."""

    @abstractmethod
    def shade(self, intersection: Intersection) -> Bsdf:
        """Compute the BSDF at an (object space) intersection."""
