"""Directional distributions for emission, reflection and refraction.

A distribution describes how light leaves a surface within the hemisphere
around an axis (usually the surface normal). It is assumed isotropic around
the axis and is therefore a function of ``cos(theta)`` only.

Variants:
    Dirac: all density exactly on the axis (perfect mirror)
    Uniform: flat over the hemisphere
    Cosine: cosine-weighted hemisphere (ideal diffuse)
    CosineExp(e): glossy lobe; e = 0 is Uniform, e = 1 is Cosine and
        e -> infinity approaches Dirac

``eval`` returns densities relative to a cosine-weighted reference, so
Uniform evaluates to ``1 / cos(theta)``: the shading code multiplies by
``cos(theta)`` afterwards and gets a flat result.

``sample`` inverts the cumulative distribution with two uniform variates
``x, y`` in [0, 1):

    phi = 2 * pi * x
    Uniform:     cos(theta) = 1 - y                pdf = 1 / (2 pi)
    Cosine:      cos(theta) = sqrt(1 - y)          pdf = cos(theta) / pi
    CosineExp:   cos(theta) = (1 - y)^(1 / (e+1))  pdf = (e+1) cos^e(theta) / pi

Returned directions live in the local frame around +z and must be rotated
into world space by the caller (see ``lumen.core.ray.align_with``).
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from lumen.core.ray import Vec3, vec3

# Nominal pdf of the degenerate distributions: the uniform hemisphere density
HEMISPHERE_PDF = 0.5 / math.pi


def _check_cosine(cos_theta: float) -> None:
    if not -1.0 <= cos_theta <= 1.0:
        raise ValueError(f"cos_theta must be in [-1, 1], got {cos_theta}")


def _hemisphere_direction(phi: float, cos_theta: float) -> Vec3:
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    return vec3(sin_theta * math.cos(phi), sin_theta * math.sin(phi), cos_theta)


class Distribution(ABC):
    """Isotropic distribution over the hemisphere around +z."""

    def eval(self, cos_theta: float) -> float:
        """Evaluate the relative density at angle ``theta`` from the axis.

        Args:
            cos_theta: Cosine of the angle to the axis, in [-1, 1].

        Returns:
            The density; 0 for directions in the back hemisphere.

        Raises:
            ValueError: If ``cos_theta`` is outside [-1, 1].
        """
        _check_cosine(cos_theta)
        if cos_theta < 0.0:
            return 0.0
        return self._eval(cos_theta)

    @abstractmethod
    def _eval(self, cos_theta: float) -> float:
        """Evaluate for ``cos_theta`` in [0, 1]."""

    @abstractmethod
    def sample(self, rng: np.random.Generator) -> tuple[Vec3, float]:
        """Draw a unit direction around +z and its probability density."""


@dataclass(frozen=True)
class Dirac(Distribution):
    """All light leaves exactly along the axis (perfect mirror)."""

    def _eval(self, cos_theta: float) -> float:
        return 1.0 if cos_theta >= 1.0 else 0.0

    def sample(self, rng: np.random.Generator) -> tuple[Vec3, float]:
        return vec3(0.0, 0.0, 1.0), HEMISPHERE_PDF


@dataclass(frozen=True)
class Uniform(Distribution):
    """Light leaves uniformly over the hemisphere."""

    def _eval(self, cos_theta: float) -> float:
        if cos_theta == 0.0:
            return math.inf
        return 1.0 / cos_theta

    def sample(self, rng: np.random.Generator) -> tuple[Vec3, float]:
        x = float(rng.random())
        y = float(rng.random())
        cos_theta = 1.0 - y
        return _hemisphere_direction(2.0 * math.pi * x, cos_theta), HEMISPHERE_PDF


@dataclass(frozen=True)
class Cosine(Distribution):
    """Cosine-weighted hemisphere, the ideal diffuse distribution."""

    def _eval(self, cos_theta: float) -> float:
        return 1.0

    def sample(self, rng: np.random.Generator) -> tuple[Vec3, float]:
        x = float(rng.random())
        y = float(rng.random())
        cos_theta = math.sqrt(1.0 - y)
        return _hemisphere_direction(2.0 * math.pi * x, cos_theta), cos_theta / math.pi


@dataclass(frozen=True)
class CosineExp(Distribution):
    """Exponential cosine lobe for shiny surfaces.

    Attributes:
        exponent: The lobe exponent; higher values scatter less.
    """

    exponent: float

    def __post_init__(self) -> None:
        if self.exponent < 0.0:
            raise ValueError(f"CosineExp exponent must be non-negative, got {self.exponent}")

    def _eval(self, cos_theta: float) -> float:
        if cos_theta == 0.0 and self.exponent < 1.0:
            return math.inf
        return cos_theta ** (self.exponent - 1.0)

    def sample(self, rng: np.random.Generator) -> tuple[Vec3, float]:
        x = float(rng.random())
        y = float(rng.random())
        e = self.exponent
        cos_theta = (1.0 - y) ** (1.0 / (e + 1.0))
        pdf = (e + 1.0) * cos_theta**e / math.pi
        return _hemisphere_direction(2.0 * math.pi * x, cos_theta), pdf
