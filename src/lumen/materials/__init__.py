"""Materials module for BSDF models.

This module implements the surface appearance model used by the integrators:

Components:
    distribution: Directional distributions with evaluation and sampling
    bsdf: Scattering effects, the Bsdf container and the Material interface
    blackbody: Pure emitter
    lambertian: Ideal diffuse reflection
    phong: Optional emission plus diffuse and glossy specular reflection

Each material provides:
    - shade(): Map an intersection to the ordered set of scattering effects

Each distribution provides:
    - eval(): Relative density for a given cos(theta)
    - sample(): Importance sample a direction in the local hemisphere
"""

from .blackbody import Blackbody
from .bsdf import (
    Bsdf,
    DiffuseReflection,
    DiffuseRefraction,
    Effect,
    Emission,
    Material,
    SpecularReflection,
    SpecularRefraction,
)
from .distribution import Cosine, CosineExp, Dirac, Distribution, Uniform
from .lambertian import Lambertian
from .phong import Phong

__all__ = [
    # Distributions
    "Distribution",
    "Dirac",
    "Uniform",
    "Cosine",
    "CosineExp",
    # Effects
    "Effect",
    "Emission",
    "DiffuseReflection",
    "SpecularReflection",
    "DiffuseRefraction",
    "SpecularRefraction",
    "Bsdf",
    # Materials
    "Material",
    "Blackbody",
    "Lambertian",
    "Phong",
]
