"""Core rendering module.

This module contains the fundamental rendering components:

Components:
    ray: Ray representation and vector utilities
    transform: Affine 4x4 matrix helpers
    spectrum: Radiance and Albedo color quantities
    montecarlo: Sample and Estimator primitives
    errors: Exception types of the rendering core
    integrator: PathTracer, RayTracer and DebugRenderer
    film: Taichi-backed progressive accumulation buffer
    progressive: Whole-image progressive rendering driver
    config: RenderConfig settings

The integrator, film, progressive and config modules depend on the scene,
camera and preview packages and are imported from their own modules.
"""

from .errors import DegenerateGeometryError, EmptyEstimatorError, UnsupportedEffectError
from .montecarlo import Estimator, Sample
from .ray import RAY_EPSILON, Ray, Vec3, vec3
from .spectrum import Albedo, Radiance
from .transform import compose, identity, rotation_x, rotation_y, rotation_z, scaling, translation

__all__ = [
    # Ray
    "Ray",
    "Vec3",
    "vec3",
    "RAY_EPSILON",
    # Transforms
    "identity",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "compose",
    # Color
    "Radiance",
    "Albedo",
    # Monte Carlo
    "Sample",
    "Estimator",
    # Errors
    "DegenerateGeometryError",
    "UnsupportedEffectError",
    "EmptyEstimatorError",
]
