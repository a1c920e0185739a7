"""Renderers computing the radiance seen through a single pixel.

This module implements the light transport algorithms. Each renderer maps a
(scene, camera, resolution, target) query to the radiance arriving at that
pixel:

    PathTracer: unbiased recursive Monte Carlo path tracing
    RayTracer: direct lighting from a single spherical point light
    DebugRenderer: deterministic normal/distance visualization

The path tracer solves the rendering equation by following rays from the
camera, scattering them at every surface according to the BSDF effects and
folding each contribution into a probability-weighted ``Sample``. A path is
cut off when it reaches ``depth_limit`` bounces or when its accumulated
throughput (the product of all albedo factors along the path) becomes too
dark to matter, measured by ``Albedo.luma_factor``.

Per effect at a surface point:

    Emission            emission * dist.eval(cos_view)
    DiffuseReflection   sampled around the surface normal
    SpecularReflection  sampled around the mirrored view direction
    DiffuseRefraction   sampled around the inverted surface normal
    SpecularRefraction  unsupported, raises UnsupportedEffectError

Sampled effects recurse with a secondary ray and fold in
``incoming * Sample(cos_in * albedo * dist.eval(cos_view), pdf * 2 * pi)``.

Example:
    >>> import numpy as np
    >>> from lumen.camera import Resolution, Target
    >>> from lumen.core.integrator import PathTracer
    >>> from lumen.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> tracer = PathTracer(np.random.default_rng(0), samples=16)
    >>> radiance = tracer.render(scene, camera, Resolution(64, 64), Target(32, 32))
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace

import numpy as np

from lumen.camera.base import Camera, Resolution, Target
from lumen.core.errors import UnsupportedEffectError
from lumen.core.montecarlo import Estimator, Sample
from lumen.core.ray import RAY_EPSILON, Ray, Vec3, align_with, dot, length, reflect, secondary_ray
from lumen.core.spectrum import Albedo, Radiance
from lumen.geometry.base import Intersection
from lumen.materials.bsdf import (
    Bsdf,
    DiffuseReflection,
    DiffuseRefraction,
    Emission,
    SpecularReflection,
    SpecularRefraction,
)
from lumen.materials.distribution import Distribution
from lumen.scene.light import Light
from lumen.scene.scene import Scene

logger = logging.getLogger(__name__)

# Solid angle normalization of the hemisphere
HEMISPHERE_SOLID_ANGLE = 2.0 * math.pi

# Distance at which the debug visualization fades to black
DEBUG_FADE_DISTANCE = 9.0


def _clamp_cosine(c: float) -> float:
    return min(1.0, max(-1.0, c))


# =============================================================================
# Renderer Interface
# =============================================================================


class Renderer(ABC):
    """Computes the radiance reaching a pixel."""

    @abstractmethod
    def render(
        self,
        scene: Scene,
        camera: Camera,
        resolution: Resolution,
        target: Target,
    ) -> Radiance:
        """Compute the radiance arriving at ``target``."""

    def with_rng(self, rng: np.random.Generator) -> Renderer:
        """Return a renderer drawing from ``rng``.

        Deterministic renderers ignore the generator and return themselves.
        """
        return self


# =============================================================================
# Path Tracer
# =============================================================================


@dataclass(eq=False)
class PathTracer(Renderer):
    """Recursive Monte Carlo path tracer.

    Attributes:
        rng: Random source for all direction sampling.
        contribution_limit: Paths whose throughput luma falls below this are
            terminated.
        depth_limit: Maximum number of surface interactions per path.
        samples: Number of primary rays averaged per pixel.
    """

    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    contribution_limit: float = 0.01
    depth_limit: int = 5
    samples: int = 16

    def with_rng(self, rng: np.random.Generator) -> PathTracer:
        return replace(self, rng=rng)

    def trace(self, scene: Scene, ray: Ray, contribution: Albedo, depth: int) -> Sample[Radiance]:
        """Trace one path and return its radiance sample.

        Args:
            scene: The scene to trace in.
            ray: The ray to follow.
            contribution: Throughput accumulated along the path so far.
            depth: Number of surface interactions so far.

        Returns:
            The radiance carried back along ``ray`` with its probability.

        Raises:
            UnsupportedEffectError: If a surface has a SpecularRefraction effect.
        """
        if depth >= self.depth_limit or contribution.luma_factor() < self.contribution_limit:
            return Sample.certain(Radiance.none())

        hit = scene.intersect(ray)
        if hit is None:
            return Sample.certain(scene.background)

        intersection = hit.intersection
        normal = intersection.normal
        cos_view = _clamp_cosine(-dot(ray.direction, normal))

        sample: Sample[Radiance] = Sample.certain(Radiance.none())

        for effect in hit.bsdf:
            if isinstance(effect, Emission):
                sample = sample + Sample.certain(effect.radiance * effect.distribution.eval(cos_view))
                continue

            if isinstance(effect, DiffuseReflection):
                axis = normal
            elif isinstance(effect, SpecularReflection):
                axis = reflect(ray.direction, normal)
            elif isinstance(effect, DiffuseRefraction):
                axis = -normal
            elif isinstance(effect, SpecularRefraction):
                raise UnsupportedEffectError("SpecularRefraction is not supported by the path tracer")
            else:
                raise UnsupportedEffectError(f"Unknown effect {effect!r}")

            sample = sample + self._scatter(
                scene, intersection, axis, effect.albedo, effect.distribution, cos_view, contribution, depth
            )

        return sample

    def _scatter(
        self,
        scene: Scene,
        intersection: Intersection,
        axis: Vec3,
        albedo: Albedo,
        distribution: Distribution,
        cos_view: float,
        contribution: Albedo,
        depth: int,
    ) -> Sample[Radiance]:
        local_dir, pdf = distribution.sample(self.rng)
        if pdf <= 0.0:
            logger.debug("Skipping zero-pdf sample from %r at depth %d", distribution, depth)
            return Sample.certain(Radiance.none())

        cos_in = float(local_dir[2])
        factor = cos_in * albedo * distribution.eval(cos_view)

        incidence = align_with(axis, local_dir)
        incoming = self.trace(
            scene,
            secondary_ray(intersection.point, incidence),
            contribution * factor,
            depth + 1,
        )
        return incoming * Sample(factor, pdf * HEMISPHERE_SOLID_ANGLE)

    def render(
        self,
        scene: Scene,
        camera: Camera,
        resolution: Resolution,
        target: Target,
    ) -> Radiance:
        """Average ``samples`` independent paths through the pixel.

        Raises:
            EmptyEstimatorError: If ``samples`` is zero.
        """
        estimator: Estimator[Radiance] = Estimator()
        for _ in range(self.samples):
            ray = camera.primary(resolution, target)
            estimator.add(self.trace(scene, ray, Albedo.white(), 0))
        return estimator.value()


# =============================================================================
# Debug Renderer
# =============================================================================


class DebugRenderer(Renderer):
    """Visualizes surface normals, fading to black with distance."""

    def visualize(self, intersection: Intersection) -> Radiance:
        brightness = min(1.0, max(0.0, 1.0 - intersection.t / DEBUG_FADE_DISTANCE))
        color = 0.5 * intersection.normal + 0.5
        return Radiance.from_sequence(color * brightness)

    def render(
        self,
        scene: Scene,
        camera: Camera,
        resolution: Resolution,
        target: Target,
    ) -> Radiance:
        hit = scene.intersect(camera.primary(resolution, target))
        if hit is None:
            return scene.background
        return self.visualize(hit.intersection)

    def __repr__(self) -> str:
        return "DebugRenderer()"


# =============================================================================
# Direct Lighting
# =============================================================================


class RayTracer(Renderer):
    """Whitted-style direct lighting from a single light, without recursion.

    Emission, diffuse and specular reflection effects are evaluated with a
    Phong-like model; refraction effects are ignored. Points that cannot see
    the light only show their own emission.
    """

    def __init__(self, light: Light) -> None:
        self.light = light

    def phong(self, ray: Ray, intersection: Intersection, bsdf: Bsdf, scene: Scene) -> Radiance:
        """Shade a surface point lit by the light."""
        light = self.light
        to_light = light.position - intersection.point
        distance = length(to_light)
        incidence = to_light / distance
        coverage = math.atan(light.radius / distance) * 0.5 / math.pi

        reflected = reflect(ray.direction, intersection.normal)
        cos_normal = _clamp_cosine(dot(incidence, intersection.normal))
        cos_ray = _clamp_cosine(dot(incidence, reflected))

        lit = not self._shadowed(scene, intersection.point, incidence, distance)

        radiance = Radiance.none()
        for effect in bsdf:
            if isinstance(effect, Emission):
                radiance = radiance + effect.radiance * effect.distribution.eval(cos_normal)
            elif isinstance(effect, DiffuseReflection):
                if lit and cos_normal > 0.0:
                    strength = cos_normal * coverage * effect.distribution.eval(cos_normal)
                    radiance = radiance + strength * (light.emission * effect.albedo)
            elif isinstance(effect, SpecularReflection):
                if lit and cos_normal > 0.0 and cos_ray > 0.0:
                    strength = cos_normal * coverage * effect.distribution.eval(cos_ray)
                    radiance = radiance + strength * (light.emission * effect.albedo)

        return radiance

    def _shadowed(self, scene: Scene, point: Vec3, incidence: Vec3, distance: float) -> bool:
        reach = distance - self.light.radius - RAY_EPSILON
        if reach <= RAY_EPSILON:
            return False
        shadow_ray = Ray(point + incidence * RAY_EPSILON, incidence, reach)
        return scene.occlude(shadow_ray)

    def render(
        self,
        scene: Scene,
        camera: Camera,
        resolution: Resolution,
        target: Target,
    ) -> Radiance:
        ray = camera.primary(resolution, target)
        hit = scene.intersect(ray)
        if hit is None:
            return scene.background
        return self.phong(ray, hit.intersection, hit.bsdf, scene)

    def __repr__(self) -> str:
        return f"RayTracer(light={self.light!r})"
