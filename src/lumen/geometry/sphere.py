"""Sphere primitive with projection-based ray-sphere intersection.

Rather than expanding the full quadratic, the intersection projects the
sphere center onto the ray and compares the squared perpendicular distance
with the squared radius:

    alpha = dot(center - origin, d) / |d|^2     (closest approach along ray)
    beta  = radius^2 - |origin + alpha * d - center|^2
    gamma = sqrt(beta / |d|^2)                  (half chord length)

The roots are ``alpha - gamma`` and ``alpha + gamma``. The near root is used
unless the ray starts inside the sphere, in which case the far root is used
and the normal is flipped to face the ray origin.

Example:
    >>> from lumen.core.ray import Ray, vec3
    >>> from lumen.geometry.sphere import Sphere
    >>> sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0)
    >>> hit = sphere.intersect(Ray(vec3(0.0, 0.0, -2.0), vec3(0.0, 0.0, 1.0)))
    >>> hit.t
    1.0
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from lumen.core.errors import DegenerateGeometryError
from lumen.core.ray import Ray, Vec3, as_vec3, dot, length_squared
from lumen.geometry.base import Geometry, Intersection, accept


class Sphere(Geometry):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
    """

    def __init__(self, center: Sequence[float] | Vec3 = (0.0, 0.0, 0.0), radius: float = 1.0) -> None:
        if not radius > 0.0:
            raise DegenerateGeometryError(f"Sphere radius must be positive, got {radius}")
        self.center = as_vec3(center)
        self.radius = float(radius)

    def intersect(self, ray: Ray) -> Intersection | None:
        """Test for ray-sphere intersection.

        Args:
            ray: The ray to test.

        Returns:
            The nearest intersection in front of the ray origin, or None.
        """
        d2 = length_squared(ray.direction)
        alpha = dot(self.center - ray.origin, ray.direction) / d2
        closest = ray.origin + ray.direction * alpha - self.center
        beta = self.radius * self.radius - length_squared(closest)

        if beta < 0.0:
            return None

        gamma = math.sqrt(beta / d2)
        inside = gamma >= alpha
        t = alpha + gamma if inside else alpha - gamma

        if not accept(t, ray):
            return None

        point = ray.at(t)
        normal = (point - self.center) / self.radius
        if inside:
            normal = -normal

        return Intersection(point=point, normal=normal, t=t, inside=inside)

    def __repr__(self) -> str:
        return f"Sphere(center={np.round(self.center, 6).tolist()}, radius={self.radius})"
