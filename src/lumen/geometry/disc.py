"""Disc primitive: a plane intersection restricted to a radius.

Shares the plane's inside/normal convention, and rejects hits farther than
``radius`` from the center (a squared-distance test).
"""

from __future__ import annotations

from collections.abc import Sequence

from lumen.core.errors import DegenerateGeometryError
from lumen.core.ray import Ray, Vec3, as_vec3, dot, length_squared, normalize
from lumen.geometry.base import Geometry, Intersection, accept


class Disc(Geometry):
    """A two-dimensional disc.

    Attributes:
        center: The disc's center point.
        normal: The disc's unit normal.
        radius: The disc's radius.
    """

    def __init__(
        self,
        center: Sequence[float] | Vec3 = (0.0, 0.0, 0.0),
        normal: Sequence[float] | Vec3 = (0.0, 0.0, 1.0),
        radius: float = 1.0,
    ) -> None:
        if not radius > 0.0:
            raise DegenerateGeometryError(f"Disc radius must be positive, got {radius}")
        self.center = as_vec3(center)
        self.normal = normalize(as_vec3(normal))
        self.radius = float(radius)

    def intersect(self, ray: Ray) -> Intersection | None:
        lo = dot(self.normal, ray.origin - self.center)
        ld = dot(self.normal, ray.direction)

        if ld == 0.0:
            return None

        t = -lo / ld
        if not accept(t, ray):
            return None

        point = ray.at(t)
        if length_squared(point - self.center) > self.radius * self.radius:
            return None

        inside = ld > 0.0
        normal = -self.normal if inside else self.normal.copy()

        return Intersection(point=point, normal=normal, t=t, inside=inside)

    def __repr__(self) -> str:
        return f"Disc(center={self.center.tolist()}, normal={self.normal.tolist()}, radius={self.radius})"
