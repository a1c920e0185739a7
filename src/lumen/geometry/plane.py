"""Infinite plane primitive.

The plane is stored as a homogeneous 4-component equation
``(nx, ny, nz, -distance)`` so that a point ``p`` lies on the plane when
``dot(equation, (p, 1)) == 0``. Intersection solves the implicit equation for
the ray parameter:

    t = -dot(equation, (origin, 1)) / dot(equation, (direction, 0))

A ray travelling along the normal's positive side (``dot(d, n) > 0``) hits the
back face; the reported normal is then flipped.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from lumen.core.ray import Ray, Vec3, as_vec3, normalize
from lumen.geometry.base import Geometry, Intersection, accept


class Plane(Geometry):
    """An infinite, two-dimensional plane.

    Attributes:
        equation: The plane equation as (normal, -distance).
    """

    def __init__(self, normal: Sequence[float] | Vec3 = (0.0, 1.0, 0.0), distance: float = 0.0) -> None:
        """Create a plane with surface ``normal`` at ``distance`` from the
        origin, measured along the normal.
        """
        self.equation = np.append(normalize(as_vec3(normal)), -float(distance))

    @classmethod
    def through_point(cls, point: Sequence[float] | Vec3, normal: Sequence[float] | Vec3) -> Plane:
        """Create the plane with ``normal`` that contains ``point``."""
        n = normalize(as_vec3(normal))
        return cls(n, float(np.dot(n, as_vec3(point))))

    @property
    def normal(self) -> Vec3:
        return self.equation[:3]

    @property
    def distance(self) -> float:
        return float(-self.equation[3])

    def intersect(self, ray: Ray) -> Intersection | None:
        lo = float(np.dot(self.equation[:3], ray.origin) + self.equation[3])
        ld = float(np.dot(self.equation[:3], ray.direction))

        # Parallel rays never meet the plane
        if ld == 0.0:
            return None

        t = -lo / ld
        if not accept(t, ray):
            return None

        inside = ld > 0.0
        normal = -self.normal if inside else self.normal.copy()

        return Intersection(point=ray.at(t), normal=normal, t=t, inside=inside)

    def __repr__(self) -> str:
        return f"Plane(normal={self.normal.tolist()}, distance={self.distance})"
