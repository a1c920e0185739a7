"""Geometry interface and intersection record.

Every primitive implements ``intersect`` returning the nearest valid hit (the
smallest positive ``t`` not beyond the ray's length) or ``None``. The
``occlude`` query only asks whether any hit exists and must satisfy::

    geometry.occlude(ray) == (geometry.intersect(ray) is not None)

Normal convention: the reported normal is unit length. ``inside`` is true when
the ray reached the surface from its back face.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from lumen.core.ray import Ray, Vec3


@dataclass(frozen=True, eq=False)
class Intersection:
    """Record of a ray-surface intersection.

    Attributes:
        point: The position where the ray met the surface.
        normal: The surface normal at the intersection point (unit length).
        t: The distance from the ray origin, always positive:
            ``point == ray.origin + t * ray.direction``.
        inside: Whether the ray hit the surface from the inside.
    """

    point: Vec3
    normal: Vec3
    t: float
    inside: bool


class Geometry(ABC):
    """Abstract shape that can be intersected by rays."""

    @abstractmethod
    def intersect(self, ray: Ray) -> Intersection | None:
        """Compute the intersection nearest to the ray origin, if any."""

    def occlude(self, ray: Ray) -> bool:
        """Check whether the ray hits the shape at all.

        Used for shadow queries; subclasses may override with a cheaper test
        as long as the result matches ``intersect``.
        """
        return self.intersect(ray) is not None


def accept(t: float, ray: Ray) -> bool:
    """Check that a parametric distance is a usable hit for ``ray``."""
    return 0.0 < t <= ray.length
