"""Axis-aligned cube primitive using the slab method.

For every axis the ray's parametric distances to the two bounding planes are
computed. The latest entry over all axes (``lin``) and the earliest exit
(``lout``) bound the segment of the ray inside the box:

- no hit if ``lout < lin``
- the ray starts inside when ``lin <= 0``; the exit distance is used then
- the normal comes from the axis that produced the chosen distance

Direction components of zero produce infinite slab distances, which compare
correctly against the finite bounds of the other axes.

Rotated boxes are obtained extrinsically, by placing a cube in a scene object
with a rotation transform.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from lumen.core.errors import DegenerateGeometryError
from lumen.core.ray import Ray, Vec3, as_vec3
from lumen.geometry.base import Geometry, Intersection, accept


class Cube(Geometry):
    """An axis-aligned cube (box).

    Attributes:
        center: The cube's center point.
        radius: The half-extents; the cube spans ``center - radius`` to
            ``center + radius``.
    """

    def __init__(
        self,
        center: Sequence[float] | Vec3 = (0.0, 0.0, 0.0),
        radius: Sequence[float] | Vec3 = (1.0, 1.0, 1.0),
    ) -> None:
        self.center = as_vec3(center)
        self.radius = as_vec3(radius)
        if not np.all(self.radius > 0.0):
            raise DegenerateGeometryError(f"Cube half-extents must be positive, got {self.radius}")

    @classmethod
    def from_dimensions(cls, center: Sequence[float] | Vec3, dimensions: Sequence[float] | Vec3) -> Cube:
        """Create a cube of full size ``dimensions`` centered on ``center``."""
        return cls(center, as_vec3(dimensions) / 2.0)

    def intersect(self, ray: Ray) -> Intersection | None:
        with np.errstate(divide="ignore", invalid="ignore"):
            vmin = (self.center - self.radius - ray.origin) / ray.direction
            vmax = (self.center + self.radius - ray.origin) / ray.direction

        # (distance, normal sign, axis) of the latest entry and earliest exit
        lin = (-math.inf, 0.0, 0)
        lout = (math.inf, 0.0, 0)

        for axis in range(3):
            a = float(vmin[axis])
            b = float(vmax[axis])

            near = (a, -1.0) if a < b else (b, 1.0)
            if near[0] > lin[0]:
                lin = (near[0], near[1], axis)

            # Exit signs face into the box, so flipping them for an inside
            # hit yields the exit face's outward normal
            far = (a, 1.0) if a > b else (b, -1.0)
            if far[0] < lout[0]:
                lout = (far[0], far[1], axis)

        if lout[0] < lin[0]:
            return None

        inside = lin[0] <= 0.0
        t, sign, axis = lout if inside else lin

        if not accept(t, ray):
            return None

        normal = np.zeros(3, dtype=np.float64)
        normal[axis] = -sign if inside else sign

        return Intersection(point=ray.at(t), normal=normal, t=t, inside=inside)

    def __repr__(self) -> str:
        return f"Cube(center={self.center.tolist()}, radius={self.radius.tolist()})"
