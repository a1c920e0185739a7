"""Geometry module for shape primitives.

This module provides geometric primitives and their exact analytic
intersection algorithms:

Components:
    base: Geometry interface and the Intersection record
    sphere: Sphere primitive (projection-based intersection)
    plane: Infinite plane stored as a homogeneous equation
    disc: Plane intersection restricted to a radius
    cube: Axis-aligned box using the slab method

Primitives are defined in their own local frame; placement, rotation and
scaling happen extrinsically through scene objects. Every primitive supports
both nearest-hit (``intersect``) and any-hit (``occlude``) queries.
"""

from .base import Geometry, Intersection
from .cube import Cube
from .disc import Disc
from .plane import Plane
from .sphere import Sphere

__all__ = [
    "Geometry",
    "Intersection",
    "Sphere",
    "Plane",
    "Disc",
    "Cube",
]
