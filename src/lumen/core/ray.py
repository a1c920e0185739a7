"""Ray data structure and vector utilities.

This module provides the fundamental Ray type and the small set of vector
helpers used throughout the intersection kernel and the integrators. Points
and directions are NumPy float64 arrays of shape (3,).

Example:
    >>> from lumen.core.ray import Ray, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -2.0))
    >>> ray.direction  # normalized on construction
    array([ 0.,  0., -1.])
    >>> point = ray.at(5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from lumen.core.errors import DegenerateGeometryError
from lumen.core.transform import transform_point, transform_vector

Vec3 = npt.NDArray[np.float64]

# Offset applied to secondary ray origins to avoid immediate self-intersection
RAY_EPSILON = 1e-4


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(v: Sequence[float] | Vec3) -> Vec3:
    """Convert a tuple, list or array to a float64 vector of shape (3,)."""
    return np.asarray(v, dtype=np.float64).reshape(3)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(float(np.dot(v, v)))


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    This avoids the square root when only comparing magnitudes.
    """
    return float(np.dot(v, v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Raises:
        DegenerateGeometryError: If the vector has zero length.
    """
    n = length(v)
    if n == 0.0 or not math.isfinite(n):
        raise DegenerateGeometryError(f"Cannot normalize vector {v!r}")
    return v / n


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product of two vectors."""
    return np.cross(a, b)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Mirror an incident direction about a normal.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        The normalized reflected direction.
    """
    return normalize(incident - 2.0 * dot(normal, incident) * normal)


def make_tangent(normal: Vec3) -> Vec3:
    """Build a unit vector perpendicular to ``normal``.

    The construction uses whichever of the normal's x/y components has the
    larger magnitude, so it never degenerates for a unit normal.
    """
    if abs(normal[0]) > abs(normal[1]):
        tangent = vec3(normal[2], 0.0, -normal[0])
    else:
        tangent = vec3(0.0, normal[2], -normal[1])
    return normalize(tangent)


def build_onb_from_normal(normal: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build an orthonormal basis with ``normal`` as the z-axis.

    Returns:
        A tuple (tangent, bitangent, normal).
    """
    tangent = make_tangent(normal)
    bitangent = cross(normal, tangent)
    return tangent, bitangent, normal


def align_with(axis: Vec3, local_dir: Vec3) -> Vec3:
    """Rotate a direction sampled around local +z into the frame of ``axis``."""
    tangent, bitangent, normal = build_onb_from_normal(axis)
    return local_dir[0] * tangent + local_dir[1] * bitangent + local_dir[2] * normal


# =============================================================================
# Ray
# =============================================================================


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin, a unit direction and a maximum length.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray, normalized on construction.
        length: Maximum distance along the ray that counts as a hit
            (infinite by default).

    Raises:
        DegenerateGeometryError: If the direction has zero length or the
            length is not positive.
    """

    origin: Vec3
    direction: Vec3
    length: float = math.inf

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_vec3(self.origin))
        object.__setattr__(self, "direction", normalize(as_vec3(self.direction)))
        if not self.length > 0.0:
            raise DegenerateGeometryError(f"Ray length must be positive, got {self.length}")

    @classmethod
    def from_endpoints(cls, origin: Sequence[float] | Vec3, target: Sequence[float] | Vec3) -> Ray:
        """Create a finite ray from ``origin`` ending at ``target``."""
        origin = as_vec3(origin)
        distance = as_vec3(target) - origin
        return cls(origin, distance, length(distance))

    def at(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t."""
        return self.origin + t * self.direction

    def transform(self, matrix: npt.NDArray[np.float64]) -> Ray:
        """Apply an affine 4x4 transform to the ray.

        The direction is mapped as a vector; its change in magnitude is folded
        into ``length`` so distances keep their meaning in the new space.
        """
        origin = transform_point(matrix, self.origin)
        direction = transform_vector(matrix, self.direction)
        scale = length(direction)
        return Ray(origin, direction / scale, self.length * scale)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()}, length={self.length})"


def secondary_ray(origin: Vec3, direction: Vec3) -> Ray:
    """Create a secondary ray nudged along its direction off the surface."""
    return Ray(origin + direction * RAY_EPSILON, direction)
