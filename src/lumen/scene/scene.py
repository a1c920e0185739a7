"""Scene graph of transformed objects and ray-scene queries.

An ``Object`` places a geometry with a material in the world through an affine
4x4 transform. Geometry is always intersected in its own local frame: the
world ray is mapped by the object's inverse transform, intersected, and the
hit is mapped back. The inverse is computed once on construction.

Mapping a local intersection back to world space:
    point:  forward transform
    normal: inverse-transpose of the linear part, renormalized
    t:      world distance from the world ray origin

The ``Scene`` is a flat, insertion-ordered list of objects scanned linearly.
On equal distances the object added first wins.

Example:
    >>> from lumen.core.spectrum import Albedo
    >>> from lumen.core.transform import translation
    >>> from lumen.geometry import Sphere
    >>> from lumen.materials import Lambertian
    >>> from lumen.scene.scene import Object, Scene
    >>>
    >>> scene = Scene()
    >>> scene.add(Object(Sphere(), Lambertian(Albedo.gray(0.5)), translation(0.0, 0.0, -3.0)))
    >>> hit = scene.intersect(ray)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from lumen.core.errors import DegenerateGeometryError
from lumen.core.ray import Ray, length, normalize
from lumen.core.spectrum import Radiance
from lumen.core.transform import identity, transform_point
from lumen.geometry.base import Geometry, Intersection
from lumen.materials.bsdf import Bsdf, Material

logger = logging.getLogger(__name__)

# Transforms with a larger condition number cannot be inverted reliably
MAX_CONDITION = 1.0 / np.finfo(np.float64).eps


# =============================================================================
# Objects
# =============================================================================


class Object:
    """A geometry with a material placed in the world by an affine transform.

    Attributes:
        geometry: The shape, defined in its local frame.
        material: The surface material.
        transform: The local-to-world 4x4 matrix.
        inverse: The world-to-local 4x4 matrix.

    Raises:
        DegenerateGeometryError: If the transform is not invertible.
    """

    def __init__(
        self,
        geometry: Geometry,
        material: Material,
        transform: npt.NDArray[np.float64] | None = None,
    ) -> None:
        self.geometry = geometry
        self.material = material
        self.transform = identity() if transform is None else np.asarray(transform, dtype=np.float64)

        if self.transform.shape != (4, 4):
            raise DegenerateGeometryError(f"Object transform must be 4x4, got {self.transform.shape}")
        try:
            self.inverse = np.linalg.inv(self.transform)
        except np.linalg.LinAlgError as e:
            raise DegenerateGeometryError("Object transform is singular") from e
        with np.errstate(divide="ignore", invalid="ignore"):
            condition = np.linalg.cond(self.transform)
        if not np.isfinite(condition) or condition > MAX_CONDITION or not np.all(np.isfinite(self.inverse)):
            raise DegenerateGeometryError("Object transform is singular")

        self._normal_matrix = self.inverse[:3, :3].T

    def transform_ray(self, ray: Ray) -> Ray:
        """Map a world-space ray into the object's local frame."""
        return ray.transform(self.inverse)

    def transform_intersection(self, ray: Ray, local: Intersection) -> Intersection:
        """Map a local intersection back to world space.

        Args:
            ray: The world-space ray that was intersected.
            local: The intersection found in the local frame.

        Returns:
            The intersection with world-space point, normal and distance.
        """
        point = transform_point(self.transform, local.point)
        normal = normalize(self._normal_matrix @ local.normal)
        return Intersection(point, normal, length(point - ray.origin), local.inside)

    def __repr__(self) -> str:
        return f"Object(geometry={self.geometry!r}, material={self.material!r})"


@dataclass(frozen=True, eq=False)
class ShadedIntersection:
    """A world-space intersection together with the BSDF at that point.

    Attributes:
        intersection: The world-space intersection.
        bsdf: The scattering effects of the surface that was hit.
    """

    intersection: Intersection
    bsdf: Bsdf


# =============================================================================
# Scene
# =============================================================================


class Scene:
    """Insertion-ordered collection of objects and a background radiance.

    Attributes:
        background: Radiance returned for rays that leave the scene.
    """

    def __init__(self, background: Radiance | None = None) -> None:
        self.background = Radiance.none() if background is None else background
        self._objects: list[Object] = []

    def add(self, obj: Object) -> Scene:
        """Append an object and return the scene for chaining."""
        self._objects.append(obj)
        logger.debug("Added %r as object %d", obj, len(self._objects) - 1)
        return self

    def intersect(self, ray: Ray) -> ShadedIntersection | None:
        """Find the nearest surface along a world-space ray.

        Args:
            ray: The world-space ray.

        Returns:
            The nearest hit with its BSDF, or None if the ray leaves the scene.
        """
        nearest: Intersection | None = None
        nearest_object: Object | None = None
        nearest_local: Intersection | None = None

        for obj in self._objects:
            local = obj.geometry.intersect(obj.transform_ray(ray))
            if local is None:
                continue
            world = obj.transform_intersection(ray, local)
            if nearest is None or world.t < nearest.t:
                nearest = world
                nearest_object = obj
                nearest_local = local

        if nearest is None or nearest_object is None or nearest_local is None:
            return None

        return ShadedIntersection(nearest, nearest_object.material.shade(nearest_local))

    def occlude(self, ray: Ray) -> bool:
        """Check whether anything blocks the ray within its length."""
        return any(obj.geometry.occlude(obj.transform_ray(ray)) for obj in self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Object]:
        return iter(self._objects)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)}, background={self.background!r})"
