"""Camera defined by an affine transformation of normalized device space.

The camera maps the segment from ``(fx, fy, -1)`` to ``(fx, fy, +1)`` in
normalized device coordinates through its matrix; the primary ray starts at
the image of the near point and points toward the image of the far point.
With the inverse of a view-projection matrix this reproduces the classic
rasterization camera; an orthographic projection gives parallel rays.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from lumen.camera.base import Camera, Resolution, Target
from lumen.core.ray import Ray, as_vec3, cross, normalize, vec3
from lumen.core.transform import Matrix4, transform_point


class AffineTransformCamera(Camera):
    """A camera model defined by an affine transformation matrix.

    Attributes:
        transform: The 4x4 matrix mapping normalized device space to world
            space.
    """

    def __init__(self, transform: npt.NDArray[np.float64]) -> None:
        self.transform: Matrix4 = np.asarray(transform, dtype=np.float64)

    @classmethod
    def orthographic(
        cls,
        eye: Sequence[float],
        center: Sequence[float],
        up: Sequence[float] = (0.0, 1.0, 0.0),
        half_width: float = 1.0,
        half_height: float = 1.0,
        depth: float = 2.0,
    ) -> AffineTransformCamera:
        """Create a parallel-projection camera looking from ``eye`` at ``center``.

        The near plane passes through ``eye`` and the far plane lies ``depth``
        units ahead; the image spans ``2 * half_width`` by ``2 * half_height``
        world units.
        """
        eye = as_vec3(eye)
        forward = normalize(as_vec3(center) - eye)
        right = normalize(cross(forward, as_vec3(up)))
        true_up = cross(right, forward)

        matrix = np.eye(4, dtype=np.float64)
        matrix[:3, 0] = right * half_width
        matrix[:3, 1] = true_up * half_height
        matrix[:3, 2] = forward * (0.5 * depth)
        matrix[:3, 3] = eye + forward * (0.5 * depth)
        return cls(matrix)

    def primary(self, resolution: Resolution, target: Target) -> Ray:
        fx, fy = target.normalized(resolution)
        origin = transform_point(self.transform, vec3(fx, fy, -1.0))
        far = transform_point(self.transform, vec3(fx, fy, 1.0))
        return Ray(origin, far - origin)

    def __repr__(self) -> str:
        return f"AffineTransformCamera(transform={self.transform.tolist()})"
