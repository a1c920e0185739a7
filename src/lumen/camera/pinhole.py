"""Perspective camera shooting every primary ray from a single eye point.

The camera is placed with a look-at triple: the eye position, the point it
faces and an approximate up vector. A vertical opening angle together with
the image aspect ratio sizes an image plane one unit in front of the eye.

Camera frame:
- w: unit vector from the viewed point back toward the eye
- u: image plane "right", orthogonal to w and the up vector
- v: image plane "up", completing the right-handed frame

Example:
    >>> from lumen.camera.base import Resolution, Target
    >>> from lumen.camera.pinhole import PinholeCamera
    >>>
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 1.0, 4.0),
    ...     lookat=(0.0, 1.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=45.0,
    ...     aspect_ratio=4.0 / 3.0,
    ... )
    >>> ray = camera.primary(Resolution(160, 120), Target(80, 60))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from lumen.camera.base import Camera, Resolution, Target
from lumen.core.ray import Ray, Vec3

# =============================================================================
# Camera
# =============================================================================


@dataclass
class PinholeCamera(Camera):
    """Ideal perspective camera without lens or focus blur.

    Attributes:
        lookfrom: Eye position in world coordinates.
        lookat: World point in the center of the image.
        vup: Rough up direction; only its component orthogonal to the view
            direction matters.
        vfov: Full vertical opening angle, in degrees.
        aspect_ratio: Image width over image height.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float

    origin: Vec3 = field(init=False, repr=False, compare=False)
    u: Vec3 = field(init=False, repr=False, compare=False)
    v: Vec3 = field(init=False, repr=False, compare=False)
    w: Vec3 = field(init=False, repr=False, compare=False)
    horizontal: Vec3 = field(init=False, repr=False, compare=False)
    vertical: Vec3 = field(init=False, repr=False, compare=False)
    lower_left: Vec3 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Derive the camera frame and the image plane spans.

        Raises:
            ValueError: If the opening angle is out of range, the eye sits on
                the viewed point, or ``vup`` is parallel to the view direction.
        """
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")

        plane_height = 2.0 * math.tan(math.radians(self.vfov) / 2.0)
        plane_width = self.aspect_ratio * plane_height

        eye = np.array(self.lookfrom, dtype=np.float64)
        center = np.array(self.lookat, dtype=np.float64)
        up_hint = np.array(self.vup, dtype=np.float64)

        backward = eye - center
        distance = np.linalg.norm(backward)
        if distance == 0.0:
            raise ValueError("lookfrom and lookat must differ")
        w = backward / distance

        right = np.cross(up_hint, w)
        right_norm = np.linalg.norm(right)
        if right_norm == 0.0:
            raise ValueError("vup must not be parallel to the view direction")
        u = right / right_norm
        v = np.cross(w, u)

        self.origin = eye
        self.u, self.v, self.w = u, v, w
        self.horizontal = plane_width * u
        self.vertical = plane_height * v
        self.lower_left = eye - w - 0.5 * self.horizontal - 0.5 * self.vertical

    def get_ray(self, s: float, t: float) -> Ray:
        """Shoot a ray through the image plane point at fractions (s, t).

        ``s`` runs from the left edge (0) to the right edge (1); ``t`` from
        the bottom edge (0) to the top edge (1).
        """
        through = self.lower_left + s * self.horizontal + t * self.vertical
        return Ray(self.origin, through - self.origin)

    def primary(self, resolution: Resolution, target: Target) -> Ray:
        fx, fy = target.normalized(resolution)
        return self.get_ray(0.5 * (fx + 1.0), 0.5 * (fy + 1.0))
