"""Image addressing and the camera interface.

A camera maps a pixel of an image to the primary ray that determines its
color. Pixels are addressed by a ``Target`` within a ``Resolution`` and are
first mapped to normalized device coordinates covering ``[-1, +1]`` in both
axes, with ``+x`` to the right and ``+y`` to the top. Each pixel index maps
to the coordinate of the pixel center.

Example:
    >>> from lumen.camera.base import Resolution, Target
    >>> Target(1, 0).normalized(Resolution(2, 2))
    (0.5, 0.5)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from lumen.core.ray import Ray


@dataclass(frozen=True)
class Resolution:
    """The size of an image in pixels.

    Attributes:
        width: The horizontal resolution.
        height: The vertical resolution.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Resolution must be positive, got {self.width}x{self.height}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height


@dataclass(frozen=True)
class Target:
    """A pixel position within an image, row 0 at the top.

    Attributes:
        x: The horizontal position.
        y: The vertical position.
    """

    x: int
    y: int

    def normalized(self, resolution: Resolution) -> tuple[float, float]:
        """Map the pixel center to normalized device coordinates.

        Args:
            resolution: The size of the image the pixel belongs to.

        Returns:
            A tuple (fx, fy) in [-1, 1] with +y pointing up.
        """
        step_x = 2.0 / resolution.width
        step_y = 2.0 / resolution.height
        fx = self.x * step_x
        fy = self.y * step_y
        return fx - 1.0 + 0.5 * step_x, 1.0 - fy - 0.5 * step_y


class Camera(ABC):
    """Maps pixels to primary rays."""

    @abstractmethod
    def primary(self, resolution: Resolution, target: Target) -> Ray:
        """Construct the ray computing the light reaching ``target``."""
