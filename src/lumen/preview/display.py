"""Tone mapping and Matplotlib previews of rendered images.

This module maps linear HDR radiance to displayable [0, 1] values and shows
renders with Matplotlib.

Tone mapping operators (applied channel-wise, after exposure scaling):
    linear:      c
    gamma(g):    c^(1/g)
    reinhard(g): (c / (1 + c))^(1/g)
    filmic:      x = max(c - 0.004, 0);  x(6.2x + 0.5) / (x(6.2x + 1.7) + 0.06)

The filmic curve already includes display encoding and needs no extra gamma.

Example:
    >>> from lumen.preview.display import Tonemap, show_preview
    >>> from lumen.core.progressive import ProgressiveRenderer
    >>>
    >>> renderer = ProgressiveRenderer(scene, camera, tracer, 256, 256)
    >>> renderer.render(16)
    >>> show_preview(renderer, tonemap=Tonemap.reinhard(2.2))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Union

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from lumen.core.progressive import ProgressiveRenderer


# Type alias for tone mapping operator names
TonemapName = Literal["linear", "gamma", "reinhard", "filmic"]

TONEMAP_NAMES: tuple[str, ...] = ("linear", "gamma", "reinhard", "filmic")

DEFAULT_GAMMA = 2.2


# =============================================================================
# Tone Mapping
# =============================================================================


@dataclass(frozen=True)
class Tonemap:
    """A channel-wise tone mapping operator.

    Attributes:
        name: The operator, one of "linear", "gamma", "reinhard" or "filmic".
        exponent: The display gamma used by "gamma" and "reinhard".

    Example:
        >>> Tonemap.gamma(2.0).apply(0.25)
        0.5
        >>> Tonemap.parse("reinhard:2.2")
        Tonemap(name='reinhard', exponent=2.2)
    """

    name: TonemapName = "gamma"
    exponent: float = DEFAULT_GAMMA

    def __post_init__(self) -> None:
        if self.name not in TONEMAP_NAMES:
            raise ValueError(f"Unknown tone mapping method: {self.name}")
        if self.exponent <= 0.0:
            raise ValueError(f"Tone mapping exponent must be positive, got {self.exponent}")

    @classmethod
    def linear(cls) -> Tonemap:
        return cls("linear", 1.0)

    @classmethod
    def gamma(cls, g: float = DEFAULT_GAMMA) -> Tonemap:
        return cls("gamma", g)

    @classmethod
    def reinhard(cls, g: float = DEFAULT_GAMMA) -> Tonemap:
        return cls("reinhard", g)

    @classmethod
    def filmic(cls) -> Tonemap:
        return cls("filmic", 1.0)

    @classmethod
    def parse(cls, text: str) -> Tonemap:
        """Parse ``name`` or ``name:exponent``, e.g. "gamma:2.2" or "filmic".

        Raises:
            ValueError: If the name is unknown or the exponent is not a number.
        """
        name, _, exponent = text.strip().lower().partition(":")
        if name in ("linear", "filmic"):
            return cls(name, 1.0)
        return cls(name, float(exponent) if exponent else DEFAULT_GAMMA)

    def apply(self, c: float | npt.ArrayLike) -> float | npt.NDArray[np.float64]:
        """Map linear values to display values.

        Negative inputs are treated as zero.

        Args:
            c: A scalar or array of linear channel values.

        Returns:
            A float for scalar input, otherwise an array of the same shape.
        """
        x = np.maximum(np.asarray(c, dtype=np.float64), 0.0)

        if self.name == "linear":
            result = x
        elif self.name == "gamma":
            result = np.power(x, 1.0 / self.exponent)
        elif self.name == "reinhard":
            result = np.power(x / (1.0 + x), 1.0 / self.exponent)
        else:
            x = np.maximum(x - 0.004, 0.0)
            result = (x * (6.2 * x + 0.5)) / (x * (6.2 * x + 1.7) + 0.06)

        if result.ndim == 0:
            return float(result)
        return result

    def __str__(self) -> str:
        if self.name in ("linear", "filmic"):
            return self.name
        return f"{self.name}:{self.exponent:g}"


TonemapLike = Union[Tonemap, str]


def as_tonemap(tonemap: TonemapLike) -> Tonemap:
    """Accept either a Tonemap or its textual form."""
    if isinstance(tonemap, Tonemap):
        return tonemap
    return Tonemap.parse(tonemap)


# =============================================================================
# Display Pipeline
# =============================================================================


def process_image_for_display(
    image: npt.ArrayLike,
    tonemap: TonemapLike = "gamma",
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Turn linear radiance into display values in [0, 1].

    The image is scaled by ``exposure``, passed through the tone mapping
    operator and clamped.

    Args:
        image: Linear radiance, shape (height, width, 3).
        tonemap: Tone mapping operator or its textual form.
        exposure: Linear scale applied before tone mapping.
    """
    mapped = as_tonemap(tonemap).apply(np.asarray(image, dtype=np.float64) * exposure)
    return np.clip(mapped, 0.0, 1.0).astype(np.float32)


def show_preview(
    renderer: ProgressiveRenderer,
    *,
    tonemap: TonemapLike = "gamma",
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8.0, 8.0),
    block: bool = True,
) -> None:
    """Open a Matplotlib window with the film of ``renderer``.

    Without an explicit ``title`` the pass count and tone mapping operator
    are shown above the image.
    """
    import matplotlib.pyplot as plt

    tonemap = as_tonemap(tonemap)
    pixels = process_image_for_display(renderer.get_image_numpy(), tonemap, exposure)

    _, axis = plt.subplots(figsize=figsize)
    axis.imshow(pixels)
    axis.set_axis_off()
    axis.set_title(title or f"{renderer.sample_count} passes ({tonemap})")

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: npt.NDArray[np.float32],
    image_b: npt.NDArray[np.float32],
    *,
    labels: tuple[str, str] = ("A", "B"),
    tonemap: TonemapLike = "gamma",
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (15.0, 5.0),
    block: bool = True,
) -> float:
    """Plot two linear renders next to their amplified absolute difference.

    Args:
        image_a: Left image, linear radiance.
        image_b: Right image, linear radiance of the same shape.
        labels: Panel titles for the two renders.
        tonemap: Tone mapping operator shared by both renders.
        diff_scale: Gain applied to the difference panel.
        figsize: Figure size in inches.
        block: Passed through to ``plt.show``.

    Returns:
        The RMSE of the two renders after tone mapping.
    """
    import matplotlib.pyplot as plt

    from lumen.preview.export import compute_rmse

    left = process_image_for_display(image_a, tonemap)
    right = process_image_for_display(image_b, tonemap)
    rmse = compute_rmse(left, right)
    difference = np.clip(diff_scale * np.abs(left - right), 0.0, 1.0)

    _, panels = plt.subplots(1, 3, figsize=figsize)
    titles = (labels[0], labels[1], f"|{labels[0]} - {labels[1]}| x{diff_scale:g}, RMSE {rmse:.6f}")
    for panel, pixels, panel_title in zip(panels, (left, right, difference), titles):
        panel.imshow(pixels)
        panel.set_title(panel_title)
        panel.set_axis_off()

    plt.tight_layout()
    plt.show(block=block)

    return rmse
