"""Writing rendered radiance to disk.

Linear images go through the same exposure and tone mapping as the preview
and are quantized to 8 bits per channel before Pillow encodes them as PNG.

Example:
    >>> from lumen.preview.export import save_png
    >>>
    >>> renderer.render(16)
    >>> save_png(renderer, "output.png", tonemap="reinhard:2.2")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from lumen.preview.display import TonemapLike, process_image_for_display

if TYPE_CHECKING:
    from lumen.core.progressive import ProgressiveRenderer


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    tonemap: TonemapLike = "gamma",
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Tone map a linear image and quantize it to 8 bits.

    Args:
        image: Linear radiance, shape (height, width, 3).
        tonemap: Tone mapping operator or its textual form.
        exposure: Linear scale applied before tone mapping.

    Returns:
        A uint8 array with the same height and width.
    """
    processed = process_image_for_display(image, tonemap, exposure)
    return np.rint(processed * 255.0).astype(np.uint8)


def save_png_from_array(
    image: npt.NDArray[np.float32],
    filepath: str | Path,
    *,
    tonemap: TonemapLike = "gamma",
    exposure: float = 1.0,
) -> None:
    """Write a linear image as an 8-bit PNG.

    Args:
        image: Linear radiance, shape (height, width, 3).
        filepath: Destination path; the PNG suffix selects the encoder.
        tonemap: Tone mapping operator or its textual form.
        exposure: Linear scale applied before tone mapping.
    """
    image_uint8 = image_to_uint8(image, tonemap=tonemap, exposure=exposure)
    PILImage.fromarray(image_uint8).save(filepath)


def save_png(
    renderer: ProgressiveRenderer,
    filepath: str | Path,
    *,
    tonemap: TonemapLike = "gamma",
    exposure: float = 1.0,
) -> None:
    """Save the current render of a progressive renderer as a PNG file.

    Args:
        renderer: Renderer whose accumulated film is written.
        filepath: Destination path.
        tonemap: Tone mapping operator or its textual form.
        exposure: Linear scale applied before tone mapping.
    """
    save_png_from_array(renderer.get_image_numpy(), filepath, tonemap=tonemap, exposure=exposure)


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Root mean squared difference of two equally shaped images.

    Raises:
        ValueError: If the shapes differ.
    """
    a = np.asarray(image_a, dtype=np.float64)
    b = np.asarray(image_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Image shapes must match: {a.shape} vs {b.shape}")
    return float(np.sqrt(np.mean(np.square(a - b))))
