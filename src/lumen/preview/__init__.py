"""Preview module for output and visualization.

This module handles rendering output:

Components:
    display: Tone mapping and Matplotlib-based preview display
    export: PNG export utilities

Features:
    - Tone mapping for HDR output (linear, gamma, Reinhard, filmic)
    - Exposure control
    - Matplotlib-based static preview and side-by-side comparison
    - PNG export via Pillow

Example:
    >>> from lumen.preview import save_png, show_preview
    >>>
    >>> renderer.render(16)
    >>> show_preview(renderer, tonemap="reinhard")
    >>> save_png(renderer, "output.png", tonemap="gamma:2.2")
"""

from lumen.preview.display import (
    TONEMAP_NAMES,
    Tonemap,
    TonemapLike,
    TonemapName,
    as_tonemap,
    process_image_for_display,
    show_comparison,
    show_preview,
)
from lumen.preview.export import (
    compute_rmse,
    image_to_uint8,
    save_png,
    save_png_from_array,
)

__all__ = [
    # Tone mapping
    "Tonemap",
    "TonemapName",
    "TonemapLike",
    "TONEMAP_NAMES",
    "as_tonemap",
    "process_image_for_display",
    # Display functions
    "show_preview",
    "show_comparison",
    # Export functions
    "save_png",
    "save_png_from_array",
    "image_to_uint8",
    "compute_rmse",
]
