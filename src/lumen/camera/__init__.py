"""Camera module for primary ray generation.

Components:
    base: Resolution, Target and the Camera interface
    affine: Camera defined by an affine transform of normalized device space
    pinhole: Perspective look-at camera
"""

from .affine import AffineTransformCamera
from .base import Camera, Resolution, Target
from .pinhole import PinholeCamera

__all__ = [
    "Camera",
    "Resolution",
    "Target",
    "AffineTransformCamera",
    "PinholeCamera",
]
