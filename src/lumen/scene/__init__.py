"""Scene module for scene graphs and ray-scene queries.

Components:
    scene: Object, Scene and ShadedIntersection
    light: Spherical point light for direct lighting
    cornell_box: Classic Cornell box demo scene

The scene module manages:
    - Placement of primitives with affine transforms
    - Nearest-hit queries returning the shaded BSDF
    - Any-hit (occlusion) queries for shadow rays
"""

from .cornell_box import (
    BOX_HALF_SIZE,
    CornellBoxParams,
    create_cornell_box_light,
    create_cornell_box_scene,
)
from .light import Light
from .scene import Object, Scene, ShadedIntersection

__all__ = [
    # Scene graph
    "Object",
    "Scene",
    "ShadedIntersection",
    "Light",
    # Cornell box
    "CornellBoxParams",
    "create_cornell_box_scene",
    "create_cornell_box_light",
    "BOX_HALF_SIZE",
]
