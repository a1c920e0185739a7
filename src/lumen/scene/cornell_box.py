"""The Cornell box reference scene.

A closed room with one open side is the usual smoke test for indirect
lighting: color bleeding from the red and green side walls only shows up when
light bounces more than once.

Contents:
- Red left wall, green right wall
- White back wall, floor and ceiling
- A tall diffuse block rotated about the vertical axis
- A glossy Phong sphere and a small diffuse sphere
- A disc-shaped area light just below the ceiling

The box spans [-1, 1] on every axis with the open side facing +z, where the
camera looks in. Walls are thin axis-aligned cubes; the block and spheres are
unit primitives placed with object transforms.

Example:
    >>> from lumen.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> len(scene)
    9
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from lumen.camera.pinhole import PinholeCamera
from lumen.core.spectrum import Albedo, Radiance
from lumen.core.transform import compose, rotation_y, scaling, translation
from lumen.geometry import Cube, Disc, Sphere
from lumen.materials import Blackbody, Lambertian, Phong
from lumen.scene.light import Light
from lumen.scene.scene import Object, Scene

logger = logging.getLogger(__name__)

# =============================================================================
# Cornell Box Parameters
# =============================================================================


@dataclass
class CornellBoxParams:
    """Tunable colors and light strength of the Cornell box.

    Attributes:
        light_intensity: Multiplier on the ceiling light color.
        light_color: Unscaled RGB color of the ceiling light.
        left_wall_color: RGB albedo of the left wall.
        right_wall_color: RGB albedo of the right wall.
        back_wall_color: RGB albedo of the back wall, floor and ceiling.

    Example:
        >>> params = CornellBoxParams(light_intensity=12.0, light_color=(1.0, 0.9, 0.8))
    """

    light_intensity: float = 8.0
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    left_wall_color: tuple[float, float, float] = (0.65, 0.05, 0.05)
    right_wall_color: tuple[float, float, float] = (0.12, 0.45, 0.15)
    back_wall_color: tuple[float, float, float] = (0.73, 0.73, 0.73)


# =============================================================================
# Cornell Box Constants
# =============================================================================

# Half the side length of the box
BOX_HALF_SIZE = 1.0

# Half the thickness of each wall slab
WALL_HALF_THICKNESS = 0.05

# Radius of the ceiling light disc
LIGHT_RADIUS = 0.3

# Glossy sphere parameters
GLOSSY_SPHERE_ALBEDO = (0.5, 0.5, 0.6)
GLOSSY_SPHERE_SPECULAR = 0.35
GLOSSY_SPHERE_SHININESS = 40.0


# =============================================================================
# Cornell Box Factory
# =============================================================================


def _wall(center: tuple[float, float, float], radius: tuple[float, float, float], color) -> Object:
    return Object(Cube(center, radius), Lambertian(Albedo.from_sequence(color)))


def create_cornell_box_scene(
    params: CornellBoxParams | None = None,
    aspect_ratio: float = 1.0,
) -> tuple[Scene, PinholeCamera]:
    """Build the Cornell box and a camera looking into its open side.

    The room is centered on the origin; +x is right, +y is up and the camera
    sits on the +z axis looking toward -z.

    Args:
        params: Colors and light strength; defaults when omitted.
        aspect_ratio: Width over height of the image the camera will render.

    Returns:
        The scene and its camera.
    """
    if params is None:
        params = CornellBoxParams()

    s = BOX_HALF_SIZE
    w = WALL_HALF_THICKNESS
    span = s + w

    scene = Scene(background=Radiance.none())

    # =========================================================================
    # Walls (5 slabs forming the box, open toward +z)
    # =========================================================================

    scene.add(_wall((-s - w, 0.0, 0.0), (w, span, span), params.left_wall_color))
    scene.add(_wall((s + w, 0.0, 0.0), (w, span, span), params.right_wall_color))
    scene.add(_wall((0.0, 0.0, -s - w), (span, span, w), params.back_wall_color))
    scene.add(_wall((0.0, -s - w, 0.0), (span, w, span), params.back_wall_color))
    scene.add(_wall((0.0, s + w, 0.0), (span, w, span), params.back_wall_color))

    # =========================================================================
    # Area Light (just below the ceiling, facing down)
    # =========================================================================

    light = Blackbody(Radiance.from_sequence(params.light_color) * params.light_intensity)
    scene.add(Object(Disc((0.0, s - 1e-3, 0.0), (0.0, -1.0, 0.0), LIGHT_RADIUS), light))

    # =========================================================================
    # Block and spheres
    # =========================================================================

    # Tall block: unit cube scaled, turned and set on the floor
    block_half_height = 0.6
    scene.add(
        Object(
            Cube(),
            Lambertian(Albedo.from_sequence(params.back_wall_color)),
            compose(
                translation(-0.35, -s + block_half_height, -0.3),
                rotation_y(math.radians(20.0)),
                scaling(0.3, block_half_height, 0.3),
            ),
        )
    )

    # Glossy sphere resting on the floor
    glossy = (
        Phong()
        .color(Albedo.from_sequence(GLOSSY_SPHERE_ALBEDO))
        .highlight(Albedo.gray(GLOSSY_SPHERE_SPECULAR), GLOSSY_SPHERE_SHININESS)
    )
    scene.add(Object(Sphere(), glossy, compose(translation(0.4, -s + 0.35, 0.2), scaling(0.35))))

    # Small white sphere in front of the block
    scene.add(
        Object(
            Sphere((0.0, 0.0, 0.0), 1.0),
            Lambertian(Albedo.gray(0.8)),
            compose(translation(-0.3, -s + 0.15, 0.55), scaling(0.15)),
        )
    )

    # =========================================================================
    # Camera
    # =========================================================================

    camera = PinholeCamera(
        lookfrom=(0.0, 0.0, 3.6),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=38.0,
        aspect_ratio=aspect_ratio,
    )

    logger.info("Built Cornell box scene with %d objects", len(scene))
    return scene, camera


def create_cornell_box_light(params: CornellBoxParams | None = None) -> Light:
    """Create a point light matching the ceiling light, for direct lighting."""
    if params is None:
        params = CornellBoxParams()
    emission = Radiance.from_sequence(params.light_color) * params.light_intensity
    return Light(position=(0.0, BOX_HALF_SIZE - LIGHT_RADIUS, 0.0), emission=emission, radius=LIGHT_RADIUS)
