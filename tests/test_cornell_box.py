"""Unit tests for the Cornell box scene.

Tests cover:
- Scene creation and object counts
- Wall positions and materials
- The ceiling light
- The open front side
- Camera configuration
- The matching point light for direct lighting
"""

import numpy as np
import pytest


@pytest.fixture
def cornell_box_scene():
    """Create a Cornell box scene for testing."""
    from lumen.scene import create_cornell_box_scene

    return create_cornell_box_scene()


def _first_effect(scene, origin, direction):
    from lumen.core.ray import Ray

    hit = scene.intersect(Ray(np.asarray(origin, dtype=np.float64), np.asarray(direction, dtype=np.float64)))
    assert hit is not None
    return hit, hit.bsdf.effects[0]


class TestSceneCreation:
    """Tests for basic scene creation."""

    def test_create_scene_returns_scene_and_camera(self, cornell_box_scene):
        from lumen.camera import PinholeCamera
        from lumen.scene import Scene

        scene, camera = cornell_box_scene

        assert isinstance(scene, Scene)
        assert isinstance(camera, PinholeCamera)

    def test_scene_has_nine_objects(self, cornell_box_scene):
        """Five walls, the light, a block and two spheres."""
        scene, _ = cornell_box_scene
        assert len(scene) == 9

    def test_background_is_black(self, cornell_box_scene):
        from lumen.core.spectrum import Radiance

        scene, _ = cornell_box_scene
        assert scene.background == Radiance.none()

    def test_creation_is_logged(self, caplog):
        import logging

        from lumen.scene import create_cornell_box_scene

        with caplog.at_level(logging.INFO, logger="lumen.scene.cornell_box"):
            create_cornell_box_scene()

        assert "9 objects" in caplog.text


class TestWalls:
    """Tests for wall placement and colors."""

    def test_left_wall_is_red(self, cornell_box_scene):
        from lumen.core.spectrum import Albedo
        from lumen.materials import DiffuseReflection

        scene, _ = cornell_box_scene
        hit, effect = _first_effect(scene, (0.0, 0.5, 0.0), (-1.0, 0.0, 0.0))

        assert isinstance(effect, DiffuseReflection)
        assert effect.albedo == Albedo(0.65, 0.05, 0.05)
        assert hit.intersection.t == pytest.approx(1.0)
        np.testing.assert_allclose(hit.intersection.normal, [1.0, 0.0, 0.0])

    def test_right_wall_is_green(self, cornell_box_scene):
        from lumen.core.spectrum import Albedo

        scene, _ = cornell_box_scene
        hit, effect = _first_effect(scene, (0.0, 0.5, 0.0), (1.0, 0.0, 0.0))

        assert effect.albedo == Albedo(0.12, 0.45, 0.15)
        np.testing.assert_allclose(hit.intersection.normal, [-1.0, 0.0, 0.0])

    def test_back_wall(self, cornell_box_scene):
        from lumen.core.spectrum import Albedo

        scene, _ = cornell_box_scene
        hit, effect = _first_effect(scene, (0.0, 0.5, 0.0), (0.0, 0.0, -1.0))

        assert effect.albedo == Albedo(0.73, 0.73, 0.73)
        assert hit.intersection.t == pytest.approx(1.0)

    def test_custom_wall_colors(self):
        from lumen.core.spectrum import Albedo
        from lumen.scene import CornellBoxParams, create_cornell_box_scene

        params = CornellBoxParams(left_wall_color=(0.1, 0.2, 0.3))
        scene, _ = create_cornell_box_scene(params)
        _, effect = _first_effect(scene, (0.0, 0.5, 0.0), (-1.0, 0.0, 0.0))

        assert effect.albedo == Albedo(0.1, 0.2, 0.3)

    def test_front_is_open(self, cornell_box_scene):
        from lumen.core.ray import Ray, vec3

        scene, _ = cornell_box_scene
        assert scene.intersect(Ray(vec3(0.0, 0.5, 0.0), vec3(0.0, 0.0, 1.0))) is None


class TestLight:
    """Tests for the ceiling light."""

    def test_light_below_ceiling(self, cornell_box_scene):
        from lumen.core.spectrum import Radiance
        from lumen.materials import Emission

        scene, _ = cornell_box_scene
        hit, effect = _first_effect(scene, (0.0, 0.5, 0.0), (0.0, 1.0, 0.0))

        assert isinstance(effect, Emission)
        assert effect.radiance == Radiance.gray(8.0)
        np.testing.assert_allclose(hit.intersection.normal, [0.0, -1.0, 0.0])
        assert hit.intersection.point[1] < 1.0

    def test_ceiling_outside_light_radius(self, cornell_box_scene):
        from lumen.materials import DiffuseReflection

        scene, _ = cornell_box_scene
        _, effect = _first_effect(scene, (0.6, 0.5, 0.0), (0.0, 1.0, 0.0))

        assert isinstance(effect, DiffuseReflection)

    def test_custom_light(self):
        from lumen.core.spectrum import Radiance
        from lumen.scene import CornellBoxParams, create_cornell_box_scene

        params = CornellBoxParams(light_intensity=2.0, light_color=(1.0, 0.5, 0.25))
        scene, _ = create_cornell_box_scene(params)
        _, effect = _first_effect(scene, (0.0, 0.5, 0.0), (0.0, 1.0, 0.0))

        assert effect.radiance == Radiance(2.0, 1.0, 0.5)

    def test_point_light_matches_ceiling_light(self):
        from lumen.core.spectrum import Radiance
        from lumen.scene import BOX_HALF_SIZE, create_cornell_box_light

        light = create_cornell_box_light()

        np.testing.assert_allclose(light.position, [0.0, BOX_HALF_SIZE - light.radius, 0.0])
        assert light.emission == Radiance.gray(8.0)
        assert light.radius == pytest.approx(0.3)


class TestCamera:
    """Tests for the camera configuration."""

    def test_camera_looks_into_the_box(self, cornell_box_scene):
        _, camera = cornell_box_scene

        assert camera.lookfrom == (0.0, 0.0, 3.6)
        assert camera.lookat == (0.0, 0.0, 0.0)
        np.testing.assert_allclose(camera.w, [0.0, 0.0, 1.0])

    def test_aspect_ratio_is_forwarded(self):
        from lumen.scene import create_cornell_box_scene

        _, camera = create_cornell_box_scene(aspect_ratio=1.5)
        assert camera.aspect_ratio == 1.5

    def test_every_corner_ray_hits_the_box(self, cornell_box_scene):
        """The field of view stays inside the box opening."""
        from lumen.camera import Resolution, Target

        scene, camera = cornell_box_scene
        res = Resolution(8, 8)
        for target in (Target(0, 0), Target(7, 0), Target(0, 7), Target(7, 7)):
            assert scene.intersect(camera.primary(res, target)) is not None
