"""Unit tests for scene objects and ray-scene queries.

Tests cover:
- Object transforms and their validation
- Mapping intersections back to world space (including non-uniform scale)
- Nearest-hit selection and tie-breaking
- Occlusion queries
- Empty scenes
"""

import numpy as np
import pytest

from lumen.core.errors import DegenerateGeometryError
from lumen.core.ray import Ray, vec3
from lumen.core.spectrum import Albedo, Radiance
from lumen.core.transform import compose, rotation_y, scaling, translation
from lumen.geometry import Cube, Sphere
from lumen.materials import Blackbody, Cosine, DiffuseReflection, Emission, Lambertian
from lumen.scene import Object, Scene


def gray_sphere(transform=None, albedo=0.5):
    return Object(Sphere(), Lambertian(Albedo.gray(albedo)), transform)


class TestObject:
    """Tests for Object construction and transforms."""

    def test_defaults_to_identity(self):
        obj = gray_sphere()

        np.testing.assert_array_equal(obj.transform, np.eye(4))
        np.testing.assert_array_equal(obj.inverse, np.eye(4))

    def test_inverse_is_precomputed(self):
        m = compose(translation(1.0, 2.0, 3.0), rotation_y(0.4), scaling(2.0, 1.0, 0.5))
        obj = gray_sphere(m)

        np.testing.assert_allclose(obj.transform @ obj.inverse, np.eye(4), atol=1e-12)

    def test_singular_transform_raises(self):
        with pytest.raises(DegenerateGeometryError):
            gray_sphere(scaling(1.0, 0.0, 1.0))

    def test_tiny_uniform_scale_is_invertible(self):
        """A small but well conditioned transform is accepted."""
        obj = gray_sphere(scaling(1e-5))

        np.testing.assert_allclose(obj.inverse, np.diag([1e5, 1e5, 1e5, 1.0]))

    def test_nearly_singular_transform_raises(self):
        with pytest.raises(DegenerateGeometryError):
            gray_sphere(scaling(1.0, 1e-18, 1.0))

    def test_non_square_transform_raises(self):
        with pytest.raises(DegenerateGeometryError):
            gray_sphere(np.eye(3))

    def test_transform_ray_to_local_frame(self):
        obj = gray_sphere(translation(0.0, 0.0, -3.0))
        local = obj.transform_ray(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0)))

        np.testing.assert_allclose(local.origin, [0.0, 0.0, 3.0])
        np.testing.assert_allclose(local.direction, [0.0, 0.0, -1.0])


class TestSceneIntersect:
    """Tests for nearest-hit queries."""

    def test_empty_scene_misses(self):
        scene = Scene()

        assert len(scene) == 0
        assert scene.intersect(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))) is None

    def test_default_background_is_black(self):
        assert Scene().background == Radiance.none()

    def test_add_returns_scene(self):
        scene = Scene()
        assert scene.add(gray_sphere()) is scene
        assert len(scene) == 1

    def test_translated_sphere(self):
        scene = Scene().add(gray_sphere(translation(0.0, 0.0, -5.0)))
        hit = scene.intersect(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0)))

        assert hit is not None
        assert hit.intersection.t == pytest.approx(4.0)
        np.testing.assert_allclose(hit.intersection.point, [0.0, 0.0, -4.0])
        np.testing.assert_allclose(hit.intersection.normal, [0.0, 0.0, 1.0])
        assert list(hit.bsdf) == [DiffuseReflection(Albedo.gray(0.5), Cosine())]

    def test_nearest_object_wins(self):
        """Objects are scanned in order but the smallest distance is kept."""
        far = Object(Sphere(), Lambertian(Albedo.gray(0.1)), translation(0.0, 0.0, -10.0))
        near = Object(Sphere(), Blackbody(Radiance.gray(1.0)), translation(0.0, 0.0, -4.0))
        scene = Scene().add(far).add(near)

        hit = scene.intersect(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0)))

        assert hit is not None
        assert hit.intersection.t == pytest.approx(3.0)
        assert isinstance(hit.bsdf.effects[0], Emission)

    def test_tie_keeps_first_object(self):
        first = Object(Sphere(), Blackbody(Radiance.gray(1.0)))
        second = Object(Sphere(), Lambertian(Albedo.gray(0.5)))
        scene = Scene().add(first).add(second)

        hit = scene.intersect(Ray(vec3(0.0, 0.0, -3.0), vec3(0.0, 0.0, 1.0)))

        assert hit is not None
        assert isinstance(hit.bsdf.effects[0], Emission)

    def test_distance_compared_in_world_space(self):
        """A large scaled-down object is not preferred over a closer one."""
        # Local distance 0.5 becomes world distance 5
        big = Object(Sphere(radius=1.0), Lambertian(Albedo.gray(0.1)), scaling(10.0))
        near = Object(Sphere(), Blackbody(Radiance.gray(1.0)), translation(0.0, 0.0, -13.0))
        scene = Scene().add(big).add(near)

        hit = scene.intersect(Ray(vec3(0.0, 0.0, -15.0), vec3(0.0, 0.0, 1.0)))

        assert hit is not None
        assert hit.intersection.t == pytest.approx(1.0)
        assert isinstance(hit.bsdf.effects[0], Emission)

    def test_uniform_scale_matches_larger_primitive(self, rng):
        """A unit sphere scaled by 2 behaves like a sphere of radius 2."""
        scaled = Scene().add(gray_sphere(scaling(2.0)))
        plain = Scene().add(Object(Sphere(radius=2.0), Lambertian(Albedo.gray(0.5))))

        hits = 0
        for _ in range(200):
            ray = Ray(rng.uniform(-5.0, 5.0, 3), rng.normal(size=3))
            a = scaled.intersect(ray)
            b = plain.intersect(ray)

            assert (a is None) == (b is None)
            if a is None:
                continue
            hits += 1
            assert a.intersection.t == pytest.approx(b.intersection.t, abs=1e-9)
            np.testing.assert_allclose(a.intersection.point, b.intersection.point, atol=1e-9)
            np.testing.assert_allclose(a.intersection.normal, b.intersection.normal, atol=1e-9)
            assert a.intersection.inside == b.intersection.inside

        assert hits > 0

    def test_non_uniform_scale_normal(self):
        """Normals follow the inverse transpose and stay perpendicular to the surface."""
        a, b, c = 2.0, 1.0, 1.0
        scene = Scene().add(gray_sphere(scaling(a, b, c)))
        ray = Ray(vec3(5.0, 0.5, 0.0), vec3(-1.0, 0.0, 0.0))

        hit = scene.intersect(ray)

        assert hit is not None
        x, y, z = hit.intersection.point
        assert (x / a) ** 2 + (y / b) ** 2 + (z / c) ** 2 == pytest.approx(1.0)
        gradient = np.array([x / a**2, y / b**2, z / c**2])
        np.testing.assert_allclose(hit.intersection.normal, gradient / np.linalg.norm(gradient))
        assert np.linalg.norm(hit.intersection.normal) == pytest.approx(1.0)

    def test_world_distance_matches_point(self):
        m = compose(translation(0.3, -0.2, -4.0), rotation_y(0.6), scaling(1.0, 2.0, 0.5))
        scene = Scene().add(Object(Cube(), Lambertian(Albedo.gray(0.5)), m))
        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.05, 0.0, -1.0))

        hit = scene.intersect(ray)

        assert hit is not None
        np.testing.assert_allclose(ray.at(hit.intersection.t), hit.intersection.point, atol=1e-9)

    def test_shading_happens_on_the_winner(self):
        scene = Scene().add(gray_sphere(translation(0.0, 0.0, -3.0), albedo=0.25))
        hit = scene.intersect(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0)))

        assert hit is not None
        assert hit.bsdf.effects[0].albedo == Albedo.gray(0.25)


class TestSceneOcclude:
    """Tests for any-hit queries."""

    def test_empty_scene_never_occludes(self):
        assert Scene().occlude(Ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0))) is False

    def test_occlusion_respects_ray_length(self):
        scene = Scene().add(gray_sphere(translation(0.0, 0.0, -5.0)))

        assert scene.occlude(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0), 3.0)) is False
        assert scene.occlude(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0), 4.5)) is True

    def test_occlusion_under_scaling_respects_length(self):
        """Ray lengths are converted into each object's frame."""
        scene = Scene().add(gray_sphere(compose(translation(0.0, 0.0, -5.0), scaling(0.5))))

        assert scene.occlude(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0), 4.4)) is False
        assert scene.occlude(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0), 4.6)) is True

    def test_occlude_agrees_with_intersect(self, rng):
        scene = (
            Scene()
            .add(gray_sphere(translation(1.0, 0.0, -3.0)))
            .add(Object(Cube(), Lambertian(Albedo.gray(0.5)), compose(translation(-1.0, 0.5, -4.0), rotation_y(0.3))))
        )
        for _ in range(200):
            ray = Ray(rng.uniform(-2.0, 2.0, 3), rng.normal(size=3), rng.uniform(0.5, 8.0))
            assert scene.occlude(ray) == (scene.intersect(ray) is not None)

    def test_iteration_preserves_insertion_order(self):
        a, b = gray_sphere(), gray_sphere()
        scene = Scene().add(a).add(b)
        assert list(scene) == [a, b]
