"""Pytest configuration for lumen tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import numpy as np
import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def rng():
    """A deterministically seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def emitter_scene():
    """A scene holding a single emissive unit sphere at the origin."""
    from lumen.core.spectrum import Radiance
    from lumen.geometry import Sphere
    from lumen.materials import Blackbody
    from lumen.scene import Object, Scene

    scene = Scene(background=Radiance.gray(0.25))
    scene.add(Object(Sphere(), Blackbody(Radiance(1.0, 2.0, 3.0))))
    return scene
