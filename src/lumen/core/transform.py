"""Affine 4x4 transform helpers.

Objects are placed in a scene with homogeneous 4x4 matrices. These helpers
build the common transforms and apply them to points and vectors. Matrices
act on column vectors, so ``compose(a, b)`` applies ``b`` first.

Example:
    >>> from lumen.core.transform import compose, scaling, translation
    >>> m = compose(translation(0.0, 1.0, 0.0), scaling(2.0))
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

Matrix4 = npt.NDArray[np.float64]


def identity() -> Matrix4:
    """Return the identity transform."""
    return np.eye(4, dtype=np.float64)


def translation(x: float, y: float, z: float) -> Matrix4:
    """Return a transform moving points by (x, y, z)."""
    m = identity()
    m[:3, 3] = (x, y, z)
    return m


def scaling(x: float, y: float | None = None, z: float | None = None) -> Matrix4:
    """Return a scale transform.

    With a single argument the scale is uniform.
    """
    if y is None:
        y = x
    if z is None:
        z = x
    return np.diag((x, y, z, 1.0)).astype(np.float64)


def rotation_x(angle: float) -> Matrix4:
    """Return a rotation about the x-axis by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    m = identity()
    m[1, 1], m[1, 2] = c, -s
    m[2, 1], m[2, 2] = s, c
    return m


def rotation_y(angle: float) -> Matrix4:
    """Return a rotation about the y-axis by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    m = identity()
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def rotation_z(angle: float) -> Matrix4:
    """Return a rotation about the z-axis by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    m = identity()
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def compose(*matrices: Matrix4) -> Matrix4:
    """Multiply transforms left to right; the rightmost is applied first."""
    result = identity()
    for m in matrices:
        result = result @ m
    return result


def transform_point(matrix: Matrix4, point: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Apply a transform to a point, including translation and the w divide."""
    p = matrix @ np.append(point, 1.0)
    return p[:3] / p[3]


def transform_vector(matrix: Matrix4, vector: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Apply the linear part of a transform to a direction."""
    return matrix[:3, :3] @ vector
