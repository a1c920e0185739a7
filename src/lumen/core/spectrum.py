"""Color quantities: radiance and albedo.

Two distinct RGB types are used so that light and reflectance cannot be mixed
up by accident:

- ``Radiance``: light flux arriving along a ray. Non-negative, unbounded.
- ``Albedo``: dimensionless per-channel reflectance, conceptually in [0, 1]
  (not enforced).

Supported arithmetic:
    Radiance + Radiance -> Radiance
    Radiance * Albedo   -> Radiance   (and Albedo * Radiance)
    Albedo * Albedo     -> Albedo
    Albedo + Albedo     -> Albedo
    scalar * either     -> same type

Perceptual lightness uses the NTSC luma weights 0.21 / 0.72 / 0.07.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

import numpy as np
import numpy.typing as npt

LUMA_WEIGHTS = (0.21, 0.72, 0.07)

_T = TypeVar("_T", bound="_Rgb")


@dataclass(frozen=True)
class _Rgb:
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def gray(cls: type[_T], f: float) -> _T:
        """Create a value with equal red, green and blue."""
        return cls(f, f, f)

    @classmethod
    def red(cls: type[_T], f: float) -> _T:
        return cls(f, 0.0, 0.0)

    @classmethod
    def green(cls: type[_T], f: float) -> _T:
        return cls(0.0, f, 0.0)

    @classmethod
    def blue(cls: type[_T], f: float) -> _T:
        return cls(0.0, 0.0, f)

    @classmethod
    def zero(cls: type[_T]) -> _T:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_sequence(cls: type[_T], rgb) -> _T:
        r, g, b = rgb
        return cls(float(r), float(g), float(b))

    def _luma(self) -> float:
        wr, wg, wb = LUMA_WEIGHTS
        return wr * self.r + wg * self.g + wb * self.b

    def _scaled(self: _T, f: float) -> _T:
        return type(self)(self.r * f, self.g * f, self.b * f)

    def __add__(self: _T, other: _T) -> _T:
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self: _T, other: _T) -> _T:
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.r - other.r, self.g - other.g, self.b - other.b)

    def __rmul__(self: _T, f: float) -> _T:
        if isinstance(f, (int, float)):
            return self._scaled(f)
        return NotImplemented

    def __truediv__(self: _T, f: float) -> _T:
        return type(self)(self.r / f, self.g / f, self.b / f)

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Return the channels as a float32 array of shape (3,)."""
        return np.array((self.r, self.g, self.b), dtype=np.float32)


@dataclass(frozen=True)
class Radiance(_Rgb):
    """The radiant intensity of a ray of light."""

    @classmethod
    def none(cls) -> Radiance:
        """Absolute darkness."""
        return cls(0.0, 0.0, 0.0)

    def luma(self) -> float:
        """Compute the lightness according to NTSC."""
        return self._luma()

    def __mul__(self, other: Albedo | float) -> Radiance:
        if isinstance(other, Albedo):
            return Radiance(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, (int, float)):
            return self._scaled(other)
        return NotImplemented


@dataclass(frozen=True)
class Albedo(_Rgb):
    """The light absorption of a surface."""

    @classmethod
    def black(cls) -> Albedo:
        """A surface absorbing all light."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Albedo:
        """A surface absorbing no light."""
        return cls(1.0, 1.0, 1.0)

    def luma_factor(self) -> float:
        """Compute the influence on lightness according to NTSC."""
        return self._luma()

    def __mul__(self, other: Albedo | Radiance | float) -> Albedo | Radiance:
        if isinstance(other, Radiance):
            return Radiance(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, Albedo):
            return Albedo(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, (int, float)):
            return self._scaled(other)
        return NotImplemented
