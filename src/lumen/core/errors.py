"""Exception types raised by the rendering core.

Every error here is fatal for the operation that raised it: they signal
degenerate scene setup or caller misuse, never a per-ray condition. Misses,
zero densities and contribution cutoffs are ordinary control flow and are
represented by ``None`` results or early returns instead.
"""


class DegenerateGeometryError(ValueError):
    """Raised for geometry that cannot be used for intersection.

    Examples are a singular object transform, a zero-length ray direction
    or a non-positive ray length.
    """


class UnsupportedEffectError(NotImplementedError):
    """Raised when an integrator meets a scattering effect it cannot evaluate."""


class EmptyEstimatorError(RuntimeError):
    """Raised when an estimate is requested before any sample was added."""
