"""Progressive accumulation film backed by Taichi fields.

The film keeps a running average of every pass rendered into it together with
the number of samples per pixel. Each pass is a linear HDR image of shape
(height, width, 3) with row 0 at the top. Before accumulation, negative
values, NaN and infinities (numerical outliers of individual paths) are
replaced with zero so a single bad sample cannot poison a pixel.

The running average uses ``avg_n = avg_{n-1} + (x_n - avg_{n-1}) / n``, which
stays accurate for long renders without storing a sum.

Taichi must be initialized before a film is created.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from lumen.core.film import Film
    >>>
    >>> film = Film(64, 48)
    >>> film.accumulate(np.ones((48, 64, 3), dtype=np.float32))
    >>> film.to_numpy().shape
    (48, 64, 3)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

# =============================================================================
# Accumulation Kernels
# =============================================================================


@ti.kernel
def _accumulate(
    color: ti.template(),
    count: ti.template(),
    image: ti.types.ndarray(dtype=ti.f32, ndim=3),
):
    """Fold one pass into the running average.

    Args:
        color: Running-average color buffer indexed (x, y).
        count: Sample count buffer indexed (x, y).
        image: The pass image indexed (row, column, channel).
    """
    for i, j in color:
        c = tm.vec3(image[j, i, 0], image[j, i, 1], image[j, i, 2])

        # Clamp negative values (numerical errors)
        c = tm.max(c, tm.vec3(0.0, 0.0, 0.0))

        # Check for NaN/Inf and replace with zero
        for k in ti.static(range(3)):
            if tm.isnan(c[k]) or tm.isinf(c[k]):
                c[k] = 0.0

        count[i, j] += 1
        n = count[i, j]
        color[i, j] += (c - color[i, j]) / ti.cast(n, ti.f32)


# =============================================================================
# Film
# =============================================================================


class Film:
    """Running-average HDR image buffer.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the film buffers.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.

        Raises:
            ValueError: If a dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Film dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self._color = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))
        self._count = ti.field(dtype=ti.i32, shape=(width, height))
        self.reset()

    def reset(self) -> None:
        """Clear the color buffer and sample counts."""
        self._color.fill(0.0)
        self._count.fill(0)

    def accumulate(self, image: npt.ArrayLike) -> None:
        """Fold a rendered pass into the film.

        Args:
            image: Linear radiance of shape (height, width, 3).

        Raises:
            ValueError: If the image shape does not match the film.
        """
        pass_image = np.ascontiguousarray(image, dtype=np.float32)
        expected = (self.height, self.width, 3)
        if pass_image.shape != expected:
            raise ValueError(f"Pass image shape {pass_image.shape} does not match film {expected}")
        _accumulate(self._color, self._count, pass_image)

    @property
    def sample_count(self) -> int:
        """The number of passes accumulated into every pixel."""
        return int(self._count[0, 0])

    @property
    def color_buffer(self) -> "ti.MatrixField":
        """The raw Taichi color field, indexed (x, y)."""
        return self._color

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Return the accumulated image as an array of shape (height, width, 3)."""
        image = self._color.to_numpy()
        # Transpose from (width, height, 3) to (height, width, 3) for standard image format
        return np.ascontiguousarray(np.transpose(image, (1, 0, 2)), dtype=np.float32)

    def __repr__(self) -> str:
        return f"Film(width={self.width}, height={self.height}, samples={self.sample_count})"
