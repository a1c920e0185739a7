"""Progressive renderer for iterative pass accumulation.

This module drives a per-pixel ``Renderer`` over a whole image and folds the
result of every pass into a ``Film``. It supports:
- Progressive rendering that refines over time
- Progress callbacks and a generator interface for UI updates
- Parallel rendering of rows on a process pool
- Reset and re-render functionality

Every row of every pass draws from its own random generator seeded with
``(seed, pass_index, row)``, so an image is reproducible from its seed and
independent of how many worker processes rendered it.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from lumen.core.integrator import PathTracer
    >>> from lumen.core.progressive import ProgressiveRenderer
    >>> from lumen.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> renderer = ProgressiveRenderer(scene, camera, PathTracer(samples=4), 128, 128, seed=7)
    >>> renderer.render(8)  # Accumulate 8 passes
    >>> image = renderer.get_image_numpy()
"""

from __future__ import annotations

import logging
import multiprocessing
from collections.abc import Callable, Generator, Iterator
from pathlib import Path
from typing import Any

import numpy as np
import numpy.typing as npt

from lumen.camera.base import Camera, Resolution, Target
from lumen.core.film import Film
from lumen.core.integrator import Renderer
from lumen.preview.display import TonemapLike
from lumen.preview.export import image_to_uint8, save_png_from_array
from lumen.scene.scene import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (current_passes, total_target_passes)
ProgressCallback = Callable[[int, int], None]

# Global state for multiprocessing workers (set by initializer)
_worker_data: dict[str, Any] = {}


# =============================================================================
# Row Rendering
# =============================================================================


def row_rng(seed: int, pass_index: int, row: int) -> np.random.Generator:
    """Create the random generator for one row of one pass."""
    return np.random.default_rng((seed, pass_index, row))


def render_row(
    scene: Scene,
    camera: Camera,
    renderer: Renderer,
    resolution: Resolution,
    seed: int,
    pass_index: int,
    row: int,
) -> npt.NDArray[np.float32]:
    """Render one image row.

    Returns:
        Linear radiance of shape (width, 3).
    """
    row_renderer = renderer.with_rng(row_rng(seed, pass_index, row))
    pixels = np.empty((resolution.width, 3), dtype=np.float32)
    for x in range(resolution.width):
        radiance = row_renderer.render(scene, camera, resolution, Target(x, row))
        pixels[x] = radiance.to_numpy()
    return pixels


def _init_worker(
    scene: Scene,
    camera: Camera,
    renderer: Renderer,
    resolution: Resolution,
    seed: int,
) -> None:
    _worker_data.update(
        scene=scene,
        camera=camera,
        renderer=renderer,
        resolution=resolution,
        seed=seed,
    )


def _render_row_task(task: tuple[int, int]) -> tuple[int, npt.NDArray[np.float32]]:
    pass_index, row = task
    pixels = render_row(
        _worker_data["scene"],
        _worker_data["camera"],
        _worker_data["renderer"],
        _worker_data["resolution"],
        _worker_data["seed"],
        pass_index,
        row,
    )
    return row, pixels


# =============================================================================
# Progressive Renderer
# =============================================================================


class ProgressiveRenderer:
    """A progressive renderer that accumulates passes over time.

    One pass evaluates the renderer once for every pixel; a path tracer
    already averages ``samples`` paths per call, so the effective sample
    count is ``passes * samples``.

    Attributes:
        scene: The scene being rendered.
        camera: The camera generating primary rays.
        renderer: The per-pixel renderer.
        seed: Base seed for all random generators.
        workers: Number of worker processes; 1 renders in-process.
        film: The accumulation buffer.
    """

    def __init__(
        self,
        scene: Scene,
        camera: Camera,
        renderer: Renderer,
        width: int,
        height: int,
        seed: int = 0,
        workers: int = 1,
    ) -> None:
        """Initialize the progressive renderer.

        Raises:
            ValueError: If the dimensions, seed or worker count are invalid.
        """
        if seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        self.scene = scene
        self.camera = camera
        self.renderer = renderer
        self.seed = seed
        self.workers = workers
        self._resolution = Resolution(width, height)
        self.film = Film(width, height)
        self._pass_index = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._resolution.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._resolution.height

    @property
    def resolution(self) -> Resolution:
        return self._resolution

    @property
    def sample_count(self) -> int:
        """Get the number of passes accumulated so far."""
        return self.film.sample_count

    def reset(self) -> None:
        """Reset the film for a fresh render with the same seed."""
        self.film.reset()
        self._pass_index = 0

    # -------------------------------------------------------------------------
    # Pass rendering
    # -------------------------------------------------------------------------

    def render_pass(self) -> npt.NDArray[np.float32]:
        """Render and accumulate a single pass in-process.

        Returns:
            The pass image of shape (height, width, 3).
        """
        image = np.empty((self.height, self.width, 3), dtype=np.float32)
        for row in range(self.height):
            image[row] = render_row(
                self.scene, self.camera, self.renderer, self._resolution, self.seed, self._pass_index, row
            )
        self._finish_pass(image)
        return image

    def _render_pass_pooled(self, pool: Any) -> npt.NDArray[np.float32]:
        image = np.empty((self.height, self.width, 3), dtype=np.float32)
        tasks = ((self._pass_index, row) for row in range(self.height))
        for row, pixels in pool.imap_unordered(_render_row_task, tasks):
            image[row] = pixels
        self._finish_pass(image)
        return image

    def _finish_pass(self, image: npt.NDArray[np.float32]) -> None:
        self.film.accumulate(image)
        self._pass_index += 1

    def _passes(self, num_passes: int) -> Iterator[None]:
        if self.workers == 1:
            for _ in range(num_passes):
                self.render_pass()
                yield
            return

        # Spawned workers never inherit the parent's Taichi runtime
        context = multiprocessing.get_context("spawn")
        init_args = (self.scene, self.camera, self.renderer, self._resolution, self.seed)
        logger.debug("Starting %d render workers", self.workers)
        with context.Pool(processes=self.workers, initializer=_init_worker, initargs=init_args) as pool:
            for _ in range(num_passes):
                self._render_pass_pooled(pool)
                yield

    def render(
        self,
        num_passes: int = 1,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render passes progressively with optional progress callback.

        Accumulates the specified number of passes into the existing film.
        Can be called multiple times to continue refining the image.

        Args:
            num_passes: Number of passes to add.
            callback: Optional callback called after each pass.
                Receives (current_total_passes, target_total_passes).

        Example:
            >>> def progress(current, target):
            ...     print(f"Progress: {current}/{target} passes")
            >>> renderer.render(16, callback=progress)
        """
        for current, target in self.render_progressive(num_passes):
            if callback is not None:
                callback(current, target)

    def render_progressive(self, num_passes: int = 1) -> Generator[tuple[int, int], None, None]:
        """Render passes progressively, yielding progress after each pass.

        This is a generator-based alternative to render() with callbacks.

        Args:
            num_passes: Number of passes to add.

        Yields:
            Tuple of (current_total_passes, target_total_passes).

        Example:
            >>> for current, target in renderer.render_progressive(16):
            ...     print(f"Progress: {current}/{target} passes")
        """
        if num_passes <= 0:
            return

        target = self.sample_count + num_passes
        for _ in self._passes(num_passes):
            current = self.sample_count
            logger.debug("Pass %d/%d finished", current, target)
            yield current, target

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the accumulated linear HDR image of shape (height, width, 3)."""
        return self.film.to_numpy()

    def get_image_uint8(self, tonemap: TonemapLike = "gamma", exposure: float = 1.0) -> npt.NDArray[np.uint8]:
        """Get the rendered image tone mapped to 8 bits per channel."""
        return image_to_uint8(self.get_image_numpy(), tonemap=tonemap, exposure=exposure)

    def save_image(self, filepath: str | Path, tonemap: TonemapLike = "gamma", exposure: float = 1.0) -> None:
        """Save the rendered image to a PNG file.

        Args:
            filepath: Path to save the image (e.g., "output.png").
            tonemap: Tone mapping operator or its textual form.
            exposure: Linear scale applied before tone mapping.
        """
        save_png_from_array(self.get_image_numpy(), filepath, tonemap=tonemap, exposure=exposure)
        logger.info("Saved %dx%d image to %s", self.width, self.height, filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"passes={self.sample_count}, workers={self.workers})"
        )
