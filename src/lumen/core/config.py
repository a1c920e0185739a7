"""Render configuration.

All render-time settings are collected in a single ``RenderConfig`` that is
passed explicitly to the code that needs it; there is no global state. The
config round-trips through plain dictionaries so it can be stored alongside
rendered images or loaded from JSON.

Example:
    >>> from lumen.core.config import RenderConfig
    >>> config = RenderConfig(width=256, height=256, samples=8)
    >>> config.validate()
    >>> RenderConfig.from_dict(config.to_dict()) == config
    True
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any

import numpy as np

from lumen.core.integrator import PathTracer
from lumen.preview.display import Tonemap

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Settings for a progressive path-traced render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Paths averaged per pixel in every pass.
        depth_limit: Maximum number of surface interactions per path.
        contribution_limit: Minimum path throughput luma before a path is cut.
        passes: Number of progressive passes.
        seed: Base seed for all random generators.
        workers: Number of worker processes.
        tonemap: Tone mapping operator in textual form, e.g. "gamma:2.2".
        exposure: Linear scale applied before tone mapping.
    """

    width: int = 256
    height: int = 256
    samples: int = 4
    depth_limit: int = 5
    contribution_limit: float = 0.01
    passes: int = 16
    seed: int = 0
    workers: int = 1
    tonemap: str = "gamma:2.2"
    exposure: float = 1.0

    def validate(self) -> None:
        """Check every setting.

        Raises:
            ValueError: If a setting is out of range or the tone mapping
                operator is unknown.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.samples < 1:
            raise ValueError(f"samples must be at least 1, got {self.samples}")
        if self.depth_limit < 0:
            raise ValueError(f"depth_limit must be non-negative, got {self.depth_limit}")
        if self.contribution_limit < 0.0:
            raise ValueError(f"contribution_limit must be non-negative, got {self.contribution_limit}")
        if self.passes < 1:
            raise ValueError(f"passes must be at least 1, got {self.passes}")
        if self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.exposure <= 0.0:
            raise ValueError(f"exposure must be positive, got {self.exposure}")
        Tonemap.parse(self.tonemap)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def tone_mapper(self) -> Tonemap:
        """Parse the configured tone mapping operator."""
        return Tonemap.parse(self.tonemap)

    def path_tracer(self) -> PathTracer:
        """Create a path tracer with the configured limits."""
        return PathTracer(
            rng=np.random.default_rng(self.seed),
            contribution_limit=self.contribution_limit,
            depth_limit=self.depth_limit,
            samples=self.samples,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Build a config from a dictionary, ignoring unknown keys.

        Raises:
            ValueError: If the resulting config is invalid.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown render settings: %s", ", ".join(unknown))
        config = cls(**{key: value for key, value in data.items() if key in known})
        config.validate()
        return config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
