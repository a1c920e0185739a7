"""Monte Carlo estimator primitives.

A ``Sample`` pairs a value with the probability it was drawn with. Samples
compose algebraically so that chained stochastic contributions keep track of
their joint probability (independence is assumed):

    Sample(a, p) + Sample(b, q) == Sample(a + b, p * q)
    Sample(a, p) * Sample(b, q) == Sample(a * b, p * q)

An ``Estimator`` reduces repeated samples with the standard importance
sampling estimator::

    estimate = (1 / N) * sum(value_i / probability_i)

Example:
    >>> from lumen.core.montecarlo import Estimator, Sample
    >>> estimator = Estimator()
    >>> estimator.add(Sample(2.0, 0.5))
    >>> estimator.add(Sample.certain(1.0))
    >>> estimator.value()
    2.5
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from lumen.core.errors import EmptyEstimatorError

T = TypeVar("T")


@dataclass(frozen=True)
class Sample(Generic[T]):
    """A value paired with the probability it was sampled with.

    Attributes:
        value: The sampled quantity (a Radiance, Albedo or scalar).
        probability: The probability (density) weight of the sample.
    """

    value: T
    probability: float = 1.0

    @classmethod
    def certain(cls, value: T) -> Sample[T]:
        """Lift a plain value to a sample with probability 1."""
        return cls(value, 1.0)

    def __add__(self, other: Sample[Any]) -> Sample[Any]:
        if not isinstance(other, Sample):
            return NotImplemented
        return Sample(self.value + other.value, self.probability * other.probability)

    def __mul__(self, other: Sample[Any]) -> Sample[Any]:
        if not isinstance(other, Sample):
            return NotImplemented
        return Sample(self.value * other.value, self.probability * other.probability)


class Estimator(Generic[T]):
    """Running unbiased Monte Carlo estimate of a quantity.

    Example:
        >>> estimator = Estimator()
        >>> for _ in range(4):
        ...     estimator.add(Sample.certain(0.5))
        >>> estimator.value()
        0.5
    """

    def __init__(self) -> None:
        self._mean: T | None = None
        self._count = 0

    def add(self, sample: Sample[T]) -> None:
        """Fold ``sample.value / sample.probability`` into the running mean.

        A constant stream of values reproduces that constant exactly.
        """
        weighted = sample.value / sample.probability
        self._count += 1
        if self._mean is None:
            self._mean = weighted
        else:
            self._mean = self._mean + (weighted - self._mean) / self._count

    def value(self) -> T:
        """Return the mean of all weighted samples.

        Raises:
            EmptyEstimatorError: If no sample has been added.
        """
        if self._mean is None:
            raise EmptyEstimatorError("Cannot estimate a value from zero samples")
        return self._mean

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"Estimator(samples={self._count})"
