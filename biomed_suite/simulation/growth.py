"""Exponential cell-growth projection.

The simulator compounds a running population once per sampling interval::

    population <- population * (1 + r * interval),    r = ln(2) / doubling_time

This is a forward-Euler step, not the closed form ``N0 * 2 ** (t / Td)``, so
results depend on the interval and undershoot the true exponential as the
interval grows; :func:`closed_form_population` reports the drift.

A sample at ``t = k * interval`` reflects ``k`` compounding steps; the first
sample reports the initial population unchanged.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

from ..errors import InvalidParameterError

LOGGER = logging.getLogger(__name__)

VIABLE_FRACTION = 0.95
VIABILITY_PERCENT = VIABLE_FRACTION * 100.0

_EXACT_COUNT_LIMIT = 2**53


@dataclass(frozen=True)
class GrowthParameters:
    """Experiment configuration for a growth projection.

    ``doubling_time``
        Hours for the population to double; must be positive.
    ``initial_cells``
        Population at ``t = 0``; defaults to 50 and must be non-negative.
    ``duration``
        Last time point (hours) that may be sampled; defaults to 72.  A
        negative duration yields no samples.
    ``time_interval``
        Spacing between samples in hours; defaults to 0.5 and must be positive.
    """

    doubling_time: float
    initial_cells: float = 50.0
    duration: float = 72.0
    time_interval: float = 0.5

    def validate(self) -> None:
        for name in ("doubling_time", "initial_cells", "duration", "time_interval"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidParameterError(f"{name} must be a finite number", context={name: repr(value)})
        if self.doubling_time <= 0:
            raise InvalidParameterError(
                "doubling_time must be positive",
                context={"doubling_time": self.doubling_time},
            )
        if self.time_interval <= 0:
            raise InvalidParameterError(
                "timeInterval must be positive",
                context={"timeInterval": self.time_interval},
            )
        if self.initial_cells < 0:
            raise InvalidParameterError(
                "initialCells must not be negative",
                context={"initialCells": self.initial_cells},
            )

    @property
    def growth_rate(self) -> float:
        return math.log(2.0) / self.doubling_time

    def sample_count(self, limit: int | None = None) -> int:
        """Number of time points ``k * interval`` that fall within ``duration``.

        When ``limit`` is given, a count above it raises
        :class:`InvalidParameterError` instead of being returned.
        """

        self.validate()
        if self.duration < 0:
            return 0
        ratio = self.duration / self.time_interval
        if not math.isfinite(ratio):
            raise InvalidParameterError(
                "duration / timeInterval is too large",
                context={"duration": self.duration, "timeInterval": self.time_interval},
            )
        count = int(math.floor(ratio)) + 1
        # floor() can land one off the k * interval grid at float boundaries;
        # past 2**53 the grid is coarser than the interval and no step helps.
        if count < _EXACT_COUNT_LIMIT:
            if (count - 1) * self.time_interval > self.duration:
                count -= 1
            elif count * self.time_interval <= self.duration:
                count += 1
        if limit is not None and count > limit:
            raise InvalidParameterError(
                f"Experiment would produce {count} samples; the limit is {limit}",
                context={"samples": count, "limit": limit},
            )
        return count


@dataclass(frozen=True)
class GrowthSample:
    """Population snapshot at a single time point."""

    time: float
    total: int
    viable: int
    viability: float


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves away from zero."""

    return int(math.floor(value + 0.5))


def closed_form_population(params: GrowthParameters, time: float) -> float:
    """Return ``N0 * 2 ** (t / Td)``, the exact exponential the recurrence approximates."""

    return params.initial_cells * 2.0 ** (time / params.doubling_time)


def simulate_growth(params: GrowthParameters, *, max_samples: int | None = None) -> List[GrowthSample]:
    """Project the population at every sampling point up to ``duration``.

    ``max_samples`` caps the number of time points; longer experiments raise
    :class:`InvalidParameterError` before any sample is computed.
    """

    count = params.sample_count(limit=max_samples)
    step_factor = 1.0 + params.growth_rate * params.time_interval

    population = float(params.initial_cells)
    samples: List[GrowthSample] = []
    for index in range(count):
        if not math.isfinite(population):
            raise InvalidParameterError(
                "Population overflowed; shorten the duration or lengthen the doubling time",
                context={"time": index * params.time_interval},
            )
        samples.append(
            GrowthSample(
                time=index * params.time_interval,
                total=round_half_up(population),
                viable=round_half_up(population * VIABLE_FRACTION),
                viability=VIABILITY_PERCENT,
            )
        )
        population *= step_factor

    LOGGER.debug(
        "Simulated %d growth samples (Td=%.2fh, interval=%.3fh)",
        len(samples),
        params.doubling_time,
        params.time_interval,
    )
    return samples


__all__ = [
    "GrowthParameters",
    "GrowthSample",
    "VIABILITY_PERCENT",
    "VIABLE_FRACTION",
    "closed_form_population",
    "round_half_up",
    "simulate_growth",
]
