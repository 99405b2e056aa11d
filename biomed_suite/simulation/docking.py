"""Randomised docking pose generator.

Poses are illustrative: affinities and RMSD bounds are drawn from fixed
uniform ranges and carry no information about the protein or ligand beyond
the pairing itself.  Callers supply the random source.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np

from ..engine.reference import LigandRecord, ProteinRecord
from ..errors import InvalidParameterError

LOGGER = logging.getLogger(__name__)

DEFAULT_NUM_MODES = 9

# affinity = AFFINITY_CEILING - U * AFFINITY_SPAN
AFFINITY_CEILING = -5.0
AFFINITY_SPAN = 10.0
RMSD_LB_SPAN = 2.0
RMSD_UB_FLOOR = 2.0
RMSD_UB_SPAN = 3.0


class RandomSource(Protocol):
    """Anything exposing ``random()`` returning a float in ``[0, 1)``."""

    def random(self) -> float:  # pragma: no cover - protocol
        ...


@dataclass(frozen=True)
class DockingPose:
    """Single ranked binding mode."""

    mode: int
    affinity: float
    rmsd_lb: float
    rmsd_ub: float


@dataclass(frozen=True)
class DockingRun:
    """Poses generated for one protein/ligand pairing, best first."""

    protein: ProteinRecord
    ligand: LigandRecord
    modes: tuple[DockingPose, ...]

    @property
    def best_affinity(self) -> float:
        return self.modes[0].affinity


def validate_num_modes(num_modes: object) -> int:
    """Return ``num_modes`` as an ``int`` or raise :class:`InvalidParameterError`."""

    if isinstance(num_modes, bool) or not isinstance(num_modes, numbers.Integral):
        raise InvalidParameterError(
            "numModes must be an integer",
            context={"numModes": repr(num_modes)},
        )
    value = int(num_modes)
    if value < 1:
        raise InvalidParameterError(
            "numModes must be at least 1",
            context={"numModes": value},
        )
    return value


def rank_poses(raw: Sequence[tuple[float, float, float]]) -> tuple[DockingPose, ...]:
    """Sort ``(affinity, rmsd_lb, rmsd_ub)`` triples strongest first and number them 1..N."""

    ordered = sorted(raw, key=lambda item: item[0])
    return tuple(
        DockingPose(mode=index, affinity=affinity, rmsd_lb=rmsd_lb, rmsd_ub=rmsd_ub)
        for index, (affinity, rmsd_lb, rmsd_ub) in enumerate(ordered, start=1)
    )


def generate_poses(
    protein: ProteinRecord,
    ligand: LigandRecord,
    num_modes: int = DEFAULT_NUM_MODES,
    *,
    rng: RandomSource | None = None,
) -> DockingRun:
    """Draw ``num_modes`` poses for the pairing and return them ranked by affinity."""

    count = validate_num_modes(num_modes)
    source: RandomSource = rng if rng is not None else np.random.default_rng()

    raw: list[tuple[float, float, float]] = []
    for _ in range(count):
        affinity = AFFINITY_CEILING - float(source.random()) * AFFINITY_SPAN
        rmsd_lb = float(source.random()) * RMSD_LB_SPAN
        rmsd_ub = RMSD_UB_FLOOR + float(source.random()) * RMSD_UB_SPAN
        raw.append((affinity, rmsd_lb, rmsd_ub))

    modes = rank_poses(raw)
    LOGGER.debug(
        "Docked %s against %s: %d modes, best affinity %.3f",
        ligand.identifier,
        protein.identifier,
        count,
        modes[0].affinity,
    )
    return DockingRun(protein=protein, ligand=ligand, modes=modes)


__all__ = [
    "DEFAULT_NUM_MODES",
    "DockingPose",
    "DockingRun",
    "RandomSource",
    "generate_poses",
    "rank_poses",
    "validate_num_modes",
]
