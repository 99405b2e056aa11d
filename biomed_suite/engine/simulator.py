"""Request-facing engine for the research suite API."""

from __future__ import annotations

import logging
from typing import Callable, List

import numpy as np

from ..config import DEFAULT_SIMULATION_LIMITS, SimulationLimits
from ..errors import InvalidParameterError
from ..simulation import (
    DEFAULT_NUM_MODES,
    DockingRun,
    EfficacyPrediction,
    GrowthParameters,
    GrowthSample,
    RandomSource,
    generate_poses,
    predict_efficacy,
    simulate_growth,
)
from ..simulation.docking import validate_num_modes
from .reference import DEFAULT_CATALOG, CellLineRecord, ReferenceCatalog

LOGGER = logging.getLogger(__name__)

RandomFactory = Callable[[int | None], RandomSource]


def default_random_factory(seed: int | None = None) -> RandomSource:
    """Return a fresh numpy generator; one is created per docking call."""

    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        raise InvalidParameterError("seed must be a non-negative integer", context={"seed": repr(seed)})
    return np.random.default_rng(seed)


class ResearchEngine:
    """Resolve identifiers against the catalog and run the requested computation.

    Every public method resolves all identifiers it needs before computing, so
    an unknown identifier never yields partial results.  Limits from
    :class:`~biomed_suite.config.SimulationLimits` are checked at the same
    stage.
    """

    def __init__(
        self,
        catalog: ReferenceCatalog = DEFAULT_CATALOG,
        limits: SimulationLimits | None = None,
        random_factory: RandomFactory = default_random_factory,
    ) -> None:
        self.catalog = catalog
        self.limits = limits if limits is not None else DEFAULT_SIMULATION_LIMITS
        self._random_factory = random_factory

    def run_docking(
        self,
        protein_id: str,
        ligand_id: str,
        num_modes: int = DEFAULT_NUM_MODES,
        *,
        seed: int | None = None,
    ) -> DockingRun:
        """Dock ``ligand_id`` into ``protein_id`` and return ``num_modes`` ranked poses."""

        protein = self.catalog.protein(protein_id)
        ligand = self.catalog.ligand(ligand_id)
        count = validate_num_modes(num_modes)
        if count > self.limits.max_docking_modes:
            raise InvalidParameterError(
                f"numModes may not exceed {self.limits.max_docking_modes}",
                context={"numModes": count, "limit": self.limits.max_docking_modes},
            )
        rng = self._random_factory(seed)
        return generate_poses(protein, ligand, count, rng=rng)

    def simulate_growth(
        self,
        cell_line_id: str,
        *,
        initial_cells: float = 50.0,
        duration: float = 72.0,
        time_interval: float = 0.5,
    ) -> List[GrowthSample]:
        """Project the growth of ``cell_line_id`` using its recorded doubling time."""

        cell_line = self.catalog.cell_line(cell_line_id)
        params = GrowthParameters(
            doubling_time=cell_line.doubling_time,
            initial_cells=initial_cells,
            duration=duration,
            time_interval=time_interval,
        )
        return simulate_growth(params, max_samples=self.limits.max_growth_samples)

    def resolve_ic50(self, cell_line: CellLineRecord, drug_class: str) -> float:
        """Return the cell line's IC50 for ``drug_class`` or the configured default."""

        ic50 = cell_line.ic50_for(drug_class)
        if ic50 is None:
            LOGGER.debug(
                "No IC50 for drug class %r on %s; using default %.2f",
                drug_class,
                cell_line.identifier,
                self.limits.default_ic50,
            )
            return float(self.limits.default_ic50)
        return ic50

    def predict_efficacy(self, cell_line_id: str, drug_class: str, concentration: float) -> EfficacyPrediction:
        """Predict efficacy of ``drug_class`` at ``concentration`` against ``cell_line_id``."""

        cell_line = self.catalog.cell_line(cell_line_id)
        ic50 = self.resolve_ic50(cell_line, drug_class)
        return predict_efficacy(ic50, concentration)


__all__ = ["RandomFactory", "ResearchEngine", "default_random_factory"]
