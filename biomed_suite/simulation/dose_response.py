"""Sigmoidal dose-response prediction using a fixed-slope Hill equation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import numpy.typing as npt

from ..errors import InvalidParameterError


HILL_COEFFICIENT = 1.5


@dataclass(frozen=True)
class EfficacyPrediction:
    """Predicted response of a cell line to a single concentration."""

    ic50: float
    concentration: float
    predicted_efficacy: float
    predicted_viability: float


def _require_positive_ic50(ic50: float) -> float:
    value = float(ic50)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError("IC50 must be a positive, finite concentration", context={"ic50": ic50})
    return value


def efficacy_curve(
    ic50: float,
    concentrations: Sequence[float] | npt.NDArray[np.float64],
    *,
    hill: float = HILL_COEFFICIENT,
) -> npt.NDArray[np.float64]:
    """Return percent efficacy for every concentration.

    Evaluates ``100 * c**h / (ic50**h + c**h)`` in the ratio form
    ``100 / (1 + (ic50 / c)**h)``, which saturates cleanly at both ends
    instead of overflowing for extreme concentrations.
    """

    ic50 = _require_positive_ic50(ic50)
    values = np.asarray(concentrations, dtype=float)
    if values.size and (not np.all(np.isfinite(values)) or np.any(values < 0)):
        raise InvalidParameterError(
            "Concentrations must be finite and non-negative",
            context={"concentrations": values.tolist()},
        )
    efficacy = np.zeros_like(values)
    positive = values > 0
    with np.errstate(over="ignore", divide="ignore"):
        ratio = np.power(ic50 / values[positive], hill)
    efficacy[positive] = 100.0 / (1.0 + ratio)
    return efficacy


def predict_efficacy(ic50: float, concentration: float, *, hill: float = HILL_COEFFICIENT) -> EfficacyPrediction:
    """Predict efficacy and viability at ``concentration`` for a given ``ic50``."""

    if isinstance(concentration, bool):
        raise InvalidParameterError("concentration must be a number", context={"concentration": concentration})
    conc = float(concentration)
    if not math.isfinite(conc) or conc < 0:
        raise InvalidParameterError(
            "concentration must be a finite, non-negative number",
            context={"concentration": concentration},
        )
    efficacy = float(efficacy_curve(ic50, [conc], hill=hill)[0])
    return EfficacyPrediction(
        ic50=float(ic50),
        concentration=conc,
        predicted_efficacy=efficacy,
        predicted_viability=100.0 - efficacy,
    )


__all__ = ["EfficacyPrediction", "HILL_COEFFICIENT", "efficacy_curve", "predict_efficacy"]
