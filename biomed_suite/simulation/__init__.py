"""Numeric simulators behind the research suite endpoints.

Each submodule is a set of pure functions over reference records and plain
parameters: :mod:`.docking` draws ranked binding poses from an explicit
random source, :mod:`.growth` compounds a cell population over time, and
:mod:`.dose_response` evaluates a Hill-type efficacy curve.  Identifier
resolution happens one layer up, in :mod:`biomed_suite.engine.simulator`.
"""

from .docking import DEFAULT_NUM_MODES, DockingPose, DockingRun, RandomSource, generate_poses
from .dose_response import HILL_COEFFICIENT, EfficacyPrediction, efficacy_curve, predict_efficacy
from .growth import GrowthParameters, GrowthSample, closed_form_population, simulate_growth

__all__ = [
    "DEFAULT_NUM_MODES",
    "DockingPose",
    "DockingRun",
    "EfficacyPrediction",
    "GrowthParameters",
    "GrowthSample",
    "HILL_COEFFICIENT",
    "RandomSource",
    "closed_form_population",
    "efficacy_curve",
    "generate_poses",
    "predict_efficacy",
    "simulate_growth",
]
