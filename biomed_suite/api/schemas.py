"""Pydantic schemas used by the public API surface."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..engine.reference import CellLineRecord, LigandRecord, ProteinRecord
from ..simulation import DEFAULT_NUM_MODES, DockingPose, DockingRun, EfficacyPrediction, GrowthSample


# ---------------------------------------------------------------------------
# Shared envelopes
# ---------------------------------------------------------------------------


class ErrorPayload(BaseModel):
    """Failure envelope returned by every endpoint that accepts identifiers."""

    success: Literal[False] = False
    error: str = Field(..., description="Human readable explanation")
    code: str = Field(..., description="Machine readable error identifier")
    context: Dict[str, Any] = Field(default_factory=dict, description="Additional context")


class NotFoundPayload(BaseModel):
    error: str = "Endpoint not found"
    message: str = "Please check the API documentation"
    available_endpoints: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    version: str
    platform: str
    deployment: str
    timestamp: datetime


# ---------------------------------------------------------------------------
# Reference tables
# ---------------------------------------------------------------------------


class ProteinPayload(BaseModel):
    pdb_id: str
    name: str
    organism: str
    resolution: float
    binding_site_volume: float
    flexibility_score: float
    druggability: float

    @classmethod
    def from_domain(cls, record: ProteinRecord) -> "ProteinPayload":
        return cls(
            pdb_id=record.identifier,
            name=record.name,
            organism=record.organism,
            resolution=record.resolution,
            binding_site_volume=record.binding_site_volume,
            flexibility_score=record.flexibility_score,
            druggability=record.druggability,
        )


class LigandPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ligand_id: str
    name: str
    smiles: str
    molecular_weight: float
    log_p: float = Field(alias="logP")
    hbd: int = Field(ge=0)
    hba: int = Field(ge=0)
    rotatable_bonds: int = Field(ge=0)

    @classmethod
    def from_domain(cls, record: LigandRecord) -> "LigandPayload":
        return cls(
            ligand_id=record.identifier,
            name=record.name,
            smiles=record.smiles,
            molecular_weight=record.molecular_weight,
            log_p=record.log_p,
            hbd=record.hbd,
            hba=record.hba,
            rotatable_bonds=record.rotatable_bonds,
        )


class CellLinePayload(BaseModel):
    name: str
    type: str
    origin: str
    doubling_time: float
    drug_sensitivity: Dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, record: CellLineRecord) -> "CellLinePayload":
        return cls(
            name=record.name,
            type=record.category,
            origin=record.origin,
            doubling_time=record.doubling_time,
            drug_sensitivity=dict(record.drug_sensitivity),
        )


# ---------------------------------------------------------------------------
# Docking
# ---------------------------------------------------------------------------


class DockingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    protein_id: str = Field(..., alias="proteinId", description="PDB identifier of the target protein")
    ligand_id: str = Field(..., alias="ligandId", description="Ligand identifier")
    num_modes: int = Field(
        default=DEFAULT_NUM_MODES,
        alias="numModes",
        strict=True,
        description="Number of binding modes to generate",
    )
    seed: int | None = Field(default=None, strict=True, ge=0, description="Seed for a reproducible run")


class DockingMode(BaseModel):
    mode: int
    affinity: float
    rmsd_lb: float
    rmsd_ub: float

    @classmethod
    def from_domain(cls, pose: DockingPose) -> "DockingMode":
        return cls(mode=pose.mode, affinity=pose.affinity, rmsd_lb=pose.rmsd_lb, rmsd_ub=pose.rmsd_ub)


class DockingResult(BaseModel):
    protein: ProteinPayload
    ligand: LigandPayload
    modes: Sequence[DockingMode]
    best_affinity: float

    @classmethod
    def from_domain(cls, run: DockingRun) -> "DockingResult":
        return cls(
            protein=ProteinPayload.from_domain(run.protein),
            ligand=LigandPayload.from_domain(run.ligand),
            modes=[DockingMode.from_domain(pose) for pose in run.modes],
            best_affinity=run.best_affinity,
        )


class DockingResponse(BaseModel):
    success: Literal[True] = True
    data: DockingResult


# ---------------------------------------------------------------------------
# Cell growth
# ---------------------------------------------------------------------------


class ExperimentParams(BaseModel):
    """Optional experiment overrides; omitted fields keep their defaults."""

    model_config = ConfigDict(populate_by_name=True)

    initial_cells: float = Field(default=50.0, alias="initialCells", description="Population at t=0")
    duration: float = Field(default=72.0, description="Hours to simulate")
    time_interval: float = Field(default=0.5, alias="timeInterval", description="Hours between samples")


class GrowthRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cell_line_name: str = Field(..., alias="cellLineName")
    experiment_params: ExperimentParams | None = Field(default=None, alias="experimentParams")


class GrowthPoint(BaseModel):
    time: float
    total: int
    viable: int
    viability: float

    @classmethod
    def from_domain(cls, sample: GrowthSample) -> "GrowthPoint":
        return cls(time=sample.time, total=sample.total, viable=sample.viable, viability=sample.viability)


class GrowthResponse(BaseModel):
    success: Literal[True] = True
    data: Sequence[GrowthPoint]


# ---------------------------------------------------------------------------
# Drug efficacy
# ---------------------------------------------------------------------------


class EfficacyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cell_line_name: str = Field(..., alias="cellLineName")
    drug_class: str = Field(..., alias="drugClass")
    concentration: float = Field(..., description="Test concentration, same units as the IC50 table")


class EfficacyResponse(BaseModel):
    ic50: float
    predicted_efficacy: float
    predicted_viability: float

    @classmethod
    def from_domain(cls, prediction: EfficacyPrediction) -> "EfficacyResponse":
        return cls(
            ic50=prediction.ic50,
            predicted_efficacy=prediction.predicted_efficacy,
            predicted_viability=prediction.predicted_viability,
        )


__all__ = [
    "CellLinePayload",
    "DockingMode",
    "DockingRequest",
    "DockingResponse",
    "DockingResult",
    "EfficacyRequest",
    "EfficacyResponse",
    "ErrorPayload",
    "ExperimentParams",
    "GrowthPoint",
    "GrowthRequest",
    "GrowthResponse",
    "HealthResponse",
    "LigandPayload",
    "NotFoundPayload",
    "ProteinPayload",
]
