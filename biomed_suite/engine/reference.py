"""
reference
=========

This module declares the reference tables served by the research suite:
target proteins for docking, small-molecule ligands, and cultured cell
lines with their growth and drug-sensitivity parameters.  The values are
illustrative rather than curated; they exist so the docking, growth and
dose-response simulators have stable inputs to work from.

Each table maps an identifier to an immutable record.  The tables are
assembled into a :class:`ReferenceCatalog` once at import time and the
catalog is handed to the engine, which is the only component that
resolves identifiers.  Nothing downstream receives a mutable view:
record classes are frozen dataclasses, the IC50 mapping on each cell
line is wrapped in :class:`types.MappingProxyType`, and so are the
tables held by the catalog.

``CELL_LINES`` entries carry a ``drug_sensitivity`` mapping from a
lower-case drug-class name to an IC50 concentration.  Lookups use
:func:`normalise_drug_class`, so ``"Taxol "`` and ``"taxol"`` resolve to
the same entry.  Unknown classes fall back to a default IC50 chosen by
the caller (see ``SimulationLimits.default_ic50``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Literal, Mapping

from ..errors import UnknownIdentifierError

CellLineCategory = Literal["Cancer", "Normal"]


@dataclass(frozen=True)
class ProteinRecord:
    """Docking target described by its PDB entry."""

    identifier: str
    name: str
    organism: str
    resolution: float
    binding_site_volume: float
    flexibility_score: float
    druggability: float


@dataclass(frozen=True)
class LigandRecord:
    """Small molecule available for docking."""

    identifier: str
    name: str
    smiles: str
    molecular_weight: float
    log_p: float
    hbd: int
    hba: int
    rotatable_bonds: int


@dataclass(frozen=True)
class CellLineRecord:
    """Cultured cell line with growth and drug-sensitivity parameters."""

    identifier: str
    name: str
    category: CellLineCategory
    origin: str
    doubling_time: float
    drug_sensitivity: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = MappingProxyType({normalise_drug_class(k): float(v) for k, v in self.drug_sensitivity.items()})
        object.__setattr__(self, "drug_sensitivity", frozen)

    def ic50_for(self, drug_class: str) -> float | None:
        """Return the IC50 recorded for ``drug_class`` or ``None`` when absent."""

        return self.drug_sensitivity.get(normalise_drug_class(drug_class))


def normalise_drug_class(name: str) -> str:
    """Return the lookup key used for drug-class names."""

    return str(name).strip().lower()


PROTEINS: Mapping[str, ProteinRecord] = {
    "1HVH": ProteinRecord(
        identifier="1HVH",
        name="HIV-1 Protease",
        organism="HIV-1",
        resolution=1.8,
        binding_site_volume=450.0,
        flexibility_score=0.6,
        druggability=0.85,
    ),
    "2OXY": ProteinRecord(
        identifier="2OXY",
        name="Cyclooxygenase-2",
        organism="Human",
        resolution=2.1,
        binding_site_volume=520.0,
        flexibility_score=0.4,
        druggability=0.92,
    ),
    "6LU7": ProteinRecord(
        identifier="6LU7",
        name="SARS-CoV-2 Main Protease",
        organism="SARS-CoV-2",
        resolution=2.16,
        binding_site_volume=480.0,
        flexibility_score=0.5,
        druggability=0.88,
    ),
    "5R81": ProteinRecord(
        identifier="5R81",
        name="EGFR Kinase",
        organism="Human",
        resolution=1.9,
        binding_site_volume=510.0,
        flexibility_score=0.7,
        druggability=0.90,
    ),
}


LIGANDS: Mapping[str, LigandRecord] = {
    "aspirin": LigandRecord(
        identifier="aspirin",
        name="Aspirin",
        smiles="CC(=O)OC1=CC=CC=C1C(=O)O",
        molecular_weight=180.16,
        log_p=1.2,
        hbd=1,
        hba=4,
        rotatable_bonds=3,
    ),
    "ibuprofen": LigandRecord(
        identifier="ibuprofen",
        name="Ibuprofen",
        smiles="CC(C)CC1=CC=C(C=C1)C(C)C(=O)O",
        molecular_weight=206.28,
        log_p=3.5,
        hbd=1,
        hba=2,
        rotatable_bonds=4,
    ),
    "remdesivir": LigandRecord(
        identifier="remdesivir",
        name="Remdesivir",
        smiles="CCC(CC)COC(=O)C(C)NP(=O)(OCC1C(C(C(O1)C#N)O)O)OC",
        molecular_weight=602.6,
        log_p=1.9,
        hbd=4,
        hba=13,
        rotatable_bonds=14,
    ),
}


CELL_LINES: Mapping[str, CellLineRecord] = {
    "HeLa": CellLineRecord(
        identifier="HeLa",
        name="HeLa",
        category="Cancer",
        origin="Cervical cancer",
        doubling_time=24.0,
        drug_sensitivity={"taxol": 8.5, "cisplatin": 12.3},
    ),
    "MCF-7": CellLineRecord(
        identifier="MCF-7",
        name="MCF-7",
        category="Cancer",
        origin="Breast adenocarcinoma",
        doubling_time=29.0,
        drug_sensitivity={"taxol": 5.2, "tamoxifen": 6.8},
    ),
    "A549": CellLineRecord(
        identifier="A549",
        name="A549",
        category="Cancer",
        origin="Lung carcinoma",
        doubling_time=22.0,
        drug_sensitivity={"cisplatin": 10.5, "paclitaxel": 7.8},
    ),
    "HEK293": CellLineRecord(
        identifier="HEK293",
        name="HEK293",
        category="Normal",
        origin="Embryonic kidney",
        doubling_time=20.0,
        drug_sensitivity={"cisplatin": 25.0, "taxol": 20.0},
    ),
}


def _freeze(records: Iterable[ProteinRecord | LigandRecord | CellLineRecord]) -> Mapping[str, object]:
    table: dict[str, object] = {}
    for record in records:
        if record.identifier in table:
            raise ValueError(f"Duplicate reference identifier '{record.identifier}'")
        table[record.identifier] = record
    return MappingProxyType(table)


@dataclass(frozen=True)
class ReferenceCatalog:
    """Read-only registry of the protein, ligand and cell-line tables."""

    proteins: Mapping[str, ProteinRecord]
    ligands: Mapping[str, LigandRecord]
    cell_lines: Mapping[str, CellLineRecord]

    @classmethod
    def build(
        cls,
        proteins: Iterable[ProteinRecord],
        ligands: Iterable[LigandRecord],
        cell_lines: Iterable[CellLineRecord],
    ) -> "ReferenceCatalog":
        """Create a catalog, rejecting duplicate identifiers within a table."""

        return cls(
            proteins=_freeze(proteins),  # type: ignore[arg-type]
            ligands=_freeze(ligands),  # type: ignore[arg-type]
            cell_lines=_freeze(cell_lines),  # type: ignore[arg-type]
        )

    def protein(self, identifier: str) -> ProteinRecord:
        try:
            return self.proteins[identifier]
        except KeyError:
            raise UnknownIdentifierError(
                f"Unknown protein '{identifier}'",
                code="unknown_protein",
                context={"protein_id": identifier},
            ) from None

    def ligand(self, identifier: str) -> LigandRecord:
        try:
            return self.ligands[identifier]
        except KeyError:
            raise UnknownIdentifierError(
                f"Unknown ligand '{identifier}'",
                code="unknown_ligand",
                context={"ligand_id": identifier},
            ) from None

    def cell_line(self, identifier: str) -> CellLineRecord:
        try:
            return self.cell_lines[identifier]
        except KeyError:
            raise UnknownIdentifierError(
                f"Unknown cell line '{identifier}'",
                code="unknown_cell_line",
                context={"cell_line": identifier},
            ) from None


DEFAULT_CATALOG = ReferenceCatalog.build(PROTEINS.values(), LIGANDS.values(), CELL_LINES.values())


__all__ = [
    "CELL_LINES",
    "CellLineCategory",
    "CellLineRecord",
    "DEFAULT_CATALOG",
    "LIGANDS",
    "LigandRecord",
    "PROTEINS",
    "ProteinRecord",
    "ReferenceCatalog",
    "normalise_drug_class",
]
