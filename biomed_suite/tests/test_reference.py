from dataclasses import FrozenInstanceError

import pytest

from biomed_suite.engine.reference import (
    CELL_LINES,
    DEFAULT_CATALOG,
    LIGANDS,
    PROTEINS,
    ProteinRecord,
    ReferenceCatalog,
    normalise_drug_class,
)
from biomed_suite.errors import UnknownIdentifierError


def test_tables_expose_reference_identifiers() -> None:
    assert set(PROTEINS) == {"1HVH", "2OXY", "6LU7", "5R81"}
    assert set(LIGANDS) == {"aspirin", "ibuprofen", "remdesivir"}
    assert set(CELL_LINES) == {"HeLa", "MCF-7", "A549", "HEK293"}
    assert DEFAULT_CATALOG.cell_line("HEK293").category == "Normal"
    assert DEFAULT_CATALOG.ligand("remdesivir").rotatable_bonds == 14


def test_records_are_immutable() -> None:
    protein = DEFAULT_CATALOG.protein("6LU7")
    with pytest.raises(FrozenInstanceError):
        protein.druggability = 0.1  # type: ignore[misc]

    hela = DEFAULT_CATALOG.cell_line("HeLa")
    with pytest.raises(TypeError):
        hela.drug_sensitivity["taxol"] = 1.0  # type: ignore[index]


def test_catalog_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_CATALOG.proteins["XXXX"] = PROTEINS["1HVH"]  # type: ignore[index]


def test_catalog_rejects_duplicate_identifiers() -> None:
    duplicate = ProteinRecord("1HVH", "Copy", "HIV-1", 1.0, 100.0, 0.5, 0.5)
    with pytest.raises(ValueError):
        ReferenceCatalog.build([PROTEINS["1HVH"], duplicate], [], [])


@pytest.mark.parametrize(
    "lookup, identifier, code",
    [
        ("protein", "9ZZZ", "unknown_protein"),
        ("ligand", "caffeine", "unknown_ligand"),
        ("cell_line", "Jurkat", "unknown_cell_line"),
    ],
)
def test_unknown_identifiers_raise(lookup: str, identifier: str, code: str) -> None:
    with pytest.raises(UnknownIdentifierError) as excinfo:
        getattr(DEFAULT_CATALOG, lookup)(identifier)
    assert excinfo.value.code == code
    assert identifier in excinfo.value.context.values()


def test_ic50_lookup_normalises_drug_class() -> None:
    hela = DEFAULT_CATALOG.cell_line("HeLa")
    assert hela.ic50_for(" Taxol ") == pytest.approx(8.5)
    assert hela.ic50_for("tamoxifen") is None
    assert normalise_drug_class("CisPlatin") == "cisplatin"
