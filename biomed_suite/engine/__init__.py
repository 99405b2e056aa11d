"""
biomed_suite.engine
===================

Reference data and the request-facing engine for the research suite.

:mod:`.reference` holds the immutable protein, ligand and cell-line tables
and the :class:`~.reference.ReferenceCatalog` that bundles them.
:mod:`.simulator` exposes :class:`~.simulator.ResearchEngine`, which
resolves identifiers against a catalog, enforces configured limits and
dispatches to the simulators in :mod:`biomed_suite.simulation`.  The engine
module is imported explicitly by callers rather than re-exported here, so
the simulation package can depend on the reference tables without an import
cycle.
"""

from .reference import CELL_LINES, DEFAULT_CATALOG, LIGANDS, PROTEINS, ReferenceCatalog  # noqa: F401

__all__ = ["CELL_LINES", "DEFAULT_CATALOG", "LIGANDS", "PROTEINS", "ReferenceCatalog"]
