"""Command-line helper for exploring the research suite locally."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from typing import Dict, List, Mapping, Sequence

import numpy as np

from .config import DEFAULT_SERVER_CONFIG
from .engine.simulator import ResearchEngine
from .errors import ResearchSuiteError
from .simulation import DEFAULT_NUM_MODES, efficacy_curve


class QuickstartError(Exception):
    """Raised when the quickstart helper receives invalid input."""


def run_docking(
    protein_id: str,
    ligand_id: str,
    *,
    num_modes: int = DEFAULT_NUM_MODES,
    seed: int | None = None,
    engine: ResearchEngine | None = None,
) -> Dict[str, object]:
    """Dock locally and return the same ``data`` block the API serves."""

    engine = engine or ResearchEngine()
    try:
        run = engine.run_docking(protein_id, ligand_id, num_modes, seed=seed)
    except ResearchSuiteError as exc:
        raise QuickstartError(str(exc)) from exc
    return {
        "protein": run.protein.identifier,
        "ligand": run.ligand.identifier,
        "modes": [asdict(pose) for pose in run.modes],
        "best_affinity": run.best_affinity,
    }


def run_growth(
    cell_line: str,
    *,
    initial_cells: float = 50.0,
    duration: float = 72.0,
    time_interval: float = 0.5,
    engine: ResearchEngine | None = None,
) -> List[Dict[str, object]]:
    engine = engine or ResearchEngine()
    try:
        samples = engine.simulate_growth(
            cell_line,
            initial_cells=initial_cells,
            duration=duration,
            time_interval=time_interval,
        )
    except ResearchSuiteError as exc:
        raise QuickstartError(str(exc)) from exc
    return [asdict(sample) for sample in samples]


def run_efficacy(
    cell_line: str,
    drug_class: str,
    concentration: float,
    *,
    engine: ResearchEngine | None = None,
) -> Dict[str, float]:
    engine = engine or ResearchEngine()
    try:
        prediction = engine.predict_efficacy(cell_line, drug_class, concentration)
    except ResearchSuiteError as exc:
        raise QuickstartError(str(exc)) from exc
    return {
        "ic50": prediction.ic50,
        "predicted_efficacy": prediction.predicted_efficacy,
        "predicted_viability": prediction.predicted_viability,
    }


def run_curve(
    cell_line: str,
    drug_class: str,
    *,
    points: int = 11,
    max_concentration: float | None = None,
    engine: ResearchEngine | None = None,
) -> List[Dict[str, float]]:
    """Evaluate the dose-response curve on an evenly spaced concentration grid.

    The grid spans ``0`` to ``max_concentration``, which defaults to four times
    the cell line's IC50 for ``drug_class``.
    """

    if points < 2:
        raise QuickstartError("A curve needs at least two points")
    engine = engine or ResearchEngine()
    try:
        record = engine.catalog.cell_line(cell_line)
        ic50 = engine.resolve_ic50(record, drug_class)
        upper = 4.0 * ic50 if max_concentration is None else float(max_concentration)
        if upper <= 0:
            raise QuickstartError("Maximum concentration must be positive")
        grid = np.linspace(0.0, upper, points)
        efficacy = efficacy_curve(ic50, grid)
    except ResearchSuiteError as exc:
        raise QuickstartError(str(exc)) from exc
    return [
        {"concentration": float(conc), "efficacy": float(eff), "viability": float(100.0 - eff)}
        for conc, eff in zip(grid, efficacy)
    ]


def list_table(table: str, *, engine: ResearchEngine | None = None) -> Mapping[str, object]:
    engine = engine or ResearchEngine()
    catalog = engine.catalog
    tables = {"proteins": catalog.proteins, "ligands": catalog.ligands, "cell-lines": catalog.cell_lines}
    if table not in tables:
        raise QuickstartError(f"Unknown table '{table}'. Choose from {', '.join(sorted(tables))}")
    return tables[table]


def summarise_docking(payload: Mapping[str, object]) -> str:
    lines = [f"Docking {payload['ligand']} into {payload['protein']}:"]
    for mode in payload["modes"]:  # type: ignore[union-attr]
        lines.append(
            f"  {mode['mode']:>3}  {mode['affinity']:8.3f} kcal/mol  "
            f"rmsd {mode['rmsd_lb']:.3f}-{mode['rmsd_ub']:.3f}"
        )
    lines.append(f"Best affinity: {payload['best_affinity']:.3f}")
    return "\n".join(lines)


def summarise_growth(samples: Sequence[Mapping[str, object]], *, every: int = 12) -> str:
    lines = ["   time      total     viable"]
    step = max(1, every)
    for index, sample in enumerate(samples):
        if index % step and index != len(samples) - 1:
            continue
        lines.append(f"{sample['time']:7.2f} {sample['total']:>10} {sample['viable']:>10}")
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the BioMed Research Suite simulators locally.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    dock = subparsers.add_parser("dock", help="Generate ranked docking poses")
    dock.add_argument("protein")
    dock.add_argument("ligand")
    dock.add_argument("--modes", type=int, default=DEFAULT_NUM_MODES, help="Number of binding modes")
    dock.add_argument("--seed", type=int, default=None, help="Seed for a reproducible run")
    dock.add_argument("--json", action="store_true", help="Print the raw JSON payload")

    grow = subparsers.add_parser("grow", help="Project cell growth for a cell line")
    grow.add_argument("cell_line")
    grow.add_argument("--initial-cells", type=float, default=50.0)
    grow.add_argument("--duration", type=float, default=72.0, help="Hours to simulate")
    grow.add_argument("--interval", type=float, default=0.5, help="Hours between samples")
    grow.add_argument("--every", type=int, default=12, help="Print every Nth sample in the summary")
    grow.add_argument("--json", action="store_true", help="Print the raw JSON payload")

    efficacy = subparsers.add_parser("efficacy", help="Predict efficacy at one concentration")
    efficacy.add_argument("cell_line")
    efficacy.add_argument("drug_class")
    efficacy.add_argument("concentration", type=float)
    efficacy.add_argument("--json", action="store_true", help="Print the raw JSON payload")

    curve = subparsers.add_parser("curve", help="Print a dose-response curve")
    curve.add_argument("cell_line")
    curve.add_argument("drug_class")
    curve.add_argument("--points", type=int, default=11)
    curve.add_argument("--max-concentration", type=float, default=None)

    listing = subparsers.add_parser("list", help="List a reference table")
    listing.add_argument("table", choices=["proteins", "ligands", "cell-lines"])

    serve = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default=DEFAULT_SERVER_CONFIG.host)
    serve.add_argument("--port", type=int, default=DEFAULT_SERVER_CONFIG.port)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("biomed_suite.main:app", host=args.host, port=args.port, reload=args.reload)
        return 0

    try:
        if args.command == "dock":
            payload = run_docking(args.protein, args.ligand, num_modes=args.modes, seed=args.seed)
            print(json.dumps(payload, indent=2) if args.json else summarise_docking(payload))
        elif args.command == "grow":
            samples = run_growth(
                args.cell_line,
                initial_cells=args.initial_cells,
                duration=args.duration,
                time_interval=args.interval,
            )
            print(json.dumps(samples, indent=2) if args.json else summarise_growth(samples, every=args.every))
        elif args.command == "efficacy":
            result = run_efficacy(args.cell_line, args.drug_class, args.concentration)
            if args.json:
                print(json.dumps(result, indent=2))
            else:
                print(
                    f"IC50 {result['ic50']:.2f}: efficacy {result['predicted_efficacy']:.2f}%, "
                    f"viability {result['predicted_viability']:.2f}%"
                )
        elif args.command == "curve":
            for point in run_curve(
                args.cell_line,
                args.drug_class,
                points=args.points,
                max_concentration=args.max_concentration,
            ):
                print(f"{point['concentration']:10.3f} {point['efficacy']:8.2f}% {point['viability']:8.2f}%")
        elif args.command == "list":
            for key, record in list_table(args.table).items():
                print(f"{key}: {record.name}")  # type: ignore[attr-defined]
    except QuickstartError as exc:
        parser.error(str(exc))
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
