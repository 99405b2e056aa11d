"""FastAPI router wiring the reference tables and simulators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import DEFAULT_SERVER_CONFIG, ServerConfig
from ..engine.simulator import ResearchEngine
from ..errors import ResearchSuiteError, UnknownIdentifierError
from . import schemas


@dataclass
class ServiceRegistry:
    """Container bundling service layer dependencies for the API."""

    engine: ResearchEngine = field(default_factory=ResearchEngine)
    server_config: ServerConfig = field(default_factory=lambda: DEFAULT_SERVER_CONFIG)

    def configure(
        self,
        *,
        engine: ResearchEngine | None = None,
        server_config: ServerConfig | None = None,
    ) -> None:
        if engine is not None:
            self.engine = engine
        if server_config is not None:
            self.server_config = server_config


services = ServiceRegistry()


def configure_services(
    *,
    engine: ResearchEngine | None = None,
    server_config: ServerConfig | None = None,
) -> None:
    """Configure the shared service registry used by API routes."""

    services.configure(engine=engine, server_config=server_config)


def get_services() -> ServiceRegistry:
    return services


def _http_error(
    status_code: int,
    code: str,
    message: str,
    *,
    context: Dict[str, object] | None = None,
) -> HTTPException:
    payload = schemas.ErrorPayload(error=message, code=code, context=context or {})
    return HTTPException(status_code=status_code, detail=payload.model_dump())


def _failure(exc: ResearchSuiteError, unknown_message: str) -> HTTPException:
    # unknown identifiers report the per-endpoint message; other failures keep their own
    message = unknown_message if isinstance(exc, UnknownIdentifierError) else exc.message
    return _http_error(status.HTTP_400_BAD_REQUEST, exc.code, message, context=exc.context)


router = APIRouter(prefix="/api")


@router.get("/health", response_model=schemas.HealthResponse)
def health(svc: ServiceRegistry = Depends(get_services)) -> schemas.HealthResponse:
    config = svc.server_config
    return schemas.HealthResponse(
        status="healthy",
        version=config.version,
        platform=config.platform,
        deployment=config.deployment,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/docking/proteins", response_model=Dict[str, schemas.ProteinPayload])
def list_proteins(svc: ServiceRegistry = Depends(get_services)) -> Dict[str, schemas.ProteinPayload]:
    return {key: schemas.ProteinPayload.from_domain(record) for key, record in svc.engine.catalog.proteins.items()}


@router.get("/docking/ligands", response_model=Dict[str, schemas.LigandPayload])
def list_ligands(svc: ServiceRegistry = Depends(get_services)) -> Dict[str, schemas.LigandPayload]:
    return {key: schemas.LigandPayload.from_domain(record) for key, record in svc.engine.catalog.ligands.items()}


@router.post("/docking/run", response_model=schemas.DockingResponse)
def run_docking(
    request: schemas.DockingRequest,
    svc: ServiceRegistry = Depends(get_services),
) -> schemas.DockingResponse:
    try:
        run = svc.engine.run_docking(
            request.protein_id,
            request.ligand_id,
            request.num_modes,
            seed=request.seed,
        )
    except ResearchSuiteError as exc:
        raise _failure(exc, "Invalid protein or ligand ID") from exc
    return schemas.DockingResponse(data=schemas.DockingResult.from_domain(run))


@router.get("/cells/cell-lines", response_model=Dict[str, schemas.CellLinePayload])
def list_cell_lines(svc: ServiceRegistry = Depends(get_services)) -> Dict[str, schemas.CellLinePayload]:
    return {key: schemas.CellLinePayload.from_domain(record) for key, record in svc.engine.catalog.cell_lines.items()}


@router.post("/cells/simulate", response_model=schemas.GrowthResponse)
def simulate_cells(
    request: schemas.GrowthRequest,
    svc: ServiceRegistry = Depends(get_services),
) -> schemas.GrowthResponse:
    params = request.experiment_params or schemas.ExperimentParams()
    try:
        samples = svc.engine.simulate_growth(
            request.cell_line_name,
            initial_cells=params.initial_cells,
            duration=params.duration,
            time_interval=params.time_interval,
        )
    except ResearchSuiteError as exc:
        raise _failure(exc, "Invalid cell line") from exc
    return schemas.GrowthResponse(data=[schemas.GrowthPoint.from_domain(sample) for sample in samples])


@router.post("/predict/drug-efficacy", response_model=schemas.EfficacyResponse)
def predict_drug_efficacy(
    request: schemas.EfficacyRequest,
    svc: ServiceRegistry = Depends(get_services),
) -> schemas.EfficacyResponse:
    try:
        prediction = svc.engine.predict_efficacy(request.cell_line_name, request.drug_class, request.concentration)
    except ResearchSuiteError as exc:
        raise _failure(exc, "Invalid cell line") from exc
    return schemas.EfficacyResponse.from_domain(prediction)


KNOWN_ENDPOINTS: List[str] = ["/api/health", "/api/docking/proteins", "/api/docking/ligands"]


__all__ = ["KNOWN_ENDPOINTS", "ServiceRegistry", "configure_services", "get_services", "router"]
