"""FastAPI application entrypoint for the BioMed Research Suite."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Match, Mount

from .api import KNOWN_ENDPOINTS, configure_services, router as api_router
from .api import schemas
from .config import DEFAULT_SERVER_CONFIG, DEFAULT_SIMULATION_LIMITS, DEFAULT_TELEMETRY_CONFIG
from .engine.reference import DEFAULT_CATALOG
from .engine.simulator import ResearchEngine
from .telemetry import configure_telemetry


API_DESCRIPTION = """
The BioMed Research Suite serves small reference tables for proteins,
ligands and cell lines together with three illustrative simulators:

* randomised docking poses for a protein/ligand pair (`/api/docking/run`)
* exponential cell-growth projections (`/api/cells/simulate`)
* Hill-equation drug efficacy predictions (`/api/predict/drug-efficacy`)

Results are illustrative numbers, not validated predictions.
"""


LOGGER = logging.getLogger(__name__)

server_config = DEFAULT_SERVER_CONFIG
logging.basicConfig(level=getattr(logging, server_config.log_level, logging.INFO))

telemetry = configure_telemetry(DEFAULT_TELEMETRY_CONFIG)


app = FastAPI(title=server_config.title, version=server_config.version, description=API_DESCRIPTION)
telemetry.instrument_app(app)


app.add_middleware(
    CORSMiddleware,
    allow_origins=list(server_config.cors_origins),
    allow_credentials=not server_config.allows_any_origin,
    allow_methods=["*"],
    allow_headers=["*"],
)


configure_services(
    engine=ResearchEngine(catalog=DEFAULT_CATALOG, limits=DEFAULT_SIMULATION_LIMITS),
    server_config=server_config,
)


def _matches_declared_route(request: Request) -> bool:
    """Return True when a non-mount route claims the request path for some method."""

    for route in request.app.router.routes:
        if isinstance(route, Mount):
            continue
        match, _ = route.matches(request.scope)
        if match != Match.NONE:
            return True
    return False


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render failure envelopes as-is and unmatched routes as the not-found payload."""

    if isinstance(exc.detail, dict) and exc.detail.get("success") is False:
        return JSONResponse(status_code=exc.status_code, content=exc.detail)
    # The static mount answers every unmatched path and rejects non-GET methods with 405.
    unmatched = exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and not _matches_declared_route(request)
    if exc.status_code == status.HTTP_404_NOT_FOUND or unmatched:
        payload = schemas.NotFoundPayload(available_endpoints=list(KNOWN_ENDPOINTS))
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=payload.model_dump())
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    payload = schemas.ErrorPayload(
        error="Invalid request payload",
        code="invalid_payload",
        context={"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=payload.model_dump())


app.include_router(api_router)


# Mounted last so /api routes and the OpenAPI docs take precedence.
if server_config.static_dir and Path(server_config.static_dir).is_dir():
    app.mount("/", StaticFiles(directory=server_config.static_dir, html=True), name="static")
else:
    LOGGER.info("Static directory %r not found; static hosting disabled", server_config.static_dir)


LOGGER.info(
    "%s %s ready (deployment=%s, cors=%s)",
    server_config.title,
    server_config.version,
    server_config.deployment,
    ",".join(server_config.cors_origins),
)


__all__ = ["app"]
