import sys
from pathlib import Path
from typing import Iterable, Iterator

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from httpx import ASGITransport, AsyncClient

from biomed_suite.api.routes import ServiceRegistry, get_services
from biomed_suite.config import ServerConfig, SimulationLimits
from biomed_suite.engine.simulator import ResearchEngine
from biomed_suite.main import app


class ScriptedRandom:
    """Random source replaying a fixed list of draws."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values: Iterator[float] = iter(values)

    def random(self) -> float:
        return next(self._values)


# Three poses, drawn as (affinity, rmsd_lb, rmsd_ub) fractions.
SCRIPTED_DRAWS = [0.5, 0.25, 0.5, 0.1, 0.0, 0.0, 0.9, 0.5, 0.99]


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def scripted_engine() -> ResearchEngine:
    """Engine whose docking runs replay ``SCRIPTED_DRAWS``."""

    return ResearchEngine(
        limits=SimulationLimits(max_docking_modes=5, max_growth_samples=200),
        random_factory=lambda seed: ScriptedRandom(SCRIPTED_DRAWS),
    )


@pytest.fixture()
def registry() -> ServiceRegistry:
    return ServiceRegistry(
        engine=ResearchEngine(),
        server_config=ServerConfig(version="3.0", platform="Python", deployment="test"),
    )


@pytest.fixture()
async def client(registry: ServiceRegistry):
    app.dependency_overrides[get_services] = lambda: registry
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
    app.dependency_overrides.clear()
