"""Integration tests for the FastAPI routes using httpx."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from biomed_suite.api.routes import ServiceRegistry
from biomed_suite.engine.simulator import ResearchEngine


@pytest.fixture()
def scripted_registry(registry: ServiceRegistry, scripted_engine: ResearchEngine) -> ServiceRegistry:
    registry.configure(engine=scripted_engine)
    return registry


@pytest.mark.anyio
async def test_health_reports_service_identity(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "3.0"
    assert data["platform"] == "Python"
    assert data["deployment"] == "test"
    assert data["timestamp"]


@pytest.mark.anyio
async def test_reference_tables_are_stable(client: AsyncClient) -> None:
    for path in ("/api/docking/proteins", "/api/docking/ligands", "/api/cells/cell-lines"):
        first = await client.get(path)
        second = await client.get(path)
        assert first.status_code == 200
        assert first.content == second.content


@pytest.mark.anyio
async def test_reference_payload_shapes(client: AsyncClient) -> None:
    proteins = (await client.get("/api/docking/proteins")).json()
    assert proteins["1HVH"]["pdb_id"] == "1HVH"
    assert proteins["6LU7"]["binding_site_volume"] == 480.0

    ligands = (await client.get("/api/docking/ligands")).json()
    assert ligands["ibuprofen"]["logP"] == 3.5
    assert ligands["aspirin"]["smiles"] == "CC(=O)OC1=CC=CC=C1C(=O)O"

    cells = (await client.get("/api/cells/cell-lines")).json()
    assert cells["HeLa"]["type"] == "Cancer"
    assert cells["A549"]["drug_sensitivity"] == {"cisplatin": 10.5, "paclitaxel": 7.8}


@pytest.mark.anyio
async def test_docking_run_returns_ranked_modes(client: AsyncClient) -> None:
    response = await client.post("/api/docking/run", json={"proteinId": "2OXY", "ligandId": "ibuprofen"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["protein"]["name"] == "Cyclooxygenase-2"
    assert data["ligand"]["name"] == "Ibuprofen"
    modes = data["modes"]
    assert len(modes) == 9
    assert [mode["mode"] for mode in modes] == list(range(1, 10))
    affinities = [mode["affinity"] for mode in modes]
    assert affinities == sorted(affinities)
    assert data["best_affinity"] == min(affinities)


@pytest.mark.anyio
async def test_docking_run_with_scripted_source(client: AsyncClient, scripted_registry: ServiceRegistry) -> None:
    response = await client.post(
        "/api/docking/run",
        json={"proteinId": "1HVH", "ligandId": "aspirin", "numModes": 3},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert [mode["affinity"] for mode in data["modes"]] == pytest.approx([-14.0, -10.0, -6.0])
    assert data["best_affinity"] == pytest.approx(-14.0)


@pytest.mark.anyio
async def test_docking_seed_is_reproducible(client: AsyncClient) -> None:
    payload = {"proteinId": "5R81", "ligandId": "remdesivir", "numModes": 4, "seed": 11}
    first = await client.post("/api/docking/run", json=payload)
    second = await client.post("/api/docking/run", json=payload)
    assert first.json() == second.json()


@pytest.mark.anyio
@pytest.mark.parametrize("payload", [{"proteinId": "XXXX", "ligandId": "aspirin"}, {"proteinId": "1HVH", "ligandId": "caffeine"}])
async def test_docking_unknown_ids_fail_without_data(client: AsyncClient, payload: dict) -> None:
    response = await client.post("/api/docking/run", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid protein or ligand ID"
    assert "data" not in body


@pytest.mark.anyio
async def test_docking_rejects_zero_modes(client: AsyncClient) -> None:
    response = await client.post("/api/docking/run", json={"proteinId": "1HVH", "ligandId": "aspirin", "numModes": 0})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "invalid_parameter"


@pytest.mark.anyio
@pytest.mark.parametrize("num_modes", [2.5, "3", True])
async def test_docking_rejects_non_integer_modes(client: AsyncClient, num_modes: object) -> None:
    response = await client.post(
        "/api/docking/run",
        json={"proteinId": "1HVH", "ligandId": "aspirin", "numModes": num_modes},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "invalid_payload"
    assert "data" not in body


@pytest.mark.anyio
async def test_docking_mode_limit_is_enforced(client: AsyncClient, scripted_registry: ServiceRegistry) -> None:
    response = await client.post("/api/docking/run", json={"proteinId": "1HVH", "ligandId": "aspirin", "numModes": 50})
    assert response.status_code == 400
    assert response.json()["context"]["limit"] == 5


@pytest.mark.anyio
async def test_simulate_cells_with_defaults(client: AsyncClient) -> None:
    response = await client.post("/api/cells/simulate", json={"cellLineName": "HeLa"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    samples = body["data"]
    assert len(samples) == 145
    assert samples[0] == {"time": 0.0, "total": 50, "viable": 48, "viability": 95.0}
    assert samples[-1]["time"] == 72.0


@pytest.mark.anyio
async def test_simulate_cells_with_experiment_params(client: AsyncClient) -> None:
    payload = {
        "cellLineName": "HeLa",
        "experimentParams": {"initialCells": 50, "duration": 1, "timeInterval": 0.5},
    }
    response = await client.post("/api/cells/simulate", json=payload)
    assert response.status_code == 200
    samples = response.json()["data"]
    assert [sample["time"] for sample in samples] == [0.0, 0.5, 1.0]
    assert [sample["total"] for sample in samples] == [50, 51, 51]


@pytest.mark.anyio
async def test_simulate_cells_negative_duration_is_empty(client: AsyncClient) -> None:
    payload = {"cellLineName": "A549", "experimentParams": {"duration": -5}}
    response = await client.post("/api/cells/simulate", json=payload)
    assert response.status_code == 200
    assert response.json()["data"] == []


@pytest.mark.anyio
async def test_simulate_cells_rejects_zero_interval(client: AsyncClient) -> None:
    payload = {"cellLineName": "HeLa", "experimentParams": {"timeInterval": 0}}
    response = await client.post("/api/cells/simulate", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "invalid_parameter"
    assert "data" not in body


@pytest.mark.anyio
async def test_simulate_cells_unknown_line(client: AsyncClient) -> None:
    response = await client.post("/api/cells/simulate", json={"cellLineName": "Jurkat"})
    assert response.status_code == 400
    body = response.json()
    assert body == {
        "success": False,
        "error": "Invalid cell line",
        "code": "unknown_cell_line",
        "context": {"cell_line": "Jurkat"},
    }


@pytest.mark.anyio
async def test_drug_efficacy_at_ic50(client: AsyncClient) -> None:
    payload = {"cellLineName": "HeLa", "drugClass": "taxol", "concentration": 8.5}
    response = await client.post("/api/predict/drug-efficacy", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["ic50"] == 8.5
    assert data["predicted_efficacy"] == pytest.approx(50.0)
    assert data["predicted_viability"] == pytest.approx(50.0)


@pytest.mark.anyio
async def test_drug_efficacy_unknown_class_uses_default(client: AsyncClient) -> None:
    payload = {"cellLineName": "MCF-7", "drugClass": "cisplatin", "concentration": 0}
    response = await client.post("/api/predict/drug-efficacy", json=payload)
    assert response.status_code == 200
    assert response.json() == {"ic50": 10.0, "predicted_efficacy": 0.0, "predicted_viability": 100.0}


@pytest.mark.anyio
async def test_drug_efficacy_failures(client: AsyncClient) -> None:
    unknown = await client.post(
        "/api/predict/drug-efficacy",
        json={"cellLineName": "Jurkat", "drugClass": "taxol", "concentration": 1},
    )
    assert unknown.status_code == 400
    assert unknown.json()["error"] == "Invalid cell line"

    negative = await client.post(
        "/api/predict/drug-efficacy",
        json={"cellLineName": "HeLa", "drugClass": "taxol", "concentration": -1},
    )
    assert negative.status_code == 400
    assert negative.json()["code"] == "invalid_parameter"

    missing = await client.post("/api/predict/drug-efficacy", json={"cellLineName": "HeLa", "drugClass": "taxol"})
    assert missing.status_code == 422
    assert missing.json()["success"] is False


@pytest.mark.anyio
async def test_unmatched_route_returns_not_found_payload(client: AsyncClient) -> None:
    response = await client.get("/api/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Endpoint not found"
    assert body["message"] == "Please check the API documentation"
    assert "/api/health" in body["available_endpoints"]


@pytest.mark.anyio
async def test_root_serves_static_index(client: AsyncClient) -> None:
    response = await client.get("/")
    assert response.status_code == 200
    assert "BioMed Research Suite" in response.text


@pytest.mark.anyio
async def test_docking_rejects_negative_seed(client: AsyncClient) -> None:
    response = await client.post(
        "/api/docking/run",
        json={"proteinId": "1HVH", "ligandId": "aspirin", "seed": -1},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "invalid_payload"


@pytest.mark.anyio
async def test_simulate_cells_huge_duration_is_rejected(client: AsyncClient) -> None:
    payload = {"cellLineName": "HeLa", "experimentParams": {"duration": 1e300, "timeInterval": 1}}
    response = await client.post("/api/cells/simulate", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "invalid_parameter"
    assert body["context"]["limit"] == 20000


@pytest.mark.anyio
@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
async def test_unmatched_route_is_not_found_for_any_method(client: AsyncClient, method: str) -> None:
    response = await client.request(method, "/api/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "Endpoint not found"


@pytest.mark.anyio
async def test_wrong_method_on_known_route_stays_405(client: AsyncClient) -> None:
    response = await client.post("/api/health")
    assert response.status_code == 405
