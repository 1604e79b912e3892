"""API tests for the aggregate /api/procurement endpoint."""
from fastapi.testclient import TestClient

from conftest import (
    identification_payload,
    planning_payload,
    publication_payload,
    publication_tender_payload,
)


def _road_repair(client: TestClient) -> int:
    ident = client.post("/api/item-identifications", json=identification_payload()).json()
    planning = client.post(
        "/api/plannings", json=planning_payload(identification_id=ident["id"], estimated_budget=450000)
    ).json()
    publication = client.post("/api/publications", json=publication_payload(planning_id=planning["id"])).json()
    client.post("/api/publication-tenders", json=publication_tender_payload(publication_id=publication["id"]))
    return ident["id"]


def test_complete_process(client: TestClient):
    ident_id = _road_repair(client)
    resp = client.get("/api/procurement", params={"action": "complete-process", "identification_id": ident_id})
    assert resp.status_code == 200
    data = resp.json()
    assert data["stage"] == "publicationTender"
    assert data["identification"]["id"] == ident_id
    assert data["planning"]["estimated_budget"] == 450000
    assert data["publication_tender"]["date_of_tender_publication"] == "2024-03-20T00:00:00"


def test_complete_process_for_lone_identification_has_null_stages(client: TestClient):
    ident = client.post("/api/item-identifications", json=identification_payload()).json()
    data = client.get(
        "/api/procurement", params={"action": "complete-process", "identification_id": ident["id"]}
    ).json()
    assert data["stage"] == "identification"
    assert data["planning"] is None
    assert data["publication_tender"] is None


def test_summaries_omit_unreached_fields(client: TestClient):
    ident_id = _road_repair(client)
    client.post("/api/item-identifications", json=identification_payload(tender_title="Desks"))

    resp = client.get("/api/procurement", params={"action": "summaries"})
    assert resp.status_code == 200
    full, lone = resp.json()
    assert full["id"] == ident_id
    assert full["stage"] == "publicationTender"
    assert full["estimated_budget"] == 450000
    assert full["date_of_tender_publication"] == "2024-03-20T00:00:00"
    assert lone["stage"] == "identification"
    assert "estimated_budget" not in lone
    assert "date_of_tender_publication" not in lone


def test_by_stage_division_status(client: TestClient):
    _road_repair(client)
    client.post("/api/item-identifications", json=identification_payload(division="IT", status="Pending"))

    resp = client.get("/api/procurement", params={"action": "by-stage", "stage": "identification"})
    assert [s["division"] for s in resp.json()] == ["IT"]

    resp = client.get("/api/procurement", params={"action": "by-division", "division": "Works"})
    assert [s["stage"] for s in resp.json()] == ["publicationTender"]

    resp = client.get("/api/procurement", params={"action": "by-status", "status": "Pending"})
    assert [s["division"] for s in resp.json()] == ["IT"]


def test_timeline_and_progress(client: TestClient):
    ident_id = _road_repair(client)

    events = client.get("/api/procurement", params={"action": "timeline", "identification_id": ident_id}).json()
    dates = [e["date"] for e in events]
    assert dates == sorted(dates)
    assert {e["stage"] for e in events} == {"identification", "planning", "publication", "publicationTender"}

    progress = client.get("/api/procurement", params={"action": "progress", "identification_id": ident_id}).json()
    assert progress == {"identification_id": ident_id, "stage": "publicationTender", "progress": 100}


def test_statistics(client: TestClient):
    _road_repair(client)
    client.post("/api/item-identifications", json=identification_payload(division=""))

    stats = client.get("/api/procurement", params={"action": "statistics"}).json()
    assert stats["total_items"] == 2
    assert stats["by_stage"]["publicationTender"] == 1
    assert stats["by_stage"]["identification"] == 1
    assert stats["by_division"] == {"Works": 1, "Unknown": 1}


def test_candidates(client: TestClient):
    ident_id = _road_repair(client)
    client.post("/api/plannings", json=planning_payload(identification_id=ident_id))

    data = client.get("/api/procurement", params={"action": "candidates", "identification_id": ident_id}).json()
    assert data["identification_id"] == ident_id
    assert len(data["plannings"]) == 2
    assert len(data["publications"]) == 1


def test_missing_or_unknown_action_returns_400(client: TestClient):
    resp = client.get("/api/procurement")
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"

    resp = client.get("/api/procurement", params={"action": "forecast"})
    assert resp.status_code == 400


def test_missing_parameters_return_400(client: TestClient):
    assert client.get("/api/procurement", params={"action": "timeline"}).status_code == 400
    assert client.get("/api/procurement", params={"action": "by-stage"}).status_code == 400
    assert client.get("/api/procurement", params={"action": "by-stage", "stage": "invoice"}).status_code == 400
    resp = client.get("/api/procurement", params={"action": "complete-process", "identification_id": "abc"})
    assert resp.status_code == 400


def test_unknown_identification_returns_404(client: TestClient):
    resp = client.get("/api/procurement", params={"action": "complete-process", "identification_id": 9999})
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"
