"""HTTP-level tests for /api/targets."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from bookertargets.api.dependencies import CommonDependencies, get_common_deps
from bookertargets.api.errors import register_exception_handlers
from bookertargets.api.routers import targets_router


def _build_client(deps: CommonDependencies) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(targets_router, prefix="/api")

    async def override_deps():
        return deps

    app.dependency_overrides[get_common_deps] = override_deps
    return TestClient(app)


def _body(owner_id: str = "ob-1", year: int = 2024, month: int = 6, amount: float = 700000) -> dict:
    return {"owner_id": owner_id, "year": year, "month": month, "target_amount": amount}


@pytest.mark.asyncio
async def test_create_and_get(deps):
    client = _build_client(deps)

    resp = client.post("/api/targets", json=_body())
    assert resp.status_code == 201
    created = resp.json()
    assert created["working_days_in_month"] == 21
    assert created["remaining_amount"] == 700000
    assert created["band"] == "Not Started"

    resp = client.get(f"/api/targets/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["owner_id"] == "ob-1"


@pytest.mark.asyncio
async def test_get_missing_is_404(deps):
    client = _build_client(deps)
    assert client.get("/api/targets/missing").status_code == 404


@pytest.mark.asyncio
async def test_create_errors(deps):
    client = _build_client(deps)
    client.post("/api/targets", json=_body())

    assert client.post("/api/targets", json=_body()).status_code == 409
    assert client.post("/api/targets", json=_body(owner_id="ob-2", amount=0)).status_code == 400
    # Month range is checked by the request model
    assert client.post("/api/targets", json=_body(owner_id="ob-2", month=13)).status_code == 422


@pytest.mark.asyncio
async def test_update_reconcile_delete(deps):
    client = _build_client(deps)
    target_id = client.post("/api/targets", json=_body(amount=50000)).json()["id"]

    resp = client.put(f"/api/targets/{target_id}/achieved", json={"achieved_amount": 30000})
    assert resp.status_code == 200
    assert resp.json()["achievement_percentage"] == pytest.approx(60.0)
    assert resp.json()["band"] == "Behind"

    resp = client.put(f"/api/targets/{target_id}", json={"target_amount": 40000})
    assert resp.status_code == 200
    assert resp.json()["achievement_percentage"] == pytest.approx(75.0)

    resp = client.put(f"/api/targets/{target_id}", json={})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No fields to update"

    assert client.delete(f"/api/targets/{target_id}").json() == {"status": "ok"}
    assert client.delete(f"/api/targets/{target_id}").status_code == 404
    assert client.put(f"/api/targets/{target_id}", json={"target_amount": 1}).status_code == 404


@pytest.mark.asyncio
async def test_list_filters(deps):
    client = _build_client(deps)
    client.post("/api/targets", json=_body(owner_id="ob-1", month=6, amount=100))
    client.post("/api/targets", json=_body(owner_id="ob-2", month=6, amount=300))
    client.post("/api/targets", json=_body(owner_id="ob-1", month=5, amount=200))

    assert len(client.get("/api/targets").json()) == 3

    june = client.get("/api/targets", params={"year": 2024, "month": 6}).json()
    assert [t["owner_id"] for t in june] == ["ob-2", "ob-1"]

    ob1 = client.get("/api/targets", params={"owner_ids": ["ob-1"]}).json()
    assert [t["month"] for t in ob1] == [6, 5]

    assert len(client.get("/api/targets/period/2024/6").json()) == 2
    assert len(client.get("/api/targets/owner/ob-1").json()) == 2


@pytest.mark.asyncio
async def test_batch_create_partial_commit(deps):
    client = _build_client(deps)
    payload = {"targets": [_body(owner_id="ob-1"), _body(owner_id="ob-2", amount=-1), _body(owner_id="ob-3")]}

    resp = client.post("/api/targets/batch", json=payload)

    assert resp.status_code == 400
    owners = [t["owner_id"] for t in client.get("/api/targets").json()]
    assert owners == ["ob-1"]


@pytest.mark.asyncio
async def test_batch_create_atomic(deps):
    client = _build_client(deps)
    payload = {
        "targets": [_body(owner_id="ob-1"), _body(owner_id="ob-2", amount=-1)],
        "atomic": True,
    }

    assert client.post("/api/targets/batch", json=payload).status_code == 400
    assert client.get("/api/targets").json() == []


@pytest.mark.asyncio
async def test_batch_upsert_is_idempotent(deps):
    client = _build_client(deps)
    payload = {"targets": [_body(owner_id="ob-1"), _body(owner_id="ob-2")]}

    assert client.put("/api/targets/batch", json=payload).status_code == 200
    assert client.put("/api/targets/batch", json=payload).status_code == 200

    assert len(client.get("/api/targets").json()) == 2


@pytest.mark.asyncio
async def test_copy(deps):
    client = _build_client(deps)
    target_id = client.post("/api/targets", json=_body(month=5, amount=1000)).json()["id"]
    client.put(f"/api/targets/{target_id}/achieved", json={"achieved_amount": 900})

    resp = client.post(
        "/api/targets/copy",
        json={"from_year": 2024, "from_month": 5, "to_year": 2024, "to_month": 6},
    )

    assert resp.status_code == 201
    copied = resp.json()
    assert len(copied) == 1
    assert copied[0]["month"] == 6
    assert copied[0]["target_amount"] == 1000
    assert copied[0]["achieved_amount"] == 0

    # Copying again collides with the new targets
    resp = client.post(
        "/api/targets/copy",
        json={"from_year": 2024, "from_month": 5, "to_year": 2024, "to_month": 6},
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_summary_and_progress(deps):
    client = _build_client(deps)
    target_id = client.post("/api/targets", json=_body(amount=50000)).json()["id"]
    client.put(f"/api/targets/{target_id}/achieved", json={"achieved_amount": 30000})

    summary = client.get("/api/targets/summary", params={"year": 2024, "month": 6}).json()
    assert summary["total_targets"] == 1
    assert summary["behind_count"] == 1

    progress = client.get(
        "/api/targets/progress",
        params={"year": 2024, "month": 6, "as_of": "2024-06-20"},
    ).json()
    assert progress["items"][0]["status"] == "at-risk"
    assert progress["total"] == 1
