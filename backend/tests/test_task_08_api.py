"""Task-08: HTTP API 테스트"""

from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


def _payload(**overrides) -> dict:
    body = {
        "snapshot": {
            "case_id": "2024타경20002",
            "property_type": "아파트",
            "appraisal": 500_000_000,
            "rights": [
                {"id": "r1", "right_type": "근저당권", "registration_date": "2020-03-01", "amount": 300_000_000},
                {"id": "r2", "right_type": "유치권", "registration_date": "2023-05-01"},
            ],
            "tenants": [
                {
                    "id": "t1",
                    "deposit": 30_000_000,
                    "move_in_date": "2019-01-10",
                    "fixed_date": "2019-01-10",
                    "kind": "상가임차권",
                }
            ],
            "dividend_deadline": "2024-06-01",
        },
        "user_bid_price": 410_000_000,
    }
    body.update(overrides)
    return body


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_evaluate(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/engine/evaluate", json=_payload())

    assert resp.status_code == 200
    data = resp.json()
    assert data["valuation"]["min_bid"] == 400_000_000
    assert data["rights"]["total_assumed_amount"] == 30_000_000
    assert data["risk_flags"] == ["상가임차", "유치권"]
    assert data["profit"]["be_point"] == data["costs"]["total_acquisition"]
    assert data["bid_ladder"]["aggressive"]["price"] <= data["bid_ladder"]["policy_cap"]
    assert data["competitor_bids"] is None
    assert "generated_at" in data["meta"]


async def test_evaluate_with_competitors(client: AsyncClient) -> None:
    options = {"simulate_competitors": True, "competitor_count": 6, "difficulty": "hard"}

    resp = await client.post(
        "/api/v1/engine/evaluate", json=_payload(user_bid_price=450_000_000, options=options)
    )

    assert resp.status_code == 200
    bids = resp.json()["competitor_bids"]
    assert len(bids) == 6
    assert all(b < 450_000_000 for b in bids)


async def test_evaluate_rejects_negative_bid(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/engine/evaluate", json=_payload(user_bid_price=-1))

    assert resp.status_code == 422


async def test_evaluate_rejects_unknown_right_type(client: AsyncClient) -> None:
    body = _payload()
    body["snapshot"]["rights"][0]["right_type"] = "지역권"

    resp = await client.post("/api/v1/engine/evaluate", json=body)

    assert resp.status_code == 422


async def test_evaluate_rejects_negative_market_signal(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/engine/evaluate", json=_payload(market_signals={"kbIndex": -1.0}))

    assert resp.status_code == 400
    assert "market_signals" in resp.json()["detail"]


async def test_rejected_input_logged_under_module_logger(client: AsyncClient, caplog) -> None:
    resp = await client.post("/api/v1/engine/evaluate", json=_payload(market_signals={"kbIndex": -1.0}))

    assert resp.status_code == 400
    rejected = [r for r in caplog.records if "엔진 입력 거부" in r.getMessage()]
    assert rejected
    assert rejected[0].name == "bidmaster.api.v1.engine"


async def test_competitors(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/v1/engine/competitors",
        json={
            "n": 5,
            "fmv": 500_000_000,
            "appraisal": 550_000_000,
            "lowest_bid": 400_000_000,
            "user_bid": 600_000_000,
            "overheat_score": 0.5,
        },
    )

    assert resp.status_code == 200
    bids = resp.json()["bids"]
    assert len(bids) == 5
    assert bids == sorted(bids)
    assert all(425_000_000 <= b <= 525_000_000 for b in bids)
