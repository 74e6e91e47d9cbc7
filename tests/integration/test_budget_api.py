"""Integration tests for budget endpoints and usage evaluation"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def seeded(client: TestClient) -> dict:
    """$400 monthly food budget, $2500 monthly total budget, and July spending"""
    food = client.post(
        "/v1/budgets",
        json={"category": "food", "limit_cents": 40000, "period": "monthly", "start_date": "2023-07-01T00:00:00"},
    ).json()
    total = client.post(
        "/v1/budgets",
        json={"category": "total", "limit_cents": 250000, "period": "monthly", "start_date": "2023-07-01T00:00:00"},
    ).json()

    for amount, category, day in [(25000, "food", 5), (20000, "food", 10), (35000, "transport", 12)]:
        response = client.post(
            "/v1/expenses",
            json={"amount_cents": amount, "category": category, "date": f"2023-07-{day:02d}T00:00:00"},
        )
        assert response.status_code == 201

    return {"food": food, "total": total}


def test_create_budget(client: TestClient):
    response = client.post(
        "/v1/budgets",
        json={"category": "total", "limit_cents": 250000, "period": "monthly", "start_date": "2023-07-01T00:00:00"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["category"] == "total"
    assert data["limit_cents"] == 250000
    assert data["period"] == "monthly"
    assert data["start_date"] == "2023-07-01T00:00:00"


def test_create_budget_unknown_scope(client: TestClient):
    response = client.post(
        "/v1/budgets",
        json={"category": "pets", "limit_cents": 1000, "period": "monthly", "start_date": "2023-07-01T00:00:00"},
    )

    assert response.status_code == 422
    assert "pets" in response.json()["detail"]


def test_create_budget_rejects_invalid_limit_and_period(client: TestClient):
    zero_limit = client.post(
        "/v1/budgets",
        json={"category": "food", "limit_cents": 0, "period": "monthly", "start_date": "2023-07-01T00:00:00"},
    )
    bad_period = client.post(
        "/v1/budgets",
        json={"category": "food", "limit_cents": 1000, "period": "hourly", "start_date": "2023-07-01T00:00:00"},
    )

    assert zero_limit.status_code == 422
    assert bad_period.status_code == 422


def test_budget_usage_over_budget(client: TestClient, seeded: dict):
    """$250 + $200 food against $400: over budget by $50"""
    response = client.get(f"/v1/budgets/{seeded['food']['id']}/usage", params={"as_of": "2023-07-15T00:00:00"})

    assert response.status_code == 200
    data = response.json()
    assert data["spent_cents"] == 45000
    assert data["remaining_cents"] == -5000
    assert data["percentage_used"] == 112.5
    assert data["is_over_budget"] is True
    assert data["status"] == "over"
    assert data["window_start"] == "2023-07-01T00:00:00"
    assert data["window_end"] == "2023-08-01T00:00:00"


def test_all_budget_usages(client: TestClient, seeded: dict):
    response = client.get("/v1/budgets/usage")

    assert response.status_code == 200
    data = response.json()
    assert data["as_of"] == "2023-07-20T12:00:00"  # frozen clock
    by_id = {u["budget"]["id"]: u for u in data["usages"]}
    assert by_id[seeded["food"]["id"]]["spent_cents"] == 45000
    assert by_id[seeded["total"]["id"]]["spent_cents"] == 80000
    assert by_id[seeded["total"]["id"]]["status"] == "ok"


def test_usage_in_next_window(client: TestClient, seeded: dict):
    """July spending does not carry into August"""
    response = client.get(f"/v1/budgets/{seeded['food']['id']}/usage", params={"as_of": "2023-08-05T00:00:00"})

    data = response.json()
    assert data["spent_cents"] == 0
    assert data["remaining_cents"] == 40000
    assert data["window_start"] == "2023-08-01T00:00:00"


def test_usage_before_budget_starts(client: TestClient, seeded: dict):
    response = client.get(f"/v1/budgets/{seeded['food']['id']}/usage", params={"as_of": "2023-06-15T00:00:00"})

    data = response.json()
    assert data["has_started"] is False
    assert data["window_start"] == "2023-07-01T00:00:00"


def test_usage_unknown_budget(client: TestClient):
    response = client.get("/v1/budgets/00000000-0000-0000-0000-000000000000/usage")
    assert response.status_code == 404


def test_update_and_delete_budget(client: TestClient, seeded: dict):
    budget_id = seeded["food"]["id"]

    updated = client.put(
        f"/v1/budgets/{budget_id}",
        json={"category": "food", "limit_cents": 60000, "period": "monthly", "start_date": "2023-07-01T00:00:00"},
    )
    assert updated.status_code == 200
    assert updated.json()["limit_cents"] == 60000

    usage = client.get(f"/v1/budgets/{budget_id}/usage").json()
    assert usage["percentage_used"] == 75.0
    assert usage["status"] == "ok"

    assert client.delete(f"/v1/budgets/{budget_id}").status_code == 204
    assert client.get(f"/v1/budgets/{budget_id}").status_code == 404
    assert [b["id"] for b in client.get("/v1/budgets").json()] == [seeded["total"]["id"]]


def test_dashboard(client: TestClient, seeded: dict):
    client.post("/v1/incomes", json={"amount_cents": 300000, "source": "Salary", "date": "2023-07-01T00:00:00"})

    response = client.get("/v1/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["total_expense_cents"] == 80000
    assert data["total_income_cents"] == 300000
    assert data["balance_cents"] == 220000
    assert data["total_budget"]["budget"]["id"] == seeded["total"]["id"]
    assert data["total_budget"]["percentage_used"] == 32.0
    assert [u["budget"]["id"] for u in data["category_budgets"]] == [seeded["food"]["id"]]
    assert [e["amount_cents"] for e in data["recent_expenses"]] == [35000, 20000, 25000]
