"""
Tests for the dashboard endpoint.
"""

from fastapi.testclient import TestClient

from app.main import app
from app.routes.dashboard import parse_page

client = TestClient(app)


def test_dashboard_single_contact(fake_helena, contact_factory, apply_helena_override):
    fake_helena.add_page(3, 1, [contact_factory("c3", nps="3")])
    apply_helena_override(app, fake_helena)

    response = client.get("/api/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["averageNps"] == 3
    assert data["totalContacts"] == 1
    assert data["startDate"] is None
    assert data["endDate"] is None
    assert data["npsSummary"] == [
        {"score": 1, "count": 0},
        {"score": 2, "count": 0},
        {"score": 3, "count": 1},
        {"score": 4, "count": 0},
        {"score": 5, "count": 0},
    ]
    assert data["lowNps"]["page"] == 1
    assert data["lowNps"]["pageSize"] == 20
    assert data["lowNps"]["totalItems"] == 1
    assert data["lowNps"]["totalPages"] == 1
    assert data["lowNps"]["items"][0]["id"] == "c3"
    assert data["lowNps"]["items"][0]["nps"] == 3
    assert data["lowNpsAllItems"] == data["lowNps"]["items"]


def test_dashboard_page_clamped(fake_helena, contact_factory, apply_helena_override):
    fake_helena.add_page(1, 1, [contact_factory(f"c{i}", nps=1) for i in range(5)])
    apply_helena_override(app, fake_helena)

    response = client.get("/api/dashboard", params={"page": "99"})

    assert response.status_code == 200
    low_nps = response.json()["lowNps"]
    assert low_nps["page"] == 1
    assert low_nps["totalPages"] == 1
    assert len(low_nps["items"]) == 5


def test_dashboard_echoes_dates_and_filters(fake_helena, contact_factory, apply_helena_override):
    fake_helena.add_page(
        2,
        1,
        [
            contact_factory("in", nps=2, updated_at="2024-03-05T10:00:00Z"),
            contact_factory("out", nps=2, updated_at="2024-05-05T10:00:00Z"),
        ],
    )
    apply_helena_override(app, fake_helena)

    response = client.get("/api/dashboard", params={"startDate": "2024-03-01", "endDate": "2024-03-31"})

    data = response.json()
    assert data["startDate"] == "2024-03-01"
    assert data["endDate"] == "2024-03-31"
    assert [item["id"] for item in data["lowNpsAllItems"]] == ["in"]


def test_dashboard_upstream_failure_returns_error(fake_helena, contact_factory, apply_helena_override):
    for bucket in (1, 2, 3):
        fake_helena.add_page(bucket, 1, [contact_factory(f"c{bucket}", nps=bucket)])
    fake_helena.add_error(4, 1, status_code=500, body={"error": "internal"})
    apply_helena_override(app, fake_helena)

    response = client.get("/api/dashboard")

    assert response.status_code == 500
    data = response.json()
    assert data["error"] is True
    assert "NPS 4 page 1" in data["message"]
    assert "lowNps" not in data


def test_dashboard_missing_token_returns_error(fake_helena, apply_helena_override):
    fake_helena.api_token = None
    apply_helena_override(app, fake_helena)

    response = client.get("/api/dashboard")

    assert response.status_code == 500
    assert response.json() == {"error": True, "message": "HELENA_API_TOKEN is not configured"}


def test_dashboard_sets_request_id_header(fake_helena, apply_helena_override):
    apply_helena_override(app, fake_helena)

    response = client.get("/api/dashboard", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"


def test_cors_headers_for_any_origin(fake_helena, apply_helena_override):
    apply_helena_override(app, fake_helena)

    response = client.get("/api/dashboard", headers={"Origin": "http://dashboard.example.com"})

    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_cors_preflight():
    response = client.options(
        "/api/dashboard",
        headers={"Origin": "http://dashboard.example.com", "Access-Control-Request-Method": "GET"},
    )

    assert response.status_code == 204
    assert "GET" in response.headers["Access-Control-Allow-Methods"]


def test_parse_page():
    assert parse_page(None) == 1
    assert parse_page("") == 1
    assert parse_page("3") == 3
    assert parse_page("2abc") == 2
    assert parse_page("abc") == 1
    assert parse_page("0") == 1
    assert parse_page("-4") == -4
