from __future__ import annotations

from fastapi.testclient import TestClient

from backend.app.main import app

client = TestClient(app)


def test_scan_endpoint_returns_deduplicated_results() -> None:
    payload = {
        "emails": [
            {
                "id": "n1",
                "subject": "Welcome to Netflix",
                "body": "Your free trial has started.",
                "from": "info@netflix.com",
                "date": "2025-01-01",
            },
            {
                "id": "n2",
                "subject": "Netflix reminder",
                "body": "Your free trial ends on January 15, 2025. You will be charged $15.49.",
                "from": "info@netflix.com",
                "date": "2025-01-10",
            },
        ]
    }

    resp = client.post("/api/scan", json=payload)

    assert resp.status_code == 200
    summary = resp.json()["summary"]
    assert summary["subscriptions"] == 1
    result = summary["results"][0]
    assert result["serviceName"] == "Netflix"
    assert result["trialEndDate"] == "2025-01-15"
    assert result["currency"] == "USD"


def test_scan_mock_and_status() -> None:
    resp = client.post("/api/scan/mock")
    assert resp.status_code == 200
    assert resp.json()["summary"]["subscriptions"] == 2

    status = client.get("/api/scan/status").json()["status"]
    assert status["state"] == "done"
    assert status["metrics"]["subscriptions"] == 2
    assert status["last_services"] == ["Notion", "Figma"]
    assert status["scans_completed"] >= 1


def test_scan_rejects_malformed_body() -> None:
    resp = client.post("/api/scan", json={"emails": [{"subject": "missing id"}]})

    assert resp.status_code == 422


def test_explain_endpoint_reports_rejection_reason() -> None:
    resp = client.post(
        "/api/explain",
        json={"id": "x", "subject": "Your invoice", "body": "Thanks", "from": "billing@acme.example"},
    )

    assert resp.status_code == 200
    diagnostics = resp.json()["diagnostics"]
    assert diagnostics["rejected_reason"] == "unknown_service"
    assert diagnostics["result"] is None


def test_services_listing() -> None:
    services = client.get("/api/services").json()["services"]

    assert services[0] == {"name": "Netflix", "domains": ["netflix.com", "netflix.ca"], "category": "Entertainment"}
    assert len(services) == 20
