"""
HTTP layer tests
"""
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_domain_service
from config.settings import settings
from core.exceptions import LedgerUnavailableError
from main import app
from services.authorities import PrimaryCheck
from tests.conftest import FakePrimary, available, make_token


@pytest.fixture
def primary():
    return FakePrimary({"aihub.com": available("10.99")})


@pytest.fixture
def client(domain_service):
    app.dependency_overrides[get_domain_service] = lambda: domain_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestAuth:

    def test_search_requires_token(self, client):
        response = client.post("/api/domains/search", json={"pattern": "ai*"})
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_invalid_token(self, client):
        response = client.post(
            "/api/domains/search",
            json={"pattern": "ai*"},
            headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401


class TestSearchEndpoint:

    def test_search(self, client, auth_headers):
        response = client.post("/api/domains/search", json={"pattern": "ai*"}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 1
        assert body["credits_remaining"] == 7
        domain = body["domains"][0]
        assert domain["name"] == "aihub.com"
        assert domain["price"] == 10.99
        assert domain["status"] == "available"
        assert "aihub.com" in domain["purchase_url"]

    def test_empty_pattern(self, client, auth_headers, primary):
        response = client.post("/api/domains/search", json={"pattern": "  "}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "empty_keyword"
        assert primary.calls == []

    def test_insufficient_credits(self, client, auth_headers, ledger):
        # 10 starter credits: 7, 4, 1
        for _ in range(3):
            assert client.post("/api/domains/search", json={"pattern": "ai*"}, headers=auth_headers).status_code == 200

        response = client.post("/api/domains/search", json={"pattern": "ai*"}, headers=auth_headers)
        assert response.status_code == 402
        body = response.json()
        assert body["error_code"] == "insufficient_credits"
        assert body["details"] == {"available": 1, "required": 3}

    def test_ledger_unavailable(self, client, auth_headers, domain_service):
        domain_service.gate.ledger.read_balance = AsyncMock(side_effect=RuntimeError("down"))

        response = client.post("/api/domains/search", json={"pattern": "mind"}, headers=auth_headers)

        assert response.status_code == 503
        assert response.json()["error_code"] == "ledger_unavailable"

    def test_pattern_too_long(self, client, auth_headers):
        response = client.post("/api/domains/search", json={"pattern": "a" * 101}, headers=auth_headers)
        assert response.status_code == 422


class TestScoreEndpoint:

    def test_score(self, client, auth_headers, ledger):
        response = client.post("/api/domains/score", json={"domain": "https://www.AI.com/"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["domain"] == "ai.com"
        assert response.json()["flip_score"] == 100

    def test_invalid_domain(self, client, auth_headers):
        response = client.post("/api/domains/score", json={"domain": "not a domain"}, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["error"]["type"] == "validation_error"


class TestCheckAndHistory:

    def test_check(self, client, auth_headers):
        response = client.post("/api/domains/check", json={"domain": "aihub.com"}, headers=auth_headers)

        assert response.status_code == 200
        domain = response.json()["domain"]
        assert domain["available"] is True
        assert domain["price"] == 10.99

    def test_check_is_not_billed(self, client, auth_headers):
        client.post("/api/domains/check", json={"domain": "aihub.com"}, headers=auth_headers)

        assert client.get("/api/credits/balance", headers=auth_headers).json()["current_credits"] == 10

    def test_check_requires_token(self, client):
        assert client.post("/api/domains/check", json={"domain": "aihub.com"}).status_code == 401

    def test_history(self, client, auth_headers, admin_headers):
        client.post("/api/domains/search", json={"pattern": "mind"}, headers=auth_headers)
        client.post("/api/domains/search", json={"pattern": "ai*"}, headers=auth_headers)
        client.post("/api/domains/search", json={"pattern": "zen"}, headers=admin_headers)

        response = client.get("/api/domains/history", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert [s["keyword"] for s in body["searches"]] == ["ai*", "mind"]
        assert body["searches"][0]["operation"] == "wildcard_explore"

    def test_history_limit_bounds(self, client, auth_headers):
        assert client.get("/api/domains/history", params={"limit": 0}, headers=auth_headers).status_code == 422


class TestCreditEndpoints:

    def test_balance_provisions_starter_credits(self, client, auth_headers):
        response = client.get("/api/credits/balance", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["current_credits"] == 10
        assert body["is_admin"] is False
        assert body["credit_costs"] == {"search": 2, "wildcard_explore": 3, "ai_suggest": 1}

    def test_balance_ledger_failure(self, client, auth_headers, domain_service):
        domain_service.gate.get_balance = AsyncMock(side_effect=LedgerUnavailableError())

        response = client.get("/api/credits/balance", headers=auth_headers)

        assert response.status_code == 503
        assert response.json()["error"]["type"] == "ledger_unavailable"

    def test_packs_are_public(self, client):
        response = client.get("/api/credits/packs")

        assert response.status_code == 200
        pack = response.json()["packs"][0]
        assert pack["id"] == "pack_10"
        assert pack["price_label"] == "$5.00"

    def test_grant_requires_admin(self, client, auth_headers):
        response = client.post("/api/credits/grant", json={"user_id": "user-2", "amount": 5}, headers=auth_headers)
        assert response.status_code == 403

    def test_admin_grant(self, client, admin_headers):
        response = client.post("/api/credits/grant", json={"user_id": "user-2", "amount": 5}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["new_balance"] == 15

    def test_admin_by_email(self, client, monkeypatch):
        monkeypatch.setattr(settings, "admin_emails", ["Owner@Example.com"])
        headers = {"Authorization": f"Bearer {make_token('owner-1', email='owner@example.com')}"}

        response = client.post("/api/credits/grant", json={"user_id": "user-2", "amount": 1}, headers=headers)

        assert response.status_code == 200


class TestAdminEndpoints:

    def test_validation_logs(self, client, admin_headers, primary):
        primary.answers["aihub.com"] = PrimaryCheck(available=None, status="weird")
        client.post("/api/domains/search", json={"pattern": "ai*"}, headers=admin_headers)

        response = client.get("/api/admin/validation-logs", params={"source": "primary"}, headers=admin_headers)

        assert response.status_code == 200
        logs = response.json()["logs"]
        assert [(log["domain"], log["status"]) for log in logs] == [("aihub.com", "invalid_response")]

    def test_validation_logs_forbidden(self, client, auth_headers):
        assert client.get("/api/admin/validation-logs", headers=auth_headers).status_code == 403


class TestHealth:

    def test_live(self, client):
        response = client.get("/api/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"
