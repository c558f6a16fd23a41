# =============================================================================
# tests/test_health_score_routes.py - HTTP Endpoint Tests
# =============================================================================
# Exercises the FastAPI app with TestClient:
# - Success and failure response shapes for POST /health-score/calculate
# - Stored score retrieval with display bands
# - Authentication failures never reach the service
# - Service health checks
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.auth import AuthUser, get_current_user
from app.dependencies import get_now
from app.exceptions import DataAccessError, PersistenceError
from app.main import app
from core.models.health_score import HealthScoreRecord, HealthScores
from tests.test_auth import make_token

SERVICE = "app.routers.health_score.HealthScoreService"

SCORES = HealthScores(
    overall_score=90,
    productivity_score=100,
    financial_health_score=100.0,
    learning_engagement_score=50,
    community_participation_score=100,
)


@pytest.fixture
def client(user_id, pinned_now):
    """TestClient with authentication and clock overridden."""
    app.dependency_overrides[get_current_user] = lambda: AuthUser(id=user_id, email="painter@example.com")
    app.dependency_overrides[get_now] = lambda: pinned_now
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    """TestClient with real authentication."""
    app.dependency_overrides.clear()
    return TestClient(app)


# =============================================================================
# POST /api/v1/health-score/calculate
# =============================================================================

class TestCalculateEndpoint:
    """Tests for the calculation trigger."""

    def test_success_shape(self, client, user_id, pinned_now):
        with patch(SERVICE) as service:
            service.calculate.return_value = SCORES
            response = client.post("/api/v1/health-score/calculate")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["scores"] == {
            "overall_score": 90,
            "productivity_score": 100,
            "financial_health_score": 100.0,
            "learning_engagement_score": 50,
            "community_participation_score": 100,
        }
        service.calculate.assert_called_once_with(user_id, now=pinned_now)

    def test_user_comes_from_token_not_body(self, client, user_id):
        with patch(SERVICE) as service:
            service.calculate.return_value = SCORES
            client.post(
                "/api/v1/health-score/calculate",
                json={"user_id": "00000000-0000-0000-0000-000000000000"},
            )

        assert service.calculate.call_args.args[0] == user_id

    def test_data_access_error(self, client):
        with patch(SERVICE) as service:
            service.calculate.side_effect = DataAccessError("forum posts", "connection refused")
            response = client.post("/api/v1/health-score/calculate")

        assert response.status_code == 502
        body = response.json()
        assert "connection refused" in body["error"]
        assert body["code"] == "DATA_ACCESS_FAILED"
        assert "scores" not in body

    def test_persistence_error(self, client, user_id):
        with patch(SERVICE) as service:
            service.calculate.side_effect = PersistenceError(str(user_id), "permission denied")
            response = client.post("/api/v1/health-score/calculate")

        assert response.status_code == 502
        assert response.json()["code"] == "PERSISTENCE_FAILED"

    def test_unexpected_error(self, user_id, pinned_now):
        app.dependency_overrides[get_current_user] = lambda: AuthUser(id=user_id)
        app.dependency_overrides[get_now] = lambda: pinned_now
        try:
            with patch(SERVICE) as service:
                service.calculate.side_effect = RuntimeError("boom")
                response = TestClient(app, raise_server_exceptions=False).post(
                    "/api/v1/health-score/calculate"
                )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "An unexpected error occurred", "code": "INTERNAL_ERROR"}


class TestCalculateAuthentication:
    """Unresolvable callers never reach the service."""

    def test_missing_header(self, anonymous_client):
        with patch(SERVICE) as service:
            response = anonymous_client.post("/api/v1/health-score/calculate")

        assert response.status_code == 401
        assert response.json()["code"] == "AUTHENTICATION_FAILED"
        assert "error" in response.json()
        service.calculate.assert_not_called()

    def test_invalid_token(self, anonymous_client):
        with patch(SERVICE) as service:
            response = anonymous_client.post(
                "/api/v1/health-score/calculate",
                headers={"Authorization": "Bearer not-a-token"},
            )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        service.calculate.assert_not_called()

    def test_valid_token(self, anonymous_client):
        with patch(SERVICE) as service:
            service.calculate.return_value = SCORES
            response = anonymous_client.post(
                "/api/v1/health-score/calculate",
                headers={"Authorization": f"Bearer {make_token()}"},
            )

        assert response.status_code == 200
        assert str(service.calculate.call_args.args[0]) == "8f14e45f-ceea-467f-a9c4-7c1d4c2a9e01"


# =============================================================================
# GET /api/v1/health-score
# =============================================================================

class TestGetEndpoint:
    """Tests for reading the stored score."""

    def test_returns_scores_and_bands(self, client, user_id):
        record = HealthScoreRecord(
            user_id=user_id,
            overall_score=65,
            productivity_score=100,
            financial_health_score=30.5,
            learning_engagement_score=50,
            community_participation_score=20,
            last_calculated_at="2024-06-30T12:00:00Z",
        )

        with patch(SERVICE) as service:
            service.get_latest.return_value = record
            response = client.get("/api/v1/health-score")

        assert response.status_code == 200
        body = response.json()
        assert body["scores"]["overall_score"] == 65
        assert body["scores"]["user_id"] == str(user_id)
        assert body["bands"] == {
            "overall_score": "Good",
            "productivity_score": "Excellent",
            "financial_health_score": "Needs Attention",
            "learning_engagement_score": "Good",
            "community_participation_score": "Needs Attention",
        }

    def test_not_calculated_yet(self, client):
        with patch(SERVICE) as service:
            service.get_latest.return_value = None
            response = client.get("/api/v1/health-score")

        assert response.status_code == 404
        assert response.json()["code"] == "HEALTH_SCORE_NOT_FOUND"


# =============================================================================
# Service health checks
# =============================================================================

class TestServiceHealth:
    """Tests for /api/v1/health endpoints."""

    def test_health(self, anonymous_client):
        response = anonymous_client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_live(self, anonymous_client):
        assert anonymous_client.get("/api/v1/health/live").json()["status"] == "alive"

    def test_ready_when_database_reachable(self, anonymous_client):
        fake = MagicMock()
        with patch("app.routers.health.SupabaseClient") as supabase:
            supabase.get_client.return_value = fake
            response = anonymous_client.get("/api/v1/health/ready")

        assert response.json()["status"] == "ready"
        fake.table.assert_called_once_with("creative_health_scores")

    def test_degraded_when_database_unreachable(self, anonymous_client):
        with patch("app.routers.health.SupabaseClient") as supabase:
            supabase.get_client.side_effect = RuntimeError("connection refused")
            response = anonymous_client.get("/api/v1/health/ready")

        body = response.json()
        assert body["status"] == "degraded"
        assert body["checks"]["database"].startswith("unhealthy")
