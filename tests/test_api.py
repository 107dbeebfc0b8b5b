"""Integration tests for API endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from main import app, create_app
from text_sentiment.clients import AnalysisHTTPError, analysis_client
from text_sentiment.config import settings
from text_sentiment.models import (
    AnalysisRequest,
    AnalysisResponse,
    LoadingState,
)
from text_sentiment.services import RequestController

SAMPLE_PAYLOAD = {
    "sentiment": "positive",
    "score": 0.73,
    "confidence": 0.9,
    "details": {
        "vader_scores": {"pos": 0.6, "neu": 0.3, "neg": 0.1, "compound": 0.5},
        "textblob_score": 0.4,
    },
}

ANALYZE_URL = f"{settings.api_prefix}/analyze/text"
STATE_URL = f"{settings.api_prefix}/analysis/state"


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestAPI:
    """Test suite for API endpoints."""

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["service"] == settings.api_title
        assert data["version"] == settings.api_version
        assert data["analysis_service"] == settings.analysis_api_url

    def test_create_app_allows_credentialed_cors(self):
        """Test that a fresh app accepts credentialed cross-origin submissions."""
        fresh = TestClient(create_app())

        response = fresh.options(
            ANALYZE_URL,
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_health_endpoint(self, client):
        """Test health check endpoint."""
        response = client.get(f"{settings.api_prefix}/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "text-sentiment"

    def test_analyze_text_success(self, client):
        """Test successful text analysis."""
        with patch.object(
            analysis_client, "analyze_text", new_callable=AsyncMock
        ) as mock_analyze:
            mock_analyze.return_value = AnalysisResponse.model_validate(SAMPLE_PAYLOAD)

            response = client.post(ANALYZE_URL, json={"text": "  I love it  "})

            mock_analyze.assert_called_once_with("I love it")

        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "succeeded"
        assert data["view"]["sentiment_label"] == "POSITIVE"
        assert data["view"]["score_text"] == "0.73"
        assert [s["name"] for s in data["view"]["distribution"]] == [
            "Positive",
            "Neutral",
            "Negative",
        ]
        assert data["response"]["details"]["vader_scores"]["pos"] == 0.6

    def test_analyze_text_empty(self, client):
        """Test that whitespace-only text is rejected without submitting."""
        with patch.object(
            analysis_client, "analyze_text", new_callable=AsyncMock
        ) as mock_analyze:
            response = client.post(ANALYZE_URL, json={"text": "   "})

            mock_analyze.assert_not_called()

        assert response.status_code == 400
        assert "Invalid parameter" in response.json()["detail"]

    def test_analyze_text_missing_body_field(self, client):
        """Test that a body without text fails request validation."""
        response = client.post(ANALYZE_URL, json={})
        assert response.status_code == 422

    def test_analyze_text_lone_surrogate(self, client):
        """Test that text that is not valid Unicode is rejected as a client error."""
        with patch.object(
            analysis_client, "analyze_text", new_callable=AsyncMock
        ) as mock_analyze:
            response = client.post(
                ANALYZE_URL,
                content=b'{"text": "hi \\ud800"}',
                headers={"content-type": "application/json"},
            )

            mock_analyze.assert_not_called()

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail[0]["loc"] == ["body", "text"]
        assert "input" not in detail[0]

    def test_analyze_text_upstream_failure(self, client):
        """Test that a failed submission maps to 502 with error details."""
        with patch.object(
            analysis_client, "analyze_text", new_callable=AsyncMock
        ) as mock_analyze:
            mock_analyze.side_effect = AnalysisHTTPError(500, "boom")

            response = client.post(ANALYZE_URL, json={"text": "text"})

        assert response.status_code == 502
        assert response.json()["detail"] == {
            "kind": "http_status",
            "message": "HTTP 500",
            "status_code": 500,
        }

    def test_analyze_text_superseded(self, client):
        """Test that a submission superseded within its session maps to 409."""
        loading = LoadingState(request_id=2, request=AnalysisRequest(text="newer"))

        with patch.object(
            RequestController, "submit", new_callable=AsyncMock
        ) as mock_submit:
            mock_submit.return_value = loading

            response = client.post(ANALYZE_URL, json={"text": "older"})

        assert response.status_code == 409

    def test_state_endpoint_new_session_is_idle(self, client):
        """Test reading the lifecycle state before any submission."""
        response = client.get(STATE_URL)

        assert response.status_code == 200
        assert response.json() == {"status": "idle"}

    def test_state_endpoint_after_analysis(self, client):
        """Test that a session reads back its own succeeded state."""
        with patch.object(
            analysis_client, "analyze_text", new_callable=AsyncMock
        ) as mock_analyze:
            mock_analyze.return_value = AnalysisResponse.model_validate(SAMPLE_PAYLOAD)
            client.post(ANALYZE_URL, json={"text": "I love it"})

        response = client.get(STATE_URL)

        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "succeeded"
        assert data["request_id"] == 1
        assert [b["percent_text"] for b in data["view"]["detailed_bars"]] == [
            "60.0%",
            "30.0%",
            "10.0%",
        ]

    def test_sessions_are_isolated(self):
        """Test that one caller's submission is invisible to another caller."""
        alice = TestClient(app)
        bob = TestClient(app)

        with patch.object(
            analysis_client, "analyze_text", new_callable=AsyncMock
        ) as mock_analyze:
            mock_analyze.return_value = AnalysisResponse.model_validate(SAMPLE_PAYLOAD)
            response = alice.post(ANALYZE_URL, json={"text": "alice private diary entry"})

        assert response.status_code == 200

        assert bob.get(STATE_URL).json() == {"status": "idle"}
        assert alice.get(STATE_URL).json()["status"] == "succeeded"
