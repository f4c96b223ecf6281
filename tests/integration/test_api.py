"""Integration tests for the API."""

import pytest
from fastapi.testclient import TestClient

from admin_assistant.api.middleware import session_id_from_path
from admin_assistant.api.server import create_app
from admin_assistant.config import Settings
from admin_assistant.conversation.service import build_assistant_service
from admin_assistant.exceptions import ConfigurationError, GenerationFailed
from admin_assistant.flows.next_steps import NextStepsResult, SuggestedStep


@pytest.fixture
def service(scripted_provider, fake_catalog):
    settings = Settings(_env_file=None)
    return build_assistant_service(settings, catalog=fake_catalog, provider=scripted_provider)


@pytest.fixture
def client(service) -> TestClient:
    """Create a test client (context manager so the lifespan runs)."""
    app = create_app()
    app.state.assistant = service
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_id(client: TestClient) -> str:
    response = client.post("/v1/sessions")
    return response.json()["session_id"]


class TestHealthEndpoint:
    """Tests for the health endpoint."""

    def test_health_check(self, client: TestClient) -> None:
        """Test health check returns 200 with the startup connection check."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["shop_connected"] is True
        assert "version" in data


class TestSessionEndpoints:
    """Tests for session and message endpoints."""

    def test_create_session(self, client: TestClient) -> None:
        response = client.post("/v1/sessions")

        assert response.status_code == 201
        data = response.json()
        assert data["session_id"]
        assert data["messages"][0]["kind"] == "welcome"
        assert data["messages"][0]["sender"] == "agent"

    def test_submit_message(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"/v1/sessions/{session_id}/messages", json={"text": "show dashboard"}
        )

        assert response.status_code == 200
        messages = response.json()["messages"]
        assert [m["kind"] for m in messages] == [None, "analytics_dashboard"]
        assert messages[1]["payload"]["analytics"]["top_product"] == "Premium Phone Case"

        history = client.get(f"/v1/sessions/{session_id}/messages").json()
        assert [m["id"] for m in history] == [1, 2, 3]

    def test_empty_message_rejected(self, client: TestClient, session_id: str) -> None:
        response = client.post(f"/v1/sessions/{session_id}/messages", json={"text": "  "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Message text or image is required"

    def test_end_session(self, client: TestClient, session_id: str) -> None:
        response = client.delete(f"/v1/sessions/{session_id}")

        assert response.status_code == 204
        assert client.get(f"/v1/sessions/{session_id}/messages").status_code == 404
        assert client.delete(f"/v1/sessions/{session_id}").status_code == 404

    def test_unknown_session(self, client: TestClient) -> None:
        response = client.post("/v1/sessions/missing/messages", json={"text": "hi"})

        assert response.status_code == 404
        assert "missing" in response.json()["detail"]

    def test_flow_failure_is_in_band(
        self, client: TestClient, session_id: str, png_data_uri: str, scripted_provider
    ) -> None:
        """An image the model cannot analyze still returns 200 with an error message."""
        scripted_provider.outputs["analyze_product_image"] = GenerationFailed("no output")
        response = client.post(
            f"/v1/sessions/{session_id}/messages",
            json={"text": "", "image_data_uri": png_data_uri},
        )

        assert response.status_code == 200
        assert response.json()["messages"][-1]["kind"] == "error"


class TestActionEndpoint:
    def test_navigation_action(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"/v1/sessions/{session_id}/actions", json={"action": "show_products"}
        )

        assert response.status_code == 200
        messages = response.json()["messages"]
        assert messages[0]["text"] == "show products"
        assert len(messages[1]["payload"]["products"]) == 5

    def test_commit_without_name_is_notice(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"/v1/sessions/{session_id}/actions", json={"action": "add_product_from_context"}
        )

        data = response.json()
        assert data["messages"] == []
        assert data["notices"][0]["variant"] == "destructive"


class TestShopAndStoreEndpoints:
    def test_shop_status(self, client: TestClient) -> None:
        response = client.get("/v1/shop/status")

        assert response.status_code == 200
        assert response.json()["shop"]["name"] == "Test Shop"

    def test_shop_status_reports_misconfiguration(self, client: TestClient, fake_catalog) -> None:
        fake_catalog.error = ConfigurationError("Shopify shop domain is not configured")

        data = client.get("/v1/shop/status").json()

        assert data["connected"] is False
        assert data["error"] == "Shopify shop domain is not configured"

    def test_store_products(self, client: TestClient) -> None:
        response = client.get("/v1/store/products")

        assert response.status_code == 200
        assert response.json()[0]["name"] == "Wireless Headphones Pro"

    def test_suggestions(self, client: TestClient, scripted_provider) -> None:
        scripted_provider.outputs["suggest_next_steps"] = NextStepsResult(
            suggested_steps=[SuggestedStep(step="Restock cases", reason="Out of stock")]
        )

        response = client.get("/v1/suggestions")

        assert response.status_code == 200
        assert response.json() == [{"step": "Restock cases", "reason": "Out of stock"}]


class TestRequestLogging:
    """Tests for RequestLoggingMiddleware."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/v1/sessions/abc123/messages", "abc123"),
            ("/v1/sessions/abc123", "abc123"),
            ("/v1/sessions", None),
            ("/health", None),
        ],
    )
    def test_session_id_from_path(self, path: str, expected: str | None) -> None:
        assert session_id_from_path(path) == expected

    def test_session_request_headers(self, client: TestClient, session_id: str) -> None:
        response = client.get(
            f"/v1/sessions/{session_id}/messages", headers={"X-Request-ID": "req-7"}
        )

        assert response.headers["X-Request-ID"] == "req-7"
        assert response.headers["X-Session-ID"] == session_id
        assert "X-Processing-Time-Ms" in response.headers

    def test_no_session_header_elsewhere(self, client: TestClient) -> None:
        response = client.get("/health")

        assert "X-Session-ID" not in response.headers
        assert response.headers["X-Request-ID"]
