"""
Tests for Chat Blueprint

Tests cover:
- GET / chat page
- POST /api/chat/message commands
- POST /api/settings/api-key
- Error handling without a session
"""

from unittest.mock import MagicMock, patch

import pytest

from qbraid_chat.ai import ChatExchange
from qbraid_chat.settings_store import API_KEY_SETTING, DEFAULT_MODEL_SETTING


class TestChatPage:
    """Tests for the chat page."""

    def test_renders_models(self, client):
        response = client.get("/")

        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert "gpt-4o-mini - Fast and cheap" in html
        assert "claude-3-sonnet - Balanced" in html

    def test_default_model_selected(self, client):
        html = client.get("/").get_data(as_text=True)

        assert '<option value="claude-3-sonnet" selected>' in html
        assert '<option value="gpt-4o-mini" >' in html

    def test_unknown_default_selects_nothing(self, client, chat_session):
        chat_session.default_model = "retired-model"

        html = client.get("/").get_data(as_text=True)

        assert " selected>" not in html

    def test_suggestions_shown(self, client):
        html = client.get("/").get_data(as_text=True)

        assert "Try asking about:" in html
        assert "currently online and available?" in html

    def test_no_session(self, config_class):
        from qbraid_chat.app import create_app

        app = create_app(config_class)

        response = app.test_client().get("/")

        assert response.status_code == 503


class TestSendMessage:
    """Tests for the sendMessage command."""

    def test_requires_json_body(self, client):
        response = client.post("/api/chat/message")

        assert response.status_code == 400
        assert "JSON body required" in response.get_json()["error"]

    def test_unknown_command(self, client):
        response = client.post("/api/chat/message", json={"command": "dance"})

        assert response.status_code == 400
        assert "Unknown command" in response.get_json()["error"]

    def test_requires_text(self, client):
        response = client.post(
            "/api/chat/message", json={"command": "sendMessage", "text": "  "}
        )

        assert response.status_code == 400

    def test_rejects_long_message(self, client):
        response = client.post(
            "/api/chat/message",
            json={"command": "sendMessage", "text": "x" * 33000},
        )

        assert response.status_code == 400

    @patch("qbraid_chat.ai.client.requests.get")
    def test_device_query(self, mock_get, client, make_response):
        mock_get.return_value = make_response([])

        response = client.post(
            "/api/chat/message",
            json={
                "command": "sendMessage",
                "text": "Which qBraid devices are online?",
                "model": "gpt-4o-mini",
            },
        )

        assert response.status_code == 200
        assert response.get_json() == {
            "command": "receiveMessage",
            "text": "No devices are currently available.",
        }
        assert mock_get.call_args.kwargs["headers"] == {"api-key": "test-key"}

    @patch("qbraid_chat.ai.client.requests.post")
    def test_freeform_chat(self, mock_post, client, make_response):
        mock_post.return_value = make_response(chunks=[b"A qubit ", b"is..."])

        response = client.post(
            "/api/chat/message",
            json={
                "command": "sendMessage",
                "text": "What is a qubit?",
                "model": "gpt-4o-mini",
            },
        )

        assert response.get_json()["text"] == "A qubit is..."
        assert mock_post.call_args.kwargs["json"]["model"] == "gpt-4o-mini"

    @patch("qbraid_chat.ai.client.requests.post")
    def test_relay_failure_still_replies(self, mock_post, client, make_response):
        mock_post.return_value = make_response(status_code=503, reason="Service Unavailable")

        response = client.post(
            "/api/chat/message",
            json={"command": "sendMessage", "text": "hello"},
        )

        assert response.status_code == 200
        assert response.get_json()["text"] == (
            "Error: API request failed: Service Unavailable"
        )

    def test_replies_from_exchange(self, client):
        service = MagicMock()
        service.exchange.return_value = ChatExchange(
            prompt="hello", model="gpt-4o-mini", response="Error: boom", error="boom"
        )

        with patch("qbraid_chat.ai.get_chat_service", return_value=service):
            response = client.post(
                "/api/chat/message",
                json={"command": "sendMessage", "text": "hello", "model": "gpt-4o-mini"},
            )

        service.exchange.assert_called_once_with("hello", "gpt-4o-mini", "test-key")
        assert response.get_json() == {"command": "receiveMessage", "text": "Error: boom"}

    def test_no_session(self, config_class):
        from qbraid_chat.app import create_app

        app = create_app(config_class)

        response = app.test_client().post(
            "/api/chat/message", json={"command": "sendMessage", "text": "hi"}
        )

        assert response.status_code == 503


class TestChangeModel:
    """Tests for the changeModel command."""

    def test_persists_default_model(self, client, settings, chat_session):
        response = client.post(
            "/api/chat/message",
            json={"command": "changeModel", "model": "gpt-4o-mini"},
        )

        assert response.status_code == 200
        assert response.get_json() == {"command": "modelChanged", "model": "gpt-4o-mini"}
        assert settings.get(DEFAULT_MODEL_SETTING) == "gpt-4o-mini"
        assert chat_session.selected_model == "gpt-4o-mini"

    def test_requires_model(self, client):
        response = client.post("/api/chat/message", json={"command": "changeModel"})

        assert response.status_code == 400


class TestSetApiKey:
    """Tests for POST /api/settings/api-key."""

    def test_saves_key(self, client, settings):
        response = client.post("/api/settings/api-key", json={"api_key": " new-key "})

        assert response.status_code == 200
        assert response.get_json()["message"] == "API key saved successfully"
        assert settings.get(API_KEY_SETTING) == "new-key"

    @pytest.mark.parametrize("body", [{}, {"api_key": ""}, {"api_key": 42}])
    def test_rejects_missing_key(self, client, body):
        response = client.post("/api/settings/api-key", json=body)

        assert response.status_code == 400


class TestHealth:
    """Tests for /health."""

    def test_health(self, client):
        data = client.get("/health").get_json()

        assert data["status"] == "healthy"
        assert data["session_started"] is True
