"""Pytest configuration and shared fixtures."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def make_response():
    """Build a fake requests.Response."""

    def _make(json_data=None, status_code=200, reason="OK", chunks=None, json_error=None):
        response = MagicMock()
        response.status_code = status_code
        response.reason = reason
        response.ok = 200 <= status_code < 300
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = json_data
        response.iter_content.return_value = iter(chunks or [])
        return response

    return _make


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings.json"


@pytest.fixture
def settings(settings_path):
    from qbraid_chat.settings_store import SettingsStore

    return SettingsStore(settings_path)


@pytest.fixture
def chat_session():
    from qbraid_chat.ai import ChatModel, ChatSession

    return ChatSession(
        credential="test-key",
        models=[
            ChatModel(model="gpt-4o-mini", description="Fast and cheap"),
            ChatModel(model="claude-3-sonnet", description="Balanced"),
        ],
        default_model="claude-3-sonnet",
    )


@pytest.fixture
def config_class(tmp_path, settings_path):
    """TestingConfig pointed at per-test files."""
    from qbraid_chat.config import TestingConfig

    class _Config(TestingConfig):
        QBRAID_CHAT_SETTINGS_PATH = str(settings_path)
        QBRAID_RC_PATH = str(tmp_path / "qbraidrc")

    return _Config


@pytest.fixture(scope="function")
def app(config_class, chat_session):
    """Create test Flask app with a started chat session."""
    from qbraid_chat.app import create_app

    app = create_app(config_class, chat_session=chat_session)
    app.config["TESTING"] = True
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
