"""
Chat Blueprint

The chat page and the JSON message protocol it speaks.

Endpoints:
- GET / - Chat page with model picker and transcript
- POST /api/chat/message - sendMessage / changeModel commands
- POST /api/settings/api-key - Persist the qBraid API key
"""

import logging

from flask import Blueprint, current_app, jsonify, render_template, request

from qbraid_chat.settings_store import API_KEY_SETTING, DEFAULT_MODEL_SETTING

logger = logging.getLogger(__name__)

chat_bp = Blueprint("chat", __name__)

MAX_MESSAGE_LENGTH = 32000

SUGGESTIONS = [
    "What quantum devices available through qBraid are currently online and available?",
    "What is the status of the most recent quantum job I submitted to the qBraid QIR simulator?",
]


def get_chat_session():
    """The session attached by the start command, if any."""
    return current_app.extensions.get("chat_session")


def get_settings_store():
    return current_app.extensions["settings_store"]


def _session_unavailable():
    return (
        jsonify(
            {
                "error": "Chat session not started. "
                "Run the start command with a qBraid API key configured."
            }
        ),
        503,
    )


# =============================================================================
# Page
# =============================================================================


@chat_bp.route("/")
def chat_page():
    """Render the chat page for the running session."""
    session = get_chat_session()
    if session is None:
        return _session_unavailable()

    return render_template(
        "chat.html",
        models=session.models,
        selected_model=session.selected_model,
        suggestions=SUGGESTIONS,
    )


# =============================================================================
# API Routes
# =============================================================================


def _handle_send_message(data, session):
    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        return jsonify({"error": "Message text is required"}), 400
    if len(text) > MAX_MESSAGE_LENGTH:
        return (
            jsonify(
                {"error": f"Message too long. Maximum {MAX_MESSAGE_LENGTH} characters."}
            ),
            400,
        )

    model = data.get("model") or None

    from qbraid_chat.ai import get_chat_service

    service = get_chat_service()
    if service is None:
        return jsonify({"error": "Chat service not available."}), 503

    exchange = service.exchange(text, model, session.credential)
    if exchange.error:
        logger.info("Message answered with error reply: %s", exchange.error)

    return jsonify({"command": "receiveMessage", "text": exchange.response})


def _handle_change_model(data, session):
    model = data.get("model")
    if not isinstance(model, str) or not model:
        return jsonify({"error": "Model is required"}), 400

    get_settings_store().update(DEFAULT_MODEL_SETTING, model)
    session.default_model = model
    logger.info("Default model changed to %s", model)

    return jsonify({"command": "modelChanged", "model": model})


_COMMANDS = {
    "sendMessage": _handle_send_message,
    "changeModel": _handle_change_model,
}


@chat_bp.route("/api/chat/message", methods=["POST"])
def api_chat_message():
    """
    Handle one message from the chat page.

    Request (JSON):
        - command: "sendMessage" or "changeModel"
        - text: User message (sendMessage)
        - model: Selected model id

    Response:
        - sendMessage: {"command": "receiveMessage", "text": ...}
        - changeModel: {"command": "modelChanged", "model": ...}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON body required"}), 400

    handler = _COMMANDS.get(data.get("command"))
    if handler is None:
        return jsonify({"error": f"Unknown command: {data.get('command')}"}), 400

    session = get_chat_session()
    if session is None:
        return _session_unavailable()

    try:
        return handler(data, session)
    except OSError as e:
        logger.exception(f"Failed to persist settings: {e}")
        return jsonify({"error": "Could not save settings"}), 500


@chat_bp.route("/api/settings/api-key", methods=["POST"])
def api_set_api_key():
    """
    Persist the qBraid API key.

    Request (JSON):
        - api_key: The key to store (required)
    """
    data = request.get_json(silent=True) or {}
    api_key = data.get("api_key")
    if not isinstance(api_key, str) or not api_key.strip():
        return jsonify({"error": "api_key is required"}), 400

    try:
        get_settings_store().update(API_KEY_SETTING, api_key.strip())
    except OSError as e:
        logger.exception(f"Failed to persist API key: {e}")
        return jsonify({"error": "Could not save settings"}), 500

    return jsonify({"success": True, "message": "API key saved successfully"})
