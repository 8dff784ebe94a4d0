"""Main Flask application."""

from __future__ import annotations

import logging

import click
from flask import Flask, jsonify

from qbraid_chat import __version__
from qbraid_chat.ai import (
    ChatSession,
    CredentialMissingError,
    CredentialResolver,
    ModelCatalogFetcher,
    QBraidClientError,
    init_chat_service,
    start_chat_session,
)
from qbraid_chat.ai.client import client_from_app
from qbraid_chat.ai.credentials import API_KEY_PROMPT
from qbraid_chat.blueprints.chat import chat_bp
from qbraid_chat.config import Config
from qbraid_chat.settings_store import API_KEY_SETTING, SettingsStore
from qbraid_chat.time_utils import use_system_locale

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def attach_chat_session(app: Flask, session: ChatSession | None) -> None:
    """Hand a started session to the app; the UI reads it per request."""
    app.extensions["chat_session"] = session


def launch_chat_session(app: Flask) -> ChatSession:
    """
    Start a chat session for the app.

    Raises:
        click.ClickException: If no API key is available or models can't be fetched
    """
    settings = app.extensions["settings_store"]
    resolver = CredentialResolver(settings, rc_path=app.config["QBRAID_RC_PATH"])
    fetcher = ModelCatalogFetcher(client_from_app(app))

    try:
        session = start_chat_session(resolver, fetcher, settings)
    except CredentialMissingError as e:
        raise click.ClickException(str(e)) from e
    except QBraidClientError as e:
        logger.error("Chat session failed to start: %s", e)
        raise click.ClickException(str(e)) from e

    attach_chat_session(app, session)
    return session


def create_app(
    config_class: type = Config,
    chat_session: ChatSession | None = None,
) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    app.extensions["settings_store"] = SettingsStore(
        app.config["QBRAID_CHAT_SETTINGS_PATH"]
    )
    attach_chat_session(app, chat_session)

    # Initialize chat service
    init_chat_service(app)

    # Register blueprints
    app.register_blueprint(chat_bp)

    @app.route("/health")
    def health_check():
        """Health check endpoint."""
        return jsonify(
            {
                "status": "healthy",
                "version": __version__,
                "session_started": app.extensions.get("chat_session") is not None,
            }
        )

    # Register CLI commands
    @app.cli.command("start")
    @click.option("--host", default=None, help="Interface to bind the chat UI to.")
    @click.option("--port", type=int, default=None, help="Port for the chat UI.")
    def start_command(host, port):
        """Resolve the API key, fetch models and serve the chat UI."""
        logging.basicConfig(level=app.config["LOG_LEVEL"], format=LOG_FORMAT)
        use_system_locale()
        launch_chat_session(app)
        app.run(
            host=host or app.config["QBRAID_CHAT_HOST"],
            port=port or app.config["QBRAID_CHAT_PORT"],
            debug=app.config.get("DEBUG", False),
            use_reloader=False,
        )

    @app.cli.command("set-api-key")
    def set_api_key_command():
        """Prompt for the qBraid API key and save it."""
        api_key = click.prompt(
            API_KEY_PROMPT, hide_input=True, default="", show_default=False
        ).strip()
        if not api_key:
            click.echo("No API key entered; nothing saved.")
            return

        app.extensions["settings_store"].update(API_KEY_SETTING, api_key)
        click.echo("API key saved successfully")

    return app


if __name__ == "__main__":
    app = create_app()
    logging.basicConfig(level=app.config["LOG_LEVEL"], format=LOG_FORMAT)
    use_system_locale()
    try:
        launch_chat_session(app)
    except click.ClickException as e:
        e.show()
        raise SystemExit(e.exit_code) from e
    app.run(
        host=app.config["QBRAID_CHAT_HOST"],
        port=app.config["QBRAID_CHAT_PORT"],
        debug=app.config.get("DEBUG", False),
        use_reloader=False,
    )
