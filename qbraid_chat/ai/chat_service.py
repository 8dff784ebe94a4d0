"""
Chat Service

Routes each user message to the device reporter, the job reporter, or
the streamed chat relay, and owns chat session start-up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from qbraid_chat.settings_store import DEFAULT_MODEL_SETTING, SettingsStore

from .catalog import ModelCatalogFetcher
from .client import CredentialMissingError, QBraidClient, client_from_app
from .intents import classify
from .models import ChatExchange, ChatModel, Intent, Reply
from .relay import ChatRelay
from .reporters import DeviceStatusReporter, JobStatusReporter

if TYPE_CHECKING:
    from flask import Flask

    from .credentials import CredentialResolver

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL_MESSAGE = "Please set your qBraid API key first"


class ChatOrchestrator:
    """
    Answers chat messages.

    Device and job questions are served from the structured endpoints;
    everything else goes to the chat completion endpoint with the
    selected model.
    """

    def __init__(
        self,
        client: QBraidClient | None = None,
        device_reporter: DeviceStatusReporter | None = None,
        job_reporter: JobStatusReporter | None = None,
        relay: ChatRelay | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            client: Shared HTTP client. A default client is built if omitted.
            device_reporter: Overrides the default DeviceStatusReporter.
            job_reporter: Overrides the default JobStatusReporter.
            relay: Overrides the default ChatRelay.
        """
        self.client = client or QBraidClient()
        self.device_reporter = device_reporter or DeviceStatusReporter(self.client)
        self.job_reporter = job_reporter or JobStatusReporter(self.client)
        self.relay = relay or ChatRelay(self.client)

    def respond(self, text: str, model: str | None, credential: str | None) -> Reply:
        intent = classify(text)
        logger.debug("Classified message as %s", intent.value)

        if intent is Intent.DEVICE_QUERY:
            return self.device_reporter.fetch_reply(credential)
        if intent is Intent.JOB_QUERY:
            return self.job_reporter.fetch_reply(credential)
        return self.relay.send_reply(text, model, credential)

    def answer(self, text: str, model: str | None, credential: str | None) -> str:
        """Answer one message. Always returns displayable text."""
        return self.respond(text, model, credential).text

    def exchange(
        self, text: str, model: str | None, credential: str | None
    ) -> ChatExchange:
        """Answer one message and pair the reply with its prompt for the UI."""
        reply = self.respond(text, model, credential)
        return ChatExchange(
            prompt=text,
            model=model,
            response=reply.text,
            error=reply.error,
        )


@dataclass
class ChatSession:
    """State for one running chat: the key, the fetched models, the default model."""

    credential: str
    models: list[ChatModel] = field(default_factory=list)
    default_model: str | None = None

    @property
    def model_ids(self) -> list[str]:
        return [m.model for m in self.models]

    @property
    def selected_model(self) -> str | None:
        """The default model if the catalog offers it, else no selection."""
        if self.default_model and self.default_model in self.model_ids:
            return self.default_model
        return None

    def replace_models(self, models: list[ChatModel]) -> None:
        self.models = list(models)


def start_chat_session(
    resolver: CredentialResolver,
    fetcher: ModelCatalogFetcher,
    settings: SettingsStore,
) -> ChatSession:
    """
    Resolve the credential and fetch the model catalog.

    Raises:
        CredentialMissingError: If no API key is available
        AuthError: If the model fetch is rejected
        TransportError: If the model fetch fails
    """
    credential = resolver.resolve()
    if not credential:
        raise CredentialMissingError(MISSING_CREDENTIAL_MESSAGE)

    session = ChatSession(
        credential=credential,
        default_model=settings.get(DEFAULT_MODEL_SETTING),
    )
    session.replace_models(fetcher.fetch(credential))
    logger.info(
        "Chat session started with %d models (selected: %s)",
        len(session.models),
        session.selected_model,
    )
    return session


# Module-level service instance
_chat_service: ChatOrchestrator | None = None


def get_chat_service() -> ChatOrchestrator | None:
    """Get the configured chat orchestrator singleton."""
    return _chat_service


def init_chat_service(app: Flask) -> ChatOrchestrator:
    """
    Initialize the chat orchestrator from Flask app config.

    Args:
        app: Flask application instance

    Returns:
        Configured ChatOrchestrator
    """
    global _chat_service

    _chat_service = ChatOrchestrator(client=client_from_app(app))
    logger.info(
        "Chat service initialized (api base: %s)", _chat_service.client.base_url
    )
    return _chat_service
