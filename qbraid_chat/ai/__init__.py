"""
AI Module

qBraid API client, message routing and chat session start-up.

Usage:
    from qbraid_chat.ai import ChatOrchestrator, QBraidClient

    orchestrator = ChatOrchestrator(QBraidClient())
    reply = orchestrator.answer(
        "Which qBraid devices are online?", model=None, credential=api_key
    )

    # Start a session the way the CLI does
    from qbraid_chat.ai import CredentialResolver, ModelCatalogFetcher
    session = start_chat_session(resolver, ModelCatalogFetcher(client), settings)
"""

from .catalog import ModelCatalogFetcher
from .chat_service import (
    ChatOrchestrator,
    ChatSession,
    get_chat_service,
    init_chat_service,
    start_chat_session,
)
from .client import (
    AuthError,
    CredentialMissingError,
    QBraidClient,
    QBraidClientError,
    TransportError,
)
from .credentials import CredentialResolver
from .intents import classify
from .models import ChatExchange, ChatModel, Intent, Reply
from .relay import AbortSignal, ChatRelay, RelayAborted
from .reporters import DeviceStatusReporter, JobStatusReporter, format_pricing

__all__ = [
    # Models
    "ChatExchange",
    "ChatModel",
    "Intent",
    "Reply",
    # Client
    "QBraidClient",
    # Exceptions
    "QBraidClientError",
    "AuthError",
    "TransportError",
    "CredentialMissingError",
    "RelayAborted",
    # Components
    "CredentialResolver",
    "ModelCatalogFetcher",
    "classify",
    "DeviceStatusReporter",
    "JobStatusReporter",
    "format_pricing",
    "AbortSignal",
    "ChatRelay",
    # Chat service
    "ChatOrchestrator",
    "ChatSession",
    "get_chat_service",
    "init_chat_service",
    "start_chat_session",
]
