"""
AI Data Models

Dataclasses for chat models, replies and exchanges.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Intent(Enum):
    """What a user message is asking for."""

    DEVICE_QUERY = "device_query"
    JOB_QUERY = "job_query"
    FREEFORM_CHAT = "freeform_chat"


@dataclass(frozen=True)
class ChatModel:
    """A chat model offered by the qBraid API."""

    model: str
    description: str = ""

    @property
    def label(self) -> str:
        return f"{self.model} - {self.description}"


@dataclass
class Reply:
    """
    Display-ready answer to a user message.

    ``text`` is always safe to show. ``error`` carries the underlying failure
    detail when the text is an error message, for logging and diagnostics.
    """

    text: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ChatExchange:
    """One prompt/response pair as shown in the transcript."""

    prompt: str
    model: str | None
    response: str
    error: str | None = None
