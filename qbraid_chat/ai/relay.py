"""
Chat Relay

Sends free-form prompts to the qBraid chat endpoint and collects the
streamed completion.
"""

from __future__ import annotations

import codecs
import logging
import threading
from collections.abc import Iterator

from .client import (
    CHAT_PATH,
    QBraidClient,
    QBraidClientError,
    TransportError,
    status_text,
)
from .models import Reply

logger = logging.getLogger(__name__)


class RelayAborted(QBraidClientError):
    """Raised when a relay call is cancelled through its abort signal."""


class AbortSignal:
    """Cancellation flag for one relay call."""

    def __init__(self):
        self._event = threading.Event()

    def abort(self) -> None:
        self._event.set()

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    def raise_if_aborted(self) -> None:
        if self.aborted:
            raise RelayAborted("Request aborted")


class ChatRelay:
    """Relays a prompt to the chat completion endpoint."""

    def __init__(self, client: QBraidClient):
        self.client = client

    def stream(
        self,
        text: str,
        model: str | None,
        credential: str | None,
        signal: AbortSignal | None = None,
    ) -> Iterator[str]:
        """
        Yield decoded text chunks in arrival order.

        Raises:
            TransportError: On network failure or a non-2xx status
            RelayAborted: If the signal fires
        """
        signal = signal or AbortSignal()
        signal.raise_if_aborted()

        payload = {"prompt": text, "model": model, "stream": True}
        response = self.client.post_stream(CHAT_PATH, credential, payload)

        with response:
            if not response.ok:
                raise TransportError(f"API request failed: {status_text(response)}")

            decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
            for chunk in response.iter_content(chunk_size=None):
                signal.raise_if_aborted()
                if not chunk:
                    continue
                piece = decoder.decode(chunk)
                if piece:
                    yield piece

            tail = decoder.decode(b"", final=True)
            if tail:
                yield tail

    def send_reply(
        self,
        text: str,
        model: str | None,
        credential: str | None,
        signal: AbortSignal | None = None,
    ) -> Reply:
        try:
            content = "".join(self.stream(text, model, credential, signal=signal))
            return Reply(text=content)
        except Exception as e:
            logger.warning("Chat relay failed: %s", e)
            return Reply(text=f"Error: {e}", error=str(e))

    def send(
        self,
        text: str,
        model: str | None,
        credential: str | None,
        signal: AbortSignal | None = None,
    ) -> str:
        """Send a prompt and return the full response, or an "Error: ..." string."""
        return self.send_reply(text, model, credential, signal=signal).text
