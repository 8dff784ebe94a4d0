"""
qBraid API Client

Thin HTTP layer over the qBraid REST API plus the exception hierarchy
shared by the chat components.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

if TYPE_CHECKING:
    from flask import Flask

logger = logging.getLogger(__name__)

QBRAID_API_BASE = "https://api.qbraid.com/api"

CHAT_PATH = "/chat"
MODELS_PATH = "/chat/models"
DEVICES_PATH = "/quantum-devices"
JOBS_PATH = "/quantum-jobs"


class QBraidClientError(Exception):
    """Base exception for qBraid client errors."""


class AuthError(QBraidClientError):
    """Raised when the API rejects the credential."""


class TransportError(QBraidClientError):
    """Raised on network failures, non-2xx statuses and unreadable bodies."""


class CredentialMissingError(QBraidClientError):
    """Raised when no API key could be resolved."""


def status_text(response: requests.Response) -> str:
    """Human-readable status, e.g. ``Not Found``."""
    return response.reason or str(response.status_code)


class QBraidClient:
    """HTTP client for the qBraid API."""

    def __init__(
        self,
        base_url: str = QBRAID_API_BASE,
        timeout: float | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL, without trailing slash
            timeout: Request timeout in seconds. None waits indefinitely.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def headers(credential: str | None, json_body: bool = False) -> dict[str, str]:
        """Build request headers. The api-key header is omitted without a key."""
        headers: dict[str, str] = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        if credential:
            headers["api-key"] = credential
        return headers

    def get(
        self,
        path: str,
        credential: str | None,
        params: dict[str, Any] | None = None,
    ) -> requests.Response:
        """
        Issue a GET request.

        Raises:
            TransportError: If the request could not be completed
        """
        try:
            return requests.get(
                self.url(path),
                headers=self.headers(credential),
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

    def get_json(
        self,
        path: str,
        credential: str | None,
        params: dict[str, Any] | None = None,
        action: str = "fetch data",
    ) -> Any:
        """
        GET a resource and decode its JSON body.

        Args:
            path: Resource path under the base URL
            credential: API key
            params: Query parameters
            action: Used in error messages, e.g. "fetch devices"

        Raises:
            AuthError: On 401/403
            TransportError: On other non-2xx statuses, network errors or bad JSON
        """
        try:
            response = self.get(path, credential, params=params)
        except TransportError as e:
            raise TransportError(f"Failed to {action}: {e}") from e

        if not response.ok:
            message = f"Failed to {action}: {status_text(response)}"
            if response.status_code in (401, 403):
                raise AuthError(message)
            raise TransportError(message)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Failed to {action}: invalid JSON body") from e

    def post_stream(
        self,
        path: str,
        credential: str | None,
        payload: dict[str, Any],
    ) -> requests.Response:
        """
        POST a JSON payload and return the unread, streaming response.

        The caller owns the response and must close it.

        Raises:
            TransportError: If the request could not be completed
        """
        try:
            return requests.post(
                self.url(path),
                headers=self.headers(credential, json_body=True),
                json=payload,
                stream=True,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e


def client_from_app(app: Flask) -> QBraidClient:
    """Build a client from Flask app config."""
    return QBraidClient(
        base_url=app.config.get("QBRAID_API_BASE", QBRAID_API_BASE),
        timeout=app.config.get("QBRAID_REQUEST_TIMEOUT"),
    )
