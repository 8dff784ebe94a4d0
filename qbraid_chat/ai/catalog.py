"""Model catalog: the chat models the API currently offers."""

from __future__ import annotations

import logging

from .client import MODELS_PATH, QBraidClient
from .models import ChatModel

logger = logging.getLogger(__name__)


class ModelCatalogFetcher:
    """Fetches the chat model list."""

    def __init__(self, client: QBraidClient):
        self.client = client

    def fetch(self, credential: str | None) -> list[ChatModel]:
        """
        Fetch the available models.

        A JSON body that is not a list yields an empty catalog.

        Raises:
            AuthError: If the credential is rejected
            TransportError: On network failure, other non-2xx, or a non-JSON body
        """
        data = self.client.get_json(MODELS_PATH, credential, action="fetch models")

        if not isinstance(data, list):
            logger.warning("Model list response was not an array; using no models")
            return []

        models = [
            ChatModel(
                model=str(entry.get("model") or ""),
                description=str(entry.get("description", "") or ""),
            )
            for entry in data
            if isinstance(entry, dict)
        ]
        logger.info("Fetched %d chat models", len(models))
        return models
