"""
Settings Store

Persisted key-value configuration backed by a JSON file. Holds the API key
and the default chat model between sessions.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

API_KEY_SETTING = "qbraidChat.apiKey"
DEFAULT_MODEL_SETTING = "qbraidChat.defaultModel"


class SettingsStore:
    """JSON-file settings with get/update semantics."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Could not read settings file %s: %s", self.path, e)
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring malformed settings file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default."""
        return self._load().get(key, default)

    def update(self, key: str, value: Any) -> None:
        """
        Persist a value. A value of None removes the key.

        The file is rewritten atomically so a crash never leaves half a file.
        """
        data = self._load()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=".settings-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Updated setting %s in %s", key, self.path)
