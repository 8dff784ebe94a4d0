"""
Credential Resolver

Locates the qBraid API key. Sources are tried in order and the first
non-empty value wins:

1. the persisted ``qbraidChat.apiKey`` setting
2. the ``api_key`` / ``api-key`` entry of ``~/.qbraid/qbraidrc``
3. an interactive prompt
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from pathlib import Path

import click

from qbraid_chat.settings_store import API_KEY_SETTING, SettingsStore

logger = logging.getLogger(__name__)

API_KEY_PROMPT = "Enter your qBraid API key"

_RC_API_KEY_PATTERN = re.compile(
    r"api[_-]key[ \t]*[=:]\s*[\"']?([^\"'\s]+)[\"']?", re.IGNORECASE
)


def default_rc_path() -> Path:
    return Path.home() / ".qbraid" / "qbraidrc"


def read_rc_api_key(rc_path: str | os.PathLike) -> str | None:
    """Extract the API key from a qbraidrc file. Read failures count as not found."""
    path = Path(rc_path)
    try:
        if not path.exists():
            return None
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Error reading qbraidrc at %s: %s", path, e)
        return None

    match = _RC_API_KEY_PATTERN.search(content)
    return match.group(1) if match else None


def prompt_for_api_key() -> str | None:
    """Ask for the key on the terminal with hidden input. None if cancelled."""
    try:
        value = click.prompt(
            API_KEY_PROMPT,
            hide_input=True,
            default="",
            show_default=False,
        )
    except (click.Abort, EOFError):
        return None
    return value.strip() or None


class CredentialResolver:
    """Resolve an API key from settings, the qbraidrc file, or a prompt."""

    def __init__(
        self,
        settings: SettingsStore,
        rc_path: str | os.PathLike | None = None,
        prompt: Callable[[], str | None] | None = prompt_for_api_key,
    ):
        """
        Args:
            settings: Persisted settings holding qbraidChat.apiKey
            rc_path: qbraidrc location, defaults to ~/.qbraid/qbraidrc
            prompt: Interactive fallback. None disables prompting.
        """
        self.settings = settings
        self.rc_path = Path(rc_path) if rc_path else default_rc_path()
        self.prompt = prompt

    def resolve(self) -> str | None:
        api_key = self.settings.get(API_KEY_SETTING)
        if api_key:
            logger.debug("Using API key from settings")
            return api_key

        api_key = read_rc_api_key(self.rc_path)
        if api_key:
            logger.debug("Using API key from %s", self.rc_path)
            return api_key

        if self.prompt is None:
            return None
        return self.prompt() or None
