"""qBraid chat: a local chat UI for the qBraid quantum API."""

__version__ = "0.1.0"
