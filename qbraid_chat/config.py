"""Application configuration."""

import os


def _optional_float(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else None


class Config:
    """Base configuration."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key-change-in-production")
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # qBraid API
    QBRAID_API_BASE = os.environ.get("QBRAID_API_BASE", "https://api.qbraid.com/api")
    # No timeout unless configured; requests then waits on the transport
    QBRAID_REQUEST_TIMEOUT = _optional_float("QBRAID_REQUEST_TIMEOUT")

    # Credential sources
    QBRAID_RC_PATH = os.environ.get(
        "QBRAID_RC_PATH",
        os.path.join(os.path.expanduser("~"), ".qbraid", "qbraidrc"),
    )
    QBRAID_CHAT_SETTINGS_PATH = os.environ.get(
        "QBRAID_CHAT_SETTINGS_PATH",
        os.path.join(os.path.expanduser("~"), ".qbraid-chat", "settings.json"),
    )

    # Local UI server
    QBRAID_CHAT_HOST = os.environ.get("QBRAID_CHAT_HOST", "127.0.0.1")
    QBRAID_CHAT_PORT = int(os.environ.get("QBRAID_CHAT_PORT", "5050"))


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    QBRAID_API_BASE = "https://api.test.qbraid.invalid/api"
    QBRAID_REQUEST_TIMEOUT = None
    # Tests point these at tmp_path
    QBRAID_RC_PATH = os.path.join(os.devnull, "qbraidrc")
    QBRAID_CHAT_SETTINGS_PATH = os.path.join(os.devnull, "settings.json")
