"""Environment-driven configuration.

Values are read from the process environment on every call so tests can
override them with ``monkeypatch.setenv``. A ``.env`` file in the working
directory is loaded once at import time.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_GITHUB_API_URL = "https://api.github.com"


def get_github_api_url() -> str:
    """Return the GitHub REST API base URL without a trailing slash."""
    return os.getenv("GITHUB_API_URL", DEFAULT_GITHUB_API_URL).rstrip("/")


def get_cors_origins() -> list[str]:
    """Return allowed CORS origins from ``PORTFOLIO_CORS_ORIGINS`` (comma separated)."""
    raw = os.getenv("PORTFOLIO_CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]
