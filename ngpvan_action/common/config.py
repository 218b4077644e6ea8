"""Project configuration and per-organization config lookup.

Loads HTTP settings from config/settings.yaml and environment variables.
Credentials are resolved per organization: an organization's `features`
override the process environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class HttpSettings(BaseModel):
    """Settings for outbound HTTP requests."""
    timeout_seconds: float = 30.0
    retries: int = Field(default=0, ge=0)
    backoff_base: float = 2.0
    user_agent: str = "ngpvan-action/0.1"


class Settings(BaseModel):
    """Top-level application settings."""
    http: HttpSettings = Field(default_factory=HttpSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        HTTP_REQUEST_TIMEOUT and HTTP_REQUEST_RETRIES override the file.
        """
        settings_path = path or CONFIG_DIR / "settings.yaml"
        data: dict[str, Any] = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        loaded = cls(**data)

        if timeout := os.getenv("HTTP_REQUEST_TIMEOUT"):
            loaded.http.timeout_seconds = float(timeout)
        if retries := os.getenv("HTTP_REQUEST_RETRIES"):
            loaded.http.retries = int(retries)
        return loaded


def get_config(key: str, organization: Any = None, default: Any = None) -> Any:
    """Resolve a config value for an organization.

    Lookup order: organization features, process environment, `default`.
    Empty strings count as unset.

    Args:
        key: Config name, e.g. "NGP_VAN_API_KEY".
        organization: Object with a `features` mapping, or None.
        default: Returned when nothing else resolves.

    Returns:
        The resolved value.
    """
    features = getattr(organization, "features", None) or {}
    value = features.get(key)
    if value not in (None, ""):
        return value

    value = os.getenv(key)
    if value not in (None, ""):
        return value

    return default


# Singleton settings instance
settings = Settings.load()
