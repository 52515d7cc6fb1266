# SPDX-License-Identifier: Apache-2.0
"""Service settings loaded from the environment."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """HTTP service configuration.

    Every field can be overridden with a ``PDF_ANNOTATOR_``-prefixed
    environment variable or a ``.env`` file in the working directory.
    """

    # Comma-separated CORS origins; empty or "*" allows any origin
    allowed_origins: str = "*"

    # Uploads larger than this are rejected with 413
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, gt=0)

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    # Font size used when an annotation does not specify one
    default_font_size: float = Field(default=12.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="PDF_ANNOTATOR_",
        env_file=".env",
        extra="ignore",
    )

    def get_origins_list(self) -> List[str]:
        """Parse comma-separated origins into a list."""
        if not self.allowed_origins:
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


_settings_instance: Optional[ServiceSettings] = None


def get_settings() -> ServiceSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = ServiceSettings()
    return _settings_instance
