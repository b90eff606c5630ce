"""Application configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    Settings are loaded in this priority order (highest to lowest):
    1. Environment variables (prefixed with ``APIDOC_``)
    2. .env file (for local development)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="APIDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Comment parsing
    # =========================================================================
    normalize: bool = Field(
        default=True,
        description="Trim each line of extracted comment content",
    )
    preserve_raw_inline_comments: bool = Field(
        default=False,
        description="Keep <see>, <seealso> and <paramref> markup as written",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = "INFO"


settings = Settings()
