"""Environment-driven library settings.

Values are loaded from environment variables (prefix ``SEQFILTER_``) or a
``.env`` file in the working directory.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Policy knobs for the transform operations."""

    model_config = SettingsConfigDict(
        env_prefix="SEQFILTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strict_in_place: bool = Field(
        default=True,
        description="Raise on an in-place type mismatch instead of allocating new storage.",
    )


# Module-level singleton, import and use directly.
settings = Settings()


def get_settings() -> Settings:
    """Return the module-level Settings singleton."""
    return settings
