"""Batching configuration."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults used when a batcher is built without explicit options."""

    model_config = SettingsConfigDict(env_prefix="CALLBATCH_")

    # Seconds to wait after the first call of a cycle before flushing
    default_interval: float = Field(default=0.0, ge=0, allow_inf_nan=False)

    # Calls accepted per cycle before a forced flush; None is unbounded
    default_limit: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)


settings = Settings()


def get_settings() -> Settings:
    """Get the process-wide settings."""
    return settings
