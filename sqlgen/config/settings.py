"""Generator configuration settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeneratorSettings(BaseSettings):
    """Process-level defaults, read from SQLGEN_* environment variables."""

    log_level: str = Field(default="INFO", description="Logging level for scripts")
    version: str = Field(
        default="",
        description="Version written in generated headers when the request has none",
    )
    default_engine: str = Field(
        default="postgresql",
        description="Engine used when request settings leave it empty",
    )

    model_config = SettingsConfigDict(
        env_prefix="SQLGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_generator_settings() -> GeneratorSettings:
    """Get cached generator settings."""
    return GeneratorSettings()
