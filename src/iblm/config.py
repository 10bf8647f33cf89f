"""Configuration management for iblm.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "IBLMConfig",
    "LLMSettings",
    "LoggingSettings",
    "PipelineSettings",
    "RedisSettings",
]


class LLMSettings(BaseSettings):
    """Content generation provider settings."""

    model_config = SettingsConfigDict(
        env_prefix="IBLM_LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: str = "openai"  # "openai" or "anthropic"
    api_key: SecretStr | None = None
    model: str = "gpt-4o-mini"
    image_model: str = "gpt-image-1"
    image_size: str = "1024x1024"


class RedisSettings(BaseSettings):
    """Redis connection settings (optional).

    If url is not configured or connection fails, caching will be disabled.
    """

    model_config = SettingsConfigDict(
        env_prefix="IBLM_REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str | None = None
    enabled: bool = True  # Can be explicitly disabled
    ttl_seconds: int = 86400


class LoggingSettings(BaseSettings):
    """Log output settings, read once when iblm is first imported."""

    model_config = SettingsConfigDict(
        env_prefix="IBLM_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    json_output: bool = False


class PipelineSettings(BaseSettings):
    """Look-ahead buffer and hydration settings."""

    model_config = SettingsConfigDict(
        env_prefix="IBLM_PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    batch_size: int = 3
    lookahead: int = 3  # current item plus the next two
    extend_margin: int = 2
    asset_max_attempts: int = 2
    initial_seed_topic: str = "Surprise me!"
    fallback_seed_topic: str = "Learning"
    tick_interval_seconds: float = 1.0


class IBLMConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = IBLMConfig()
        lookahead = config.pipeline.lookahead
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    llm: LLMSettings = LLMSettings()
    redis: RedisSettings = RedisSettings()
    pipeline: PipelineSettings = PipelineSettings()

    @property
    def redis_enabled(self) -> bool:
        """Check if Redis caching is enabled and configured."""
        return self.redis.enabled and self.redis.url is not None
