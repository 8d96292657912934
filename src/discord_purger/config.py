"""Configuration settings for Discord Purger."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError


def _split_ids(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Credentials
    discord_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DISCORD_TOKEN", "discord_token"),
        description="User token sent verbatim as the Authorization header",
    )

    # Target selection
    exclude_targets: str = Field(
        default="",
        validation_alias=AliasChoices("EXCLUDE_TARGETS", "exclude_targets"),
        description="Comma-separated target ids to skip",
    )
    prioritized_targets: str = Field(
        default="",
        validation_alias=AliasChoices("PRIORITIZED_TARGETS", "prioritized_targets"),
        description="Comma-separated target ids to process first",
    )

    # API
    api_base_url: str = Field(
        default="https://discord.com/api/v9", description="Discord REST base URL"
    )
    request_timeout: float | None = Field(
        default=None, description="Per-request timeout in seconds (None disables it)"
    )

    # Pagination and pacing
    search_cap: int = Field(
        default=100, description="Stop paginating once more than this many matches are held"
    )
    delete_delay_ms: int = Field(default=2000, description="Pause after each delete in ms")
    target_delay_ms: int = Field(default=2000, description="Pause between targets in ms")
    retry_after_multiplier_ms: int = Field(
        default=2000, description="Milliseconds slept per retry_after second on 202/429"
    )
    transport_retry_limit: int | None = Field(
        default=None,
        description="Max consecutive search transport failures (None retries forever)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_prefix": "PURGER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def exclude_ids(self) -> list[str]:
        return _split_ids(self.exclude_targets)

    @property
    def prioritized_ids(self) -> list[str]:
        return _split_ids(self.prioritized_targets)


def validate_settings(config: Settings) -> str:
    """Check the settings a run cannot start without.

    Args:
        config: Loaded settings

    Returns:
        The Discord token

    Raises:
        ConfigurationError: If DISCORD_TOKEN is missing or blank
    """
    if not config.discord_token or not config.discord_token.strip():
        raise ConfigurationError("Missing DISCORD_TOKEN")
    return config.discord_token


# Global settings instance
settings = Settings()
