"""Configuration management with pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HarsnipSettings(BaseSettings):
    """harsnip application settings loaded from environment variables.

    All settings use the HARSNIP_ prefix for environment variables.
    """

    # Logging configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="console",
        description="Log output format: console or json",
    )

    # Conversion defaults used by the CLI
    default_target: str = Field(
        default="shell",
        description="Target used when --target is not given",
    )
    default_client: str | None = Field(
        default=None,
        description="Client used when --client is not given (target default if unset)",
    )
    indent: str | None = Field(
        default=None,
        description="Indentation unit passed to renderers (renderer default if unset)",
    )

    model_config = SettingsConfigDict(
        env_prefix="HARSNIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def renderer_options(self) -> dict[str, str]:
        """Get renderer options derived from settings.

        Returns:
            Options dict, empty when no renderer-relevant settings are set.
        """
        options: dict[str, str] = {}
        if self.indent is not None:
            options["indent"] = self.indent
        return options


# Global settings instance
_settings: HarsnipSettings | None = None


def get_settings() -> HarsnipSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = HarsnipSettings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None
