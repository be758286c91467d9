"""Configuration management using Pydantic Settings."""

from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

# Config file location
CONFIG_PATH = Path.home() / ".config" / "ghgate" / "config.yaml"

KNOWN_PROVIDERS = ("gh", "gcm")


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML config file."""

    def get_field_value(
        self, field: Any, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get field value from YAML config."""
        config = load_config()
        if field_name in config:
            return config[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all config values."""
        return load_config()


def validate_target(target: str | None) -> str:
    """Validate a credential target URL.

    Args:
        target: Target URL, e.g. 'https://github.com'

    Returns:
        Normalized target without trailing slash

    Raises:
        ValueError: If the target is not an https URL with a host
    """
    if not target:
        raise ValueError("Credential target cannot be empty")

    parsed = urlparse(target)
    if parsed.scheme != "https" or not parsed.hostname:
        raise ValueError(f"Invalid credential target: {target}")

    return target.rstrip("/").lower()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GHGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    target: str = Field(
        default="https://github.com",
        description="Credential target the token is stored under",
    )
    credential_namespace: str = Field(
        default="git",
        description="Credential store namespace (Git Credential Manager uses 'git')",
    )
    api_url: str = Field(
        default="https://api.github.com/graphql",
        description="GitHub GraphQL endpoint",
    )
    timeout: int = Field(default=30, ge=5, le=120, description="HTTP timeout in seconds")
    product_name: str = Field(default="ghgate", description="Product name for User-Agent")
    product_version: str = Field(default="0.1.0", description="Product version for User-Agent")
    reauth_providers: list[str] = Field(
        default_factory=lambda: list(KNOWN_PROVIDERS),
        description="Re-authentication providers to try, in order",
    )

    @field_validator("target", mode="after")
    @classmethod
    def check_target(cls, v: str) -> str:
        """Only https targets with a host are accepted."""
        return validate_target(v)

    @field_validator("reauth_providers", mode="after")
    @classmethod
    def check_providers(cls, v: list[str]) -> list[str]:
        """Reject unknown provider names."""
        unknown = [p for p in v if p not in KNOWN_PROVIDERS]
        if unknown:
            raise ValueError(f"Unknown re-authentication providers: {', '.join(unknown)}")
        return v

    @property
    def hostname(self) -> str:
        """Host name of the credential target."""
        return urlparse(self.target).hostname or ""

    @property
    def user_agent(self) -> str:
        """User-Agent header value."""
        return f"{self.product_name}/{self.product_version}"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources - priority: env > yaml > defaults."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
        )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None


def load_config() -> dict[str, Any]:
    """Load config from YAML file.

    Returns:
        Dictionary of config values, empty dict if file doesn't exist or is invalid.
    """
    if not CONFIG_PATH.exists():
        return {}
    try:
        with open(CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError:
        return {}
