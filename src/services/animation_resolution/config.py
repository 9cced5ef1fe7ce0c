"""
Animation Resolution Service Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ASSET_DELIVERY_URL = "https://assetdelivery.roblox.com/v2/assetId/{asset_id}"
DEFAULT_USER_AGENT = "roblox-emote-animationid-finder/1.0"


class AnimationServiceConfig(BaseSettings):
    """
    Configuration for the Animation Resolution Service.

    Reads from environment variables with ANIMATION_ prefix. The session
    credential is also read from the bare ROBLOSECURITY variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIMATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Server Identity
    server_name: str = Field(
        default="animation-resolution",
        description="Server name for identification",
    )
    server_version: str = Field(
        default="0.1.0",
        description="Server version",
    )

    # HTTP Transport
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind for HTTP transport",
    )
    port: int = Field(
        default=3000,
        description="Port for HTTP transport",
    )

    # Session credential
    roblosecurity: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("ROBLOSECURITY", "ANIMATION_ROBLOSECURITY", "roblosecurity"),
        description="Default .ROBLOSECURITY cookie value",
    )
    accept_credential_header: bool = Field(
        default=True,
        description="Allow a per-request credential header to override the default",
    )
    credential_header: str = Field(
        default="X-Roblox-Security",
        description="Request header carrying a per-request credential",
    )

    # Upstream
    asset_delivery_url: str = Field(
        default=DEFAULT_ASSET_DELIVERY_URL,
        description="Asset Delivery endpoint template, formatted with asset_id",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent sent on every outbound request",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Total timeout for each outbound request",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    def default_credential(self) -> str | None:
        """Return the configured credential, or None when unset or blank."""
        if self.roblosecurity is None:
            return None
        value = self.roblosecurity.get_secret_value().strip()
        return value or None


def load_config() -> AnimationServiceConfig:
    """Load configuration from environment."""
    return AnimationServiceConfig()
