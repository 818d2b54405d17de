"""Configuration module using Pydantic Settings."""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://www.expensify.com/api/v1/"


class ExpensifySettings(BaseSettings):
    """Partner credentials and endpoint settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EXPENSIFY_",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Partner credentials
    partner_password: str = Field(
        default="",
        validation_alias=AliasChoices("expensify_partner_password", "expensifyPartnerPassword"),
        description="Partner password issued by Expensify",
    )
    partner_name: str = Field(
        default="",
        validation_alias=AliasChoices("expensify_partner_name", "expensifyPartnerName"),
        description="Partner name issued by Expensify",
    )
    aes_key: str = Field(
        default="",
        validation_alias=AliasChoices("expensify_aes_key", "expensifyAesKey"),
        description="Hex-encoded 256-bit AES key",
    )
    aes_iv: str = Field(
        default="",
        validation_alias=AliasChoices("expensify_aes_iv", "expensifyAesIv"),
        description="Hex-encoded 128-bit AES initialization vector",
    )

    # Transport
    api_url: str = Field(default=DEFAULT_API_URL, description="Expensify API endpoint")
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
