"""Environment configuration for the facilitator process."""

from __future__ import annotations

from typing import List, Literal, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_UPSTREAM_FACILITATOR_URL

LogLevel = Literal["fatal", "error", "warn", "info", "debug", "trace", "silent"]


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class FacilitatorSettings(BaseSettings):
    """Facilitator settings read from the process environment."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        str_strip_whitespace=True,
    )

    port: int = Field(default=4070, gt=0)
    log_level: LogLevel = "info"
    facilitator_networks: str = "base-sepolia"
    facilitator_private_key: str = Field(min_length=1)
    allowed_origins: Optional[str] = None
    upstream_facilitator_url: str = DEFAULT_UPSTREAM_FACILITATOR_URL
    upstream_timeout_seconds: float = Field(default=30.0, gt=0)
    fee_payer_address: Optional[str] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def lower_log_level(cls, value):
        return value.lower() if isinstance(value, str) else value

    @property
    def networks(self) -> List[str]:
        return _split_list(self.facilitator_networks)

    @property
    def origins(self) -> List[str]:
        return _split_list(self.allowed_origins)


def load_settings(**overrides) -> FacilitatorSettings:
    """Load ``.env`` into the environment (without overriding it) and validate."""
    load_dotenv(find_dotenv(usecwd=True))
    return FacilitatorSettings(**overrides)
