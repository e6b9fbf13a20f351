"""RBAC settings.

Setup-time configuration for the resolver, loaded from environment
variables with the ``NEO_RBAC_`` prefix (and an optional ``.env`` file).
"""

from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RbacSettings(BaseSettings):
    """Settings for the RBAC resolver and its default HTTP authority."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_RBAC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True
    )

    # Remote authority
    url: Optional[str] = Field(default=None, description="Endpoint that resolves AuthItems")
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="Total remote call timeout")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra HTTP headers for the authority call")
    user_agent: str = Field(default="NeoMultiTenant-RBAC/0.1", description="User agent for HTTP requests")

    # Scheduling
    tick_interval_seconds: float = Field(default=0.05, gt=0, description="Delay between scheduler ticks")

    # Publication
    scope_name: Optional[str] = Field(default=None, description="Name the resolver is published under")

    @field_validator("url", "scope_name")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings from the environment as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError(f"Authority URL must be http(s), got: {v}")
        return v
