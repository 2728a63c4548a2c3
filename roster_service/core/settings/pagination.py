"""Pagination settings for API responses.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=50, PAGINATION_MAX_LIMIT=100
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size used when a request does not specify one.
        max_limit: Largest page size a request may ask for.

    Example:
        settings = PaginationSettings()
        size = min(requested_size, settings.max_limit)
    """

    default_limit: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Default page size when size not specified",
    )

    max_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum allowed page size",
    )

    @model_validator(mode="after")
    def validate_limits(self) -> PaginationSettings:
        """Ensure the default page size fits under the maximum."""
        if self.default_limit > self.max_limit:
            msg = f"default_limit ({self.default_limit}) cannot exceed max_limit ({self.max_limit})"
            raise ValueError(msg)
        return self

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
