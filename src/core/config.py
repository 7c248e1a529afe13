"""
Settings for the citation export engine.

Values come from environment variables; a local .env file is loaded
first for development.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


class ExportSettings(BaseModel):
    """Environment-driven defaults for exports."""

    default_style: str = Field(
        default="bluebook",
        description="Citation style used when the caller does not pick one"
    )
    default_format: str = Field(
        default="txt",
        description="File encoding used when the caller does not pick one"
    )
    include_full_text: bool = Field(
        default=False,
        description="Whether exports include section text by default"
    )
    include_metadata: bool = Field(
        default=True,
        description="Whether exports include provenance metadata by default"
    )
    stale_threshold_days: int = Field(
        default=90,
        ge=1,
        description="Days after which a source is considered stale"
    )
    platform_name: str = Field(
        default="Civics Stack",
        description="Name printed in plain-text export banners"
    )

    @classmethod
    def from_env(cls) -> "ExportSettings":
        """Build settings from CITATION_EXPORT_* environment variables."""
        return cls(
            default_style=os.getenv("CITATION_EXPORT_DEFAULT_STYLE", "bluebook"),
            default_format=os.getenv("CITATION_EXPORT_DEFAULT_FORMAT", "txt"),
            include_full_text=_env_bool("CITATION_EXPORT_INCLUDE_FULL_TEXT", False),
            include_metadata=_env_bool("CITATION_EXPORT_INCLUDE_METADATA", True),
            stale_threshold_days=int(os.getenv("CITATION_EXPORT_STALE_DAYS", "90")),
            platform_name=os.getenv("CITATION_EXPORT_PLATFORM_NAME", "Civics Stack"),
        )

    def default_export_options(self):
        """Return ExportOptions seeded from these settings."""
        from src.export.models import ExportOptions

        return ExportOptions(
            citation_style=self.default_style,
            format=self.default_format,
            include_full_text=self.include_full_text,
            include_metadata=self.include_metadata,
        )


@lru_cache
def get_settings() -> ExportSettings:
    """Get cached settings instance."""
    return ExportSettings.from_env()
