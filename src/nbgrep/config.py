"""Configuration management for nbgrep."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NbgrepConfig(BaseSettings):
    """Default search options loaded from environment variables.

    Environment variables should be prefixed with NBGREP_
    Example: NBGREP_COLOR=never

    Command-line flags always take precedence over these values.

    Attributes:
        color: When to highlight matches (never, always, auto)
        show_filenames: When to prefix matches with the file name
        line_info: Default level of positional detail (0-4)
        output_types: Output MIME types searched when none are given
        jobs: Number of notebooks searched concurrently
        log_level: Logging level for diagnostics on stderr
    """

    color: Literal["never", "always", "auto"] = Field(
        default="auto",
        description="When to color matches",
    )
    show_filenames: Literal["never", "always", "auto"] = Field(
        default="auto",
        description="When to show the file name with each match",
    )
    line_info: int = Field(
        default=0,
        ge=0,
        le=4,
        description="Default level of match location detail",
    )
    output_types: list[str] = Field(
        default_factory=lambda: ["text/plain"],
        description="Output types searched by default",
    )
    jobs: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Number of notebooks searched concurrently",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NBGREP_",
        case_sensitive=False,
        extra="ignore",
    )


# Global config instance (lazy-loaded)
_config: NbgrepConfig | None = None


def get_config() -> NbgrepConfig:
    """Get or create the global configuration instance.

    Returns:
        NbgrepConfig: The configuration object
    """
    global _config
    if _config is None:
        _config = NbgrepConfig()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
