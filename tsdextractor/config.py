"""
Configuration management for the TSD extractor.

This module uses pydantic-settings to manage all configuration aspects including:
- Normalization blocklists and parser backend
- Density analyzer debugging toggles
- HTTP fetching used by the command line entry point
- Logging

Configuration is loaded from environment variables (prefix ``TSD_``, nested
sections separated by ``__``) or a ``.env`` file.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_IGNORE_TAGS = [
    "style", "script", "link", "video", "iframe",
    "source", "picture", "header", "noscript",
]

DEFAULT_IGNORE_CLASSES = [
    "share", "contribution", "copyright", "copy-right", "disclaimer",
    "recommend", "related", "footer", "comment", "social", "submeta",
    "report-infor",
]

DEFAULT_REMOVABLE_IF_EMPTY = [
    "section", "h1", "h2", "h3", "h4", "h5", "h6", "span",
]


class LogLevel(str, Enum):
    """Log levels supported by the application."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ExtractorConfig(BaseModel):
    """Configuration for a single extraction run."""
    # BeautifulSoup tree builder; "html.parser" keeps a missing <body> missing
    parser: str = "html.parser"

    debug: bool = False
    """Log every scored node with its intermediate statistics."""

    compute_density_std: bool = False
    """Compute the corpus standard deviation of text densities. Reported in
    debug logging only; it does not take part in the score."""

    ignore_tags: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_TAGS))
    ignore_classes: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_CLASSES))
    removable_if_empty: List[str] = Field(
        default_factory=lambda: list(DEFAULT_REMOVABLE_IF_EMPTY)
    )

    @field_validator("ignore_tags", "ignore_classes", "removable_if_empty")
    @classmethod
    def _normalize_names(cls, v: List[str]) -> List[str]:
        """Lowercase and strip entries, dropping blanks."""
        return [item.strip().lower() for item in v if item and item.strip()]


class FetchConfig(BaseModel):
    """Configuration for fetching pages over HTTP."""
    user_agent: Optional[str] = None
    timeout_seconds: float = 30.0
    retry_attempts: int = 3
    retry_min_wait: float = 1.0
    retry_max_wait: float = 10.0
    retry_multiplier: float = 1.0

    @model_validator(mode="after")
    def _sanity_checks(self) -> "FetchConfig":
        """Basic sanity checks to keep misconfigurations from blowing up."""
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.retry_attempts <= 0:
            raise ValueError("retry_attempts must be positive")
        if self.retry_min_wait > self.retry_max_wait:
            raise ValueError("retry_min_wait must not exceed retry_max_wait")
        return self


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    log_level: LogLevel = LogLevel.INFO
    structured_logging: bool = False


class Settings(BaseSettings):
    """Main settings class for the TSD extractor."""
    # Application metadata
    app_name: str = "tsdextractor"
    version: str = "0.1.0"

    # Component configurations
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="TSD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )


def load_settings() -> Settings:
    """Load settings from environment variables and .env file."""
    return Settings()
