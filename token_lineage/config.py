"""
Configuration management for token_lineage.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation.

The detection engine never reads configuration itself; CLI entry points
and the optional secondary-opinion collaborators read these settings and
pass thresholds explicitly.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from token_lineage.constants import (
    DEFAULT_LLM_MIN_CONFIDENCE,
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_SEMANTIC_THRESHOLD,
    DEFAULT_WORKERS,
    EMBEDDING_MODEL,
    LLM_MODEL,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Values are validated at load time; out-of-range thresholds fail fast.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # OpenAI Configuration
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key for the LLM and embedding second opinions",
    )
    llm_model: str = Field(
        default=LLM_MODEL,
        description="Chat model used for the LLM second opinion",
    )
    embedding_model: str = Field(
        default=EMBEDDING_MODEL,
        description="Embedding model used for description similarity",
    )

    # Matching thresholds
    min_confidence: int = Field(
        default=DEFAULT_MIN_CONFIDENCE,
        ge=0,
        le=100,
        description="Minimum fused confidence for a batch match",
    )
    llm_min_confidence: int = Field(
        default=DEFAULT_LLM_MIN_CONFIDENCE,
        ge=0,
        le=100,
        description="Minimum confidence for accepting an LLM verdict",
    )
    semantic_threshold: float = Field(
        default=DEFAULT_SEMANTIC_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity for a description match",
    )

    # Execution
    max_workers: int = Field(
        default=DEFAULT_WORKERS,
        ge=1,
        description="Worker threads for batch matching",
    )
    cache_dir: Path = Field(
        default=Path("data/cache"),
        description="Directory for the on-disk cache",
    )

    @field_validator("openai_api_key", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string values."""
        if isinstance(v, str):
            return v.strip()
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def get_openai_api_key() -> str:
    """Get OpenAI API key from settings."""
    key = get_settings().openai_api_key
    if not key:
        raise ValueError("OPENAI_API_KEY not set in .env file")
    return key


def get_min_confidence() -> int:
    """Get the default batch threshold."""
    return get_settings().min_confidence


def get_cache_dir() -> Path:
    """Get the on-disk cache directory."""
    return get_settings().cache_dir
