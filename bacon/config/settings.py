"""Bacon configuration via environment / .env file."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BACON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Queries ---
    DEFAULT_CENTER: str = "Kevin Bacon"
    TOP_CENTERS_DEFAULT: int = 5
    HISTOGRAM_BUCKETS: int = 10

    # --- Vertex lookup ---
    # Tried once when a bare name is missing ("Kevin Bacon" -> "Kevin Bacon (I)")
    VERTEX_SUFFIX: str = " (I)"

    # --- Center suggestions when the requested center is missing ---
    SUGGEST_LIMIT: int = 20
    SUGGEST_MIN_MOVIES: int = 10

    # --- Ingestion ---
    HTTP_TIMEOUT: float = 60.0

    @field_validator("TOP_CENTERS_DEFAULT", "HISTOGRAM_BUCKETS", "SUGGEST_LIMIT")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("VERTEX_SUFFIX", mode="before")
    @classmethod
    def _pad_suffix(cls, v: str) -> str:
        # "(I)" from a .env file means " (I)"
        if v and not v.startswith(" "):
            return " " + v
        return v


settings = Settings()
