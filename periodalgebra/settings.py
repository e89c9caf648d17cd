"""Runtime configuration loaded from the environment.

Values are read from ``PERIODALGEBRA_*`` environment variables (or a
``.env`` file in the working directory) through pydantic-settings.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from periodalgebra.precision import Precision


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PERIODALGEBRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Default precision for Interval.make() with date-only endpoints
    date_precision: Precision = Precision.DAY
    # Default precision for Interval.make() with datetime endpoints
    datetime_precision: Precision = Precision.SECOND
    # Reject mixed precisions in IntervalCollection.boundaries()
    strict_collection_precision: bool = False
    log_level: str = "WARNING"

    @field_validator("date_precision", "datetime_precision", mode="before")
    @classmethod
    def _parse_precision(cls, value: object) -> object:
        if isinstance(value, str):
            return Precision.parse(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return Settings()
