from functools import lru_cache
import logging

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEVELOPMENT_ENVS = frozenset({"dev", "development", "local", "test"})


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    env: str = Field("development", alias="ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    configure_logging: bool = Field(False, alias="TABLE_CONFIGURE_LOGGING")

    # Debug rendering of cell values and column labels
    render_max_items: int = Field(50, alias="TABLE_RENDER_MAX_ITEMS")
    render_max_string: int = Field(4096, alias="TABLE_RENDER_MAX_STRING")

    # None = derived from ENV (strict in development/test, lenient elsewhere)
    strict_shape_checks_raw: bool | None = Field(None, alias="TABLE_STRICT_SHAPE_CHECKS")

    @field_validator("render_max_items", mode="after")
    @classmethod
    def _validate_max_items(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"TABLE_RENDER_MAX_ITEMS must be >= 1; got: {v!r}")
        return v

    @field_validator("render_max_string", mode="after")
    @classmethod
    def _validate_max_string(cls, v: int) -> int:
        if v < 8:
            raise ValueError(f"TABLE_RENDER_MAX_STRING must be >= 8; got: {v!r}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, v: str | None) -> str:
        val = (v or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(val), int):
            raise ValueError(f"LOG_LEVEL must be a standard logging level; got: {v!r}")
        return val

    @property
    def is_development(self) -> bool:
        return (self.env or "").strip().lower() in DEVELOPMENT_ENVS

    @property
    def strict_shape_checks(self) -> bool:
        """Whether key/record-shape mismatches raise instead of yielding ``None``.

        An explicit TABLE_STRICT_SHAPE_CHECKS wins; otherwise mismatches fail
        loudly in development-like environments only.
        """
        if self.strict_shape_checks_raw is not None:
            return self.strict_shape_checks_raw
        return self.is_development


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


settings = get_settings()
