"""Pydantic configuration models for moodlog."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class PathsConfig(BaseModel):
    """File paths configuration."""

    db_path: Path = Path("~/moodlog/journal.db")
    log_file: Optional[Path] = None  # JSON log file; off unless set

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.db_path = self.db_path.expanduser()
        if self.log_file is not None:
            self.log_file = self.log_file.expanduser()
        return self


class PaginationConfig(BaseModel):
    """Listing and search page sizes."""

    default_limit: int = 10
    max_limit: int = 100

    @model_validator(mode="after")
    def validate_limits(self):
        if not 1 <= self.default_limit <= self.max_limit:
            raise ValueError(
                f"default_limit must be between 1 and max_limit ({self.max_limit}), "
                f"got {self.default_limit}"
            )
        return self


class RateLimitConfig(BaseModel):
    """Per-owner write limits for the web API."""

    max_writes: int = Field(10, ge=1)
    window_seconds: int = Field(60, ge=1)


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class MoodlogConfig(BaseModel):
    """Main configuration model."""

    owner: str = "local"
    paths: PathsConfig = Field(default_factory=PathsConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("owner")
    @classmethod
    def validate_owner(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("owner must not be empty")
        return v

    @classmethod
    def from_dict(cls, data: dict) -> "MoodlogConfig":
        """Create config from dict, accepting string paths."""
        if "paths" in data:
            for key in ["db_path", "log_file"]:
                if key in data["paths"] and isinstance(data["paths"][key], str):
                    data["paths"][key] = Path(data["paths"][key])
        return cls.model_validate(data)
