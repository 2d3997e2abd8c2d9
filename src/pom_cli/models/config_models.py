"""Configuration models for the pom CLI.

Stored as JSON under the platform config directory and validated with
pydantic on every load and every ``pom config set``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from pom_cli.utils.durations import InvalidDurationError, parse_positive_duration


class TimerConfig(BaseModel):
    """Default durations for ``pom start``."""

    session: str = Field(default="25m", description="Focus duration")
    short_break: str = Field(default="5m", description="Short break duration")
    long_break: str = Field(default="15m", description="Long break duration")
    sessions_before_long_break: int = Field(default=4, ge=1)

    @field_validator("session", "short_break", "long_break")
    @classmethod
    def validate_duration(cls, v: str) -> str:
        """Reject anything ``pom start`` could not parse."""
        try:
            parse_positive_duration(v)
        except InvalidDurationError as e:
            raise ValueError(str(e)) from e
        return v


class NotificationConfig(BaseModel):
    """Desktop notification configuration."""

    enabled: bool = Field(default=True)
    title: str = Field(default="Pomodoro")


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["table", "json"] = Field(default="table")


class StorageConfig(BaseModel):
    """History database location. Empty means the platform data directory."""

    db_path: str = Field(default="")


class AppConfig(BaseModel):
    """Main application configuration."""

    timer: TimerConfig = Field(default_factory=TimerConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
