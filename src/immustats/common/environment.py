# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Environment-driven settings for immustats.

Each group of settings is a pydantic-settings class with its own environment
variable prefix, exposed through the module-level ``Environment`` object::

    from immustats.common.environment import Environment

    Environment.STATS.ACTIVE_CLIENT_WINDOW_HOURS

Example: ``IMMUSTATS_LOGGING_LEVEL=DEBUG`` raises console verbosity.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _LoggingSettings(BaseSettings):
    """Console logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="IMMUSTATS_LOGGING_",
        case_sensitive=False,
    )

    LEVEL: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level used by setup_rich_logging when no level is given",
    )
    MAX_CONSOLE_MESSAGE_LENGTH: int = Field(
        default=4096,
        ge=80,
        description="Messages longer than this are truncated on the console",
    )
    DEFAULT_CONSOLE_WIDTH: int = Field(
        default=120,
        ge=40,
        description="Console width assumed when the terminal size cannot be detected",
    )
    MIN_CONSOLE_INDENT_WRAP_WIDTH: int = Field(
        default=90,
        ge=40,
        description="Minimum console width at which wrapped lines are indented under the message",
    )


class _StatsSettings(BaseSettings):
    """Snapshot aggregation configuration."""

    model_config = SettingsConfigDict(
        env_prefix="IMMUSTATS_STATS_",
        case_sensitive=False,
    )

    ACTIVE_CLIENT_WINDOW_HOURS: float = Field(
        default=1.0,
        gt=0.0,
        description="A client is active if its last message is younger than this many hours",
    )


class _Environment(BaseSettings):
    """Root settings object grouping all immustats settings."""

    model_config = SettingsConfigDict(
        env_prefix="IMMUSTATS_",
        case_sensitive=False,
    )

    LOGGING: _LoggingSettings = Field(default_factory=_LoggingSettings)
    STATS: _StatsSettings = Field(default_factory=_StatsSettings)


Environment = _Environment()
