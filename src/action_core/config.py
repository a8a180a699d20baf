"""Configuration for the action core.

Configuration is loaded from:
- environment variables prefixed with `ACTION_CORE_`
- and a local `.env` file (if present)

The core itself holds no state between invocations; settings only tune
logging and which registered actions are available.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ActionCoreSettings(BaseSettings):
    """Settings for the action core.

    Environment variables:
    - ACTION_CORE_LOG_LEVEL              (optional)
    - ACTION_CORE_PROGRESS_LOG_INTERVAL  (optional)
    - ACTION_CORE_LOG_RULE_PARAMETERS    (optional)
    - ACTION_CORE_DISABLED_ACTIONS       (optional, comma-separated)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ActionCoreSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )

    progress_log_interval: int = Field(
        default=0,
        ge=0,
        description="Log batch job progress every N attempted items (0 disables)",
    )

    log_rule_parameters: bool = Field(
        default=True,
        description=(
            "Include rule action parameter values when logging rejected parameters. "
            "Disable when parameters may carry personal data."
        ),
    )

    disabled_actions: str = Field(
        default="",
        description="Comma-separated action names that must not be registered",
    )

    model_config = SettingsConfigDict(
        env_prefix="ACTION_CORE_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def disabled_action_names(self) -> frozenset[str]:
        """Upper-cased names from `disabled_actions`."""

        parts = [p.strip().upper() for p in self.disabled_actions.split(",")]
        return frozenset(p for p in parts if p)
