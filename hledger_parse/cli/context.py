"""
CLI context and configuration.

Manages CLI state, exit codes, and environment overrides.
"""

from __future__ import annotations

import os
from enum import IntEnum

from pydantic import BaseModel, Field

# Default input size limit (can be overridden via flag/env).
DEFAULT_MAX_BYTES = 100 * 1024 * 1024  # 100 MiB
MAX_BYTES_ENV = "HLEDGER_PARSE_MAX_BYTES"


class ExitCode(IntEnum):
    """CLI exit codes following Unix conventions."""

    SUCCESS = 0  # Journal parsed
    FATAL = 2  # Parse failure or unreadable file
    USAGE = 64  # Command line usage error
    CONFIG = 78  # Configuration error


class ConfigError(ValueError):
    """Invalid configuration value from the environment."""


class CliContext(BaseModel):
    """Shared context for CLI commands."""

    format: str = Field(default="terminal")
    color: bool = Field(default=True)
    quiet: bool = Field(default=False)
    max_bytes: int | None = Field(default=DEFAULT_MAX_BYTES)

    model_config = {"frozen": False}

    @classmethod
    def from_options(cls, max_bytes: int | None = None, **options: object) -> CliContext:
        """Build a context, resolving the size limit from flag, env, or default."""
        return cls(max_bytes=resolve_max_bytes(max_bytes), **options)


def resolve_max_bytes(max_bytes: int | None) -> int | None:
    """
    Resolve the input size limit.

    An explicit value wins, then ``HLEDGER_PARSE_MAX_BYTES``, then the
    default. Zero or a negative value means unlimited (None).

    Raises:
        ConfigError: If the environment value is not an integer
    """
    if max_bytes is not None:
        return None if max_bytes <= 0 else max_bytes

    env_value = os.environ.get(MAX_BYTES_ENV)
    if env_value:
        try:
            parsed = int(env_value)
        except ValueError:
            raise ConfigError(f"{MAX_BYTES_ENV} must be an integer, got {env_value!r}") from None
        return None if parsed <= 0 else parsed

    return DEFAULT_MAX_BYTES
