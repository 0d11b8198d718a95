"""
Gateway connection settings.

Values come from (highest priority first) explicit CLI options, the
process environment, and a ``.env`` file in the working directory.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_GATEWAY_URL = "http://localhost:18789"
DEFAULT_TIMEOUT_MS = 10_000

ENV_GATEWAY_URL = "NODEGATE_GATEWAY_URL"
ENV_GATEWAY_TOKEN = "NODEGATE_GATEWAY_TOKEN"
ENV_TIMEOUT_MS = "NODEGATE_TIMEOUT_MS"


class GatewaySettings(BaseModel):
    """Where and how to reach the gateway."""

    url: str = DEFAULT_GATEWAY_URL
    token: str | None = None
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)


def load_environment(env_file: Path | None = None) -> None:
    """Load a .env file without overriding variables already set."""
    load_dotenv(env_file or Path.cwd() / ".env", override=False)


def parse_timeout_ms(value: str | int | None) -> int | None:
    """Parse a millisecond timeout, rejecting non-positive or non-numeric input."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"timeout must be an integer number of ms, got {value!r}")
    if parsed <= 0:
        raise ValueError(f"timeout must be positive, got {parsed}")
    return parsed


def load_settings(
    url: str | None = None,
    token: str | None = None,
    timeout_ms: str | int | None = None,
) -> GatewaySettings:
    """
    Build GatewaySettings from CLI overrides and the environment.

    Args:
        url: Explicit gateway URL (wins over NODEGATE_GATEWAY_URL).
        token: Explicit gateway token (wins over NODEGATE_GATEWAY_TOKEN).
        timeout_ms: Explicit timeout in ms (wins over NODEGATE_TIMEOUT_MS).

    Raises:
        ValueError: If a timeout value is not a positive integer.
    """
    resolved_timeout = parse_timeout_ms(timeout_ms)
    if resolved_timeout is None:
        resolved_timeout = parse_timeout_ms(os.getenv(ENV_TIMEOUT_MS))

    return GatewaySettings(
        url=(url or os.getenv(ENV_GATEWAY_URL) or DEFAULT_GATEWAY_URL).rstrip("/"),
        token=token or os.getenv(ENV_GATEWAY_TOKEN) or None,
        timeout_ms=resolved_timeout or DEFAULT_TIMEOUT_MS,
    )
