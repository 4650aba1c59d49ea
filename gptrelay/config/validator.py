"""
Environment validator for the bot's startup settings.

Checks that both credentials are present and that optional tunables parse.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping


logger = logging.getLogger(__name__)

DISCORD_TOKEN_ENV = "DISCORD_TOKEN"
OPENAI_TOKEN_ENV = "OPENAI_TOKEN"
OPENAI_TIMEOUT_ENV = "OPENAI_TIMEOUT"

REQUIRED_VARS = (
    (DISCORD_TOKEN_ENV, "Expected a discord token in the environment"),
    (OPENAI_TOKEN_ENV, "Expected an openai token in the environment"),
)


class ConfigValidationError(Exception):
    """Raised when the environment cannot produce usable settings."""

    def __init__(self, errors: list[str]):
        super().__init__(f"Config validation failed with {len(errors)} error(s)")
        self.errors = errors


def validate_environment(env: Mapping[str, str]) -> None:
    """
    Validate the variables the bot reads at startup.

    An empty value counts as missing.

    Raises:
        ConfigValidationError: listing every problem found
    """
    errors = []

    # ── Credentials ─────────────────────────────────────────────────────────
    for name, description in REQUIRED_VARS:
        if not env.get(name):
            errors.append(f"{description} ({name})")

    # ── Timeout ─────────────────────────────────────────────────────────────
    raw_timeout = env.get(OPENAI_TIMEOUT_ENV)
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            errors.append(f"'{OPENAI_TIMEOUT_ENV}' must be a number of seconds, got {raw_timeout!r}")
        else:
            if not math.isfinite(timeout) or timeout <= 0:
                errors.append(f"'{OPENAI_TIMEOUT_ENV}' must be a positive finite number, got {raw_timeout!r}")

    if errors:
        for error in errors:
            logger.debug("Config error: %s", error)
        raise ConfigValidationError(errors)
