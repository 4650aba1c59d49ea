from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from gptrelay.llm.client import DEFAULT_ENDPOINT, DEFAULT_MODEL, RESPONSE_TIMEOUT_SECONDS

from .validator import (
    DISCORD_TOKEN_ENV,
    OPENAI_TIMEOUT_ENV,
    OPENAI_TOKEN_ENV,
    ConfigValidationError,
    validate_environment,
)

OPENAI_ENDPOINT_ENV = "OPENAI_ENDPOINT"
OPENAI_MODEL_ENV = "OPENAI_MODEL"
DEBUG_ENV = "DEBUG"


@dataclass(frozen=True)
class Settings:
    discord_token: str
    openai_token: str
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    timeout: float = RESPONSE_TIMEOUT_SECONDS
    debug: bool = False

    def __repr__(self) -> str:
        # keep tokens out of logs and tracebacks
        return (
            f"Settings(endpoint={self.endpoint!r}, model={self.model!r}, "
            f"timeout={self.timeout!r}, debug={self.debug!r})"
        )


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Public helper for loading startup settings.

    - Reads a `.env` file first when no mapping is given (set variables win).
    - Validates the environment.
    - Prints every problem on stdout and exits with code 1 if validation fails.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    try:
        validate_environment(env)
    except ConfigValidationError as e:
        for error in e.errors:
            print(error)
        sys.exit(1)

    return Settings(
        discord_token=env[DISCORD_TOKEN_ENV],
        openai_token=env[OPENAI_TOKEN_ENV],
        endpoint=env.get(OPENAI_ENDPOINT_ENV) or DEFAULT_ENDPOINT,
        model=env.get(OPENAI_MODEL_ENV) or DEFAULT_MODEL,
        timeout=float(env.get(OPENAI_TIMEOUT_ENV) or RESPONSE_TIMEOUT_SECONDS),
        debug=bool(env.get(DEBUG_ENV)),
    )
