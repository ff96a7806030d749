# ------------------------------------------------------------
# Module: completion_client/core/config.py
# Purpose: Central, typed client settings (code-only defaults; opt-in env reader).
# ------------------------------------------------------------

"""Typed configuration hub for the completion client.

Responsibilities
----------------
- Provide strongly-typed endpoint, credential, timeout, and logging knobs.
- Normalize the API base URL once so endpoint helpers can simply append paths.
- Offer `settings_from_env()` for callers that want OS environment overrides.

Notes
-----
- Importing this module never reads the environment; `settings` holds
  code-only defaults. Use `settings_from_env()` explicitly (the CLI does).
- Extras are forbidden to surface typos/unknown keys early.
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field, field_validator

# Environment variables understood by `settings_from_env()`.
ENV_KEYS: dict[str, str] = {
    "API_KEY": "OPENAI_API_KEY",
    "ORGANIZATION": "OPENAI_ORGANIZATION",
    "API_BASE_URL": "COMPLETION_API_BASE",
    "DEFAULT_ENGINE": "COMPLETION_ENGINE",
    "LOG_LEVEL": "COMPLETION_LOG_LEVEL",
}


class Settings(BaseModel):
    """
    Client configuration with code-only defaults.

    Notes
    -----
    - `API_BASE_URL` always ends with a slash after validation.
    - `STREAM_CONNECT_TIMEOUT` bounds only the connect phase of streaming
      calls; the read phase is unbounded so long generations are not cut off.
    """

    model_config = dict(extra="forbid")

    # Endpoint / credentials
    API_BASE_URL: str = "https://api.openai.com/v1/"
    API_KEY: str | None = None
    ORGANIZATION: str | None = None
    DEFAULT_ENGINE: str = Field("davinci", min_length=1)

    # Transport knobs passed straight to `requests`
    REQUEST_TIMEOUT: float = Field(60.0, gt=0, description="Non-streaming timeout (s)")
    STREAM_CONNECT_TIMEOUT: float = Field(
        5.0, gt=0, description="Connect timeout for streaming calls (s)"
    )

    # Logging toggles
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    MUTE_ALL_LOGS: bool = False

    # Accept host[:port] or full URLs; normalize to scheme + trailing slash.
    @field_validator("API_BASE_URL", mode="before")
    @classmethod
    def _coerce_base_url(cls, v: str | None):
        from completion_client.client.http import base_url

        return base_url(v)

    # Blank credentials from env/CLI are treated as "not configured".
    @field_validator("API_KEY", "ORGANIZATION", mode="before")
    @classmethod
    def _blank_to_none(cls, v: str | None):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: str):
        return v.upper() if isinstance(v, str) else v


# Eagerly instantiate once at import; code-only defaults.
settings = Settings()


def settings_from_env(environ: dict[str, str] | None = None, **overrides) -> Settings:
    """Create a Settings instance with OS environment values and explicit overrides.

    Explicit keyword overrides win over the environment; unset variables keep
    the code-only defaults.
    """
    env = os.environ if environ is None else environ
    values: dict = {}
    for field, var in ENV_KEYS.items():
        raw = env.get(var)
        if raw is not None and raw != "":
            values[field] = raw
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
